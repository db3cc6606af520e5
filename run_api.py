"""
FastAPI server entry point for the transcript cleaner service.
"""

import argparse
import uvicorn

from transcript_service.config import APP_NAME, APP_VERSION, load_settings


def main():
    """Run the FastAPI server."""
    settings = load_settings()

    # Parse command line arguments
    parser = argparse.ArgumentParser(description=f"{APP_NAME} API")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind the server to")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to bind the server to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    args = parser.parse_args()

    # Print startup info
    print(f"Starting {APP_NAME} API server v{APP_VERSION}")
    print(f"Environment: {settings.environment}")
    print(f"Binding to: {args.host}:{args.port}")

    # Run the server
    uvicorn.run(
        "transcript_service.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
