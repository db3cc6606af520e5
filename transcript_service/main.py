"""
Command line entry point: print the cleaned transcript of a YouTube video.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from transcript_service.config import Settings, load_settings
from transcript_service.core.pipeline import TranscriptPipeline
from transcript_service.models.schemas import TranscriptResult
from transcript_service.services.captions import CaptionsChecker
from transcript_service.services.transcript_fetcher import TranscriptFetcher
from transcript_service.utils.errors import ServiceError
from transcript_service.utils.logger import logging


def build_pipeline(settings: Settings) -> TranscriptPipeline:
    return TranscriptPipeline(
        CaptionsChecker(settings.youtube_api_key, timeout=settings.captions_timeout),
        TranscriptFetcher(timeout=settings.transcript_timeout),
    )


def save_result(result: TranscriptResult, output_file: str, as_json: bool = False) -> Path:
    """Write the transcript (or the full result as JSON) to a file."""
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        if as_json:
            json.dump(result.model_dump(), f, indent=2, ensure_ascii=False)
        else:
            f.write(result.transcript)

    logging.info(f"Transcript saved to: {output_path}")
    return output_path


def main(argv: Optional[list] = None) -> int:
    """Main function to run the pipeline from the command line."""
    parser = argparse.ArgumentParser(description="YouTube Transcript Cleaner")
    parser.add_argument("url", help="YouTube video URL")
    parser.add_argument("--output", help="Output file path for the transcript")
    parser.add_argument("--json", action="store_true", help="Output the full result as JSON")
    args = parser.parse_args(argv)

    settings = load_settings()
    pipeline = build_pipeline(settings)

    try:
        result = pipeline.process(args.url)
    except ServiceError as e:
        print(f"{e.code}: {e.message}", file=sys.stderr)
        if settings.expose_error_details and e.details:
            print(e.details, file=sys.stderr)
        return 1

    if args.output:
        save_result(result, args.output, as_json=args.json)
    elif args.json:
        print(json.dumps(result.model_dump(), indent=2, ensure_ascii=False))
    else:
        print(result.transcript)

    return 0


if __name__ == "__main__":
    sys.exit(main())
