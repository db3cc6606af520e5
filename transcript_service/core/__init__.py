"""
Core functionality for the transcript cleaner.

This package contains URL validation, text normalization, rate limiting
and the request pipeline.
"""
