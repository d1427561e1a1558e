"""Command-line interface for lcicodec."""
