"""Command-line interface for podgrid."""
