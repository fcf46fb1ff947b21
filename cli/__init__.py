"""Command-line interface for Quote Widget."""
