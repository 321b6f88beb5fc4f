"""Command line tools for Sassify."""
