"""Command line presentation layer."""
