"""Command line interface for yeson."""
