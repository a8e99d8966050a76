"""CLI for relstore."""
