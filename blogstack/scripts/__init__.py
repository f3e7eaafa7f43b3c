"""Command line tooling."""
