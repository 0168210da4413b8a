"""Command line interface for tinymlp."""
