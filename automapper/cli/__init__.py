"""Command line interface for automapper."""
