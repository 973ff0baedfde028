"""Command-line interface for liftcoach."""
