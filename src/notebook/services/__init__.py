"""Service layer for the notebook CLI."""
