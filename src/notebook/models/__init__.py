"""Data models for the notebook CLI."""
