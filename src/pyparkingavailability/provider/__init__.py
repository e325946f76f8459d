"""Data source providers."""
