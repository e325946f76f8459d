"""Nominatim geocoding provider."""

from .api import Provider

__all__ = ["Provider"]
