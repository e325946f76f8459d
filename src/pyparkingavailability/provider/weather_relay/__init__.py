"""Weather relay provider."""

from .api import Provider

__all__ = ["Provider"]
