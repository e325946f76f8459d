"""Static demo lot provider."""

from .api import Provider

__all__ = ["Provider"]
