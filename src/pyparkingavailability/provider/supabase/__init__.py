"""Supabase parking view provider."""

from .api import Provider

__all__ = ["Provider"]
