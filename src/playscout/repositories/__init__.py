"""Database repositories."""

from playscout.repositories.shows import ShowRepository

__all__ = ["ShowRepository"]
