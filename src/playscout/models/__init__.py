"""SQLAlchemy ORM models."""

from playscout.models.base import Base
from playscout.models.show import LifecycleState, Show

__all__ = ["Base", "LifecycleState", "Show"]
