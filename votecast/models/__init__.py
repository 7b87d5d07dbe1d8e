"""ORM models package."""
from .base import Base
from .vote import Party, Vote

__all__ = ["Base", "Party", "Vote"]
