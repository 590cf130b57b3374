"""Repository interfaces (ports) for Pomotask CLI."""

from .repository import TaskRepository

__all__ = ["TaskRepository"]
