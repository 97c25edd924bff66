"""Application models package."""

from container_tracker.models.container import Container, ContainerHistory, ContainerType
from container_tracker.models.user import User

__all__ = ["User", "Container", "ContainerHistory", "ContainerType"]
