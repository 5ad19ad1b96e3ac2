"""
Repository base classes.
"""

from tripdesk.repositories.base.base_repository import BaseRepository, ModelType

__all__ = ["BaseRepository", "ModelType"]
