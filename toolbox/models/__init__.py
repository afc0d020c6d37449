"""
Pydantic models for the toolbox storage layer.
"""

from .storage_object import StorageObject

__all__ = [
    "StorageObject",
]
