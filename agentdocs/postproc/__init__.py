"""Host document post-processing helpers."""

from .markers import MarkerManager, has_existing_index, inject_index, remove_index

__all__ = ["MarkerManager", "has_existing_index", "inject_index", "remove_index"]
