"""
Shared helpers.
"""

from .imports import import_object, is_dotted_path

__all__ = [
    "import_object",
    "is_dotted_path",
]
