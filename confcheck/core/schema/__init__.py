"""
Configuration schemas (ordered FieldSpec tables).
"""

from .config_schema import ConfigSchema

__all__ = [
    "ConfigSchema",
]
