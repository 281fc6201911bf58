"""
Import-path utilities.

Rule files refer to types and delegate functions by dotted path
("package.module.Name"); these helpers turn such paths into objects.
"""

import importlib
import re
from typing import Any

_DOTTED_PATH = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def is_dotted_path(path: str) -> bool:
    """
    Check whether a string looks like a Python import path.

    Examples:
        >>> is_dotted_path("collections.abc.Mapping")
        True
        >>> is_dotted_path("not a path")
        False
    """
    return isinstance(path, str) and bool(_DOTTED_PATH.match(path))


def import_object(path: str) -> Any:
    """
    Import an object given its dotted path.

    The longest importable module prefix is imported and the remaining
    parts are resolved as attributes, so nested classes work too.

    Args:
        path: Dotted path, e.g. "collections.OrderedDict"

    Returns:
        The object the path refers to

    Raises:
        LookupError: If the path is malformed or cannot be resolved

    Examples:
        >>> import_object("collections.OrderedDict").__name__
        'OrderedDict'
    """
    if not is_dotted_path(path):
        raise LookupError(f"'{path}' is not a valid import path")

    parts = path.split(".")
    for split in range(len(parts), 0, -1):
        module_name = ".".join(parts[:split])
        try:
            obj = importlib.import_module(module_name)
        except ImportError:
            continue
        for attr in parts[split:]:
            try:
                obj = getattr(obj, attr)
            except AttributeError:
                raise LookupError(f"'{module_name}' has no attribute path '{path[len(module_name) + 1:]}'") from None
        return obj

    # Names without a module part, e.g. "int"
    builtins = importlib.import_module("builtins")
    if len(parts) == 1 and hasattr(builtins, parts[0]):
        return getattr(builtins, parts[0])
    raise LookupError(f"cannot import '{path}'")
