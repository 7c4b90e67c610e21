from __future__ import annotations

import types
from typing import Any, TypeGuard, Union

_BUILTINS_MODULE = "builtins"

UNION_ORIGINS: tuple[Any, ...] = (Union, types.UnionType)
"""Values of ``get_origin`` for ``Union[...]`` and ``X | Y`` annotations."""


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_named_type(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a non-builtin runtime class."""
    return is_runtime_class(candidate) and candidate.__module__ != _BUILTINS_MODULE


def canonical_type_name(candidate: type[Any]) -> str:
    """Return the ``module.qualname`` identifier of a class.

    Args:
        candidate: Class whose identifier is built.

    """
    return f"{candidate.__module__}.{candidate.__qualname__}"


__all__ = [
    "UNION_ORIGINS",
    "canonical_type_name",
    "is_named_type",
    "is_runtime_class",
]
