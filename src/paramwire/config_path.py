from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from paramwire.exceptions import (
    ParamWireConfigPathError,
    ParamWireConfigPathInaccessibleError,
    ParamWireConfigPathMissingError,
)
from paramwire.integrations.pydantic import (
    is_pydantic_model,
    model_field_names,
    model_field_value,
)

_MISSING: Any = object()
_NOT_INDEXABLE: Any = object()


@runtime_checkable
class SupportsKeyedAccess(Protocol):
    """Keyed container that is neither a mapping nor a sequence.

    Any object implementing both ``__contains__`` and ``__getitem__`` can be
    traversed by ``ConfigPathResolver``.
    """

    def __contains__(self, key: object, /) -> bool: ...

    def __getitem__(self, key: Any, /) -> Any: ...


class ConfigPathResolver:
    """Walk a segmented path through nested configuration data.

    Supported nodes are mappings, sequences (segments are decimal indexes),
    Pydantic models (fields are keys) and any object implementing
    ``SupportsKeyedAccess``. Strings and bytes are leaves.

    Failures report the consumed segments joined with ``" → "``:
    a missing key includes the failing segment, a non-indexable node
    excludes it.
    """

    @staticmethod
    def split(path: str | Sequence[str | int], *, split_on_dot: bool = True) -> tuple[str, ...]:
        """Normalize a path into a tuple of segments.

        Args:
            path: Dotted string or sequence of literal segments. Non-string
                segments such as list indexes are converted with ``str``.
            split_on_dot: Whether a string path is split on ``.``.

        """
        if isinstance(path, str):
            return tuple(path.split(".")) if split_on_dot else (path,)
        return tuple(str(segment) for segment in path)

    def resolve(self, root: Any, path: str | Sequence[str | int]) -> Any:
        """Return the value found at path inside root.

        Args:
            root: Nested configuration data.
            path: Segments to follow, or a dotted string.

        Raises:
            ParamWireConfigPathInaccessibleError: A node on the path cannot be indexed.
            ParamWireConfigPathMissingError: A segment is absent from its node.
            ParamWireConfigPathError: A node raised while being read.

        """
        segments = self.split(path)
        cursor = root
        for consumed_count, segment in enumerate(segments, start=1):
            try:
                value = self._step(cursor, segment)
            except Exception as error:
                raise ParamWireConfigPathError.for_failure(
                    segments,
                    segments[:consumed_count],
                    error,
                ) from error
            if value is _NOT_INDEXABLE:
                raise ParamWireConfigPathInaccessibleError.for_path(
                    segments,
                    segments[: consumed_count - 1],
                )
            if value is _MISSING:
                raise ParamWireConfigPathMissingError.for_path(
                    segments,
                    segments[:consumed_count],
                )
            cursor = value
        return cursor

    def _step(self, node: Any, segment: str) -> Any:
        if isinstance(node, str | bytes | bytearray):
            return _NOT_INDEXABLE
        if isinstance(node, Mapping):
            return self._step_mapping(node, segment)
        if is_pydantic_model(node):
            if segment in model_field_names(node):
                return model_field_value(node, segment)
            return _MISSING
        if isinstance(node, Sequence):
            return self._step_sequence(node, segment)
        if isinstance(node, SupportsKeyedAccess):
            if segment in node:
                return node[segment]
            return _MISSING
        return _NOT_INDEXABLE

    def _step_mapping(self, node: Mapping[Any, Any], segment: str) -> Any:
        if segment in node:
            return node[segment]
        if segment.isdecimal() and int(segment) in node:
            return node[int(segment)]
        return _MISSING

    def _step_sequence(self, node: Sequence[Any], segment: str) -> Any:
        if not segment.isdecimal():
            return _MISSING
        index = int(segment)
        if index >= len(node):
            return _MISSING
        return node[index]


__all__ = ["ConfigPathResolver", "SupportsKeyedAccess"]
