from collections.abc import Sequence
from typing import Annotated, Any, NamedTuple, get_args, get_origin

from paramwire._internal.type_checks import UNION_ORIGINS

DEFAULT_CONFIG_ROOT_KEY = "config"


class Inject(NamedTuple):
    """Resolve a parameter from the lookup service by explicit identifier.

    Attach ``Inject`` metadata with ``typing.Annotated``. Without an
    identifier the marker has no effect: declared-type lookup is handled by
    ``LookupServiceByType``, never by guessing from the parameter name.

    Examples:
        .. code-block:: python

            from typing import Annotated


            def handler(logger: Annotated[Logger, Inject("custom.logger")]) -> None: ...

    """

    identifier: str | None = None


class Config(NamedTuple):
    """Resolve a parameter from a nested configuration resource.

    ``path`` is either a dotted string (``"database.host"``) or a sequence of
    literal segments; integer segments address list items. With
    ``split_on_dot=False`` a string path is used as a single literal key.
    ``root_key`` names the configuration resource fetched from the lookup
    service.

    Examples:
        .. code-block:: python

            from typing import Annotated


            def connect(
                host: Annotated[str, Config("database.host")],
                dsn: Annotated[str, Config("db.primary", split_on_dot=False)],
            ) -> None: ...

    """

    path: str | Sequence[str | int]
    root_key: str = DEFAULT_CONFIG_ROOT_KEY
    split_on_dot: bool = True

    @property
    def segments(self) -> tuple[str, ...]:
        """Return the path as a tuple of segments."""
        if isinstance(self.path, str):
            if self.split_on_dot:
                return tuple(self.path.split("."))
            return (self.path,)
        return tuple(str(segment) for segment in self.path)


MARKER_TYPES: tuple[type[Any], ...] = (Inject, Config)
"""Metadata kinds collected from ``Annotated`` parameter annotations."""


def extract_markers(annotation: Any) -> dict[type[Any], Any]:
    """Return marker instances found in ``Annotated`` metadata, keyed by marker type.

    Union members are searched as well, so ``Optional[Annotated[T, marker]]``
    (which ``get_type_hints`` produces for ``= None`` defaults on Python 3.10)
    keeps its markers. Only the first instance of each marker type is kept,
    in declaration order.

    Args:
        annotation: Annotation value to inspect.

    """
    markers: dict[type[Any], Any] = {}
    _collect_markers(annotation, markers)
    return markers


def _collect_markers(annotation: Any, markers: dict[type[Any], Any]) -> None:
    origin = get_origin(annotation)
    if origin is Annotated:
        inner, *metadata = get_args(annotation)
        for item in metadata:
            marker_type = type(item)
            if marker_type in MARKER_TYPES:
                markers.setdefault(marker_type, item)
        _collect_markers(inner, markers)
    elif origin in UNION_ORIGINS:
        for member in get_args(annotation):
            _collect_markers(member, markers)


def strip_annotated(annotation: Any) -> Any:
    """Recursively unwrap Annotated[T, ...] into T."""
    if get_origin(annotation) is not Annotated:
        return annotation
    return strip_annotated(get_args(annotation)[0])
