from __future__ import annotations

import inspect
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, NamedTuple, TypeVar, get_args, get_origin

from paramwire._internal.type_checks import UNION_ORIGINS, is_named_type, is_runtime_class
from paramwire.markers import strip_annotated

T = TypeVar("T")

_NONE_TYPE = type(None)

class ResolvedPair(NamedTuple):
    """A resolved value bound to the position of its parameter."""

    position: int
    value: Any


@dataclass(frozen=True, slots=True)
class TypeSpec:
    """Describe the declared type of a parameter as an ordered set of members.

    A single member is a named type, several members form a union. Member
    order follows the declaration and is significant for scanning and lookup
    strategies. ``None`` is never a member; nullability lives on the
    descriptor.
    """

    members: tuple[Any, ...]

    def __post_init__(self) -> None:
        if not self.members:
            msg = "TypeSpec requires at least one member type."
            raise ValueError(msg)

    @classmethod
    def of(cls, *members: Any) -> TypeSpec:
        """Build a spec from member annotations in declaration order."""
        return cls(members=tuple(members))

    @classmethod
    def from_annotation(cls, annotation: Any) -> tuple[TypeSpec | None, bool]:
        """Normalize a parameter annotation into a spec and a nullability flag.

        ``Annotated`` wrappers are stripped, nested unions are flattened, and
        ``None`` members are removed and reported through the returned flag.

        Args:
            annotation: Annotation value to inspect or normalize.

        """
        if annotation is inspect.Parameter.empty:
            return None, False

        members: list[Any] = []
        nullable = False
        for member in _flatten_union(annotation):
            if member is None or member is _NONE_TYPE:
                nullable = True
                continue
            if member not in members:
                members.append(member)

        if not members:
            return None, nullable
        return cls(members=tuple(members)), nullable

    @property
    def is_union(self) -> bool:
        return len(self.members) > 1

    def named_types(self) -> Iterator[type[Any]]:
        """Yield non-builtin runtime classes in declaration order."""
        for member in self.members:
            member = strip_annotated(member)
            if is_named_type(member):
                yield member

    def __iter__(self) -> Iterator[Any]:
        return iter(self.members)

    def __str__(self) -> str:
        return " | ".join(_render_member(member) for member in self.members)


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    """Read-only view of one formal parameter of a callable."""

    name: str
    """Parameter name as declared in the signature."""
    position: int
    """0-based position in the signature; the join key of resolved mappings."""
    declared_type: TypeSpec | None = None
    """Declared type, or ``None`` when the parameter is not annotated."""
    has_default: bool = False
    """Whether the parameter declares a default value."""
    default: Any = None
    """Default value, meaningful only when ``has_default`` is true."""
    allows_null: bool = False
    """Whether ``None`` is an acceptable value."""
    metadata: Mapping[type[Any], Any] = field(default_factory=dict)
    """Declarative markers keyed by marker type, at most one per type."""
    declaring: str | None = None
    """Qualified name of the declaring callable, used in error messages."""

    def __post_init__(self) -> None:
        if self.position < 0:
            msg = f"Parameter position must be non-negative, got {self.position}."
            raise ValueError(msg)

    def get_metadata(self, kind: type[T]) -> T | None:
        """Return the attached marker of the given kind, if any.

        Args:
            kind: Marker type to look up.

        """
        return self.metadata.get(kind)


def _flatten_union(annotation: Any) -> Iterator[Any]:
    annotation = strip_annotated(annotation)
    if get_origin(annotation) in UNION_ORIGINS:
        for member in get_args(annotation):
            yield from _flatten_union(member)
        return
    yield annotation


def _render_member(member: Any) -> str:
    if is_runtime_class(member):
        return member.__qualname__
    if isinstance(member, str):
        return member
    return repr(member).removeprefix("typing.")
