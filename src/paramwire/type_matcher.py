from __future__ import annotations

from typing import Annotated, Any, Literal, TypeVar, get_args, get_origin

from paramwire._internal.type_checks import UNION_ORIGINS, is_runtime_class
from paramwire.descriptors import TypeSpec

# Implicit promotions accepted by type checkers (PEP 484 numeric tower).
_NUMERIC_PROMOTIONS: dict[type[Any], tuple[type[Any], ...]] = {
    float: (int,),
    complex: (int, float),
}


class TypeMatcher:
    """Check runtime values against declared parameter types.

    Matching is nominal: a value matches a class when it is an instance of
    that class or of a subclass. A union matches when any member matches,
    checked in declaration order. ``None`` is not special-cased here; callers
    decide whether ``None`` is acceptable through descriptor nullability.

    Annotations that cannot be checked at runtime (unbound ``TypeVar``,
    non-runtime-checkable protocols) are accepted rather than rejected.
    """

    def match(self, type_spec: TypeSpec, value: Any) -> bool:
        """Return whether value satisfies any member of the type spec.

        Args:
            type_spec: Declared type to check against.
            value: Runtime value to check.

        """
        return any(self.match_member(member, value) for member in type_spec.members)

    def match_member(self, member: Any, value: Any) -> bool:
        """Return whether value satisfies a single annotation member.

        Args:
            member: Annotation member, usually a class.
            value: Runtime value to check.

        """
        if member is Any or member is object:
            return True

        origin = get_origin(member)
        if origin is Annotated:
            return self.match_member(get_args(member)[0], value)
        if origin is Literal:
            return any(
                value == literal and type(value) is type(literal) for literal in get_args(member)
            )
        if origin in UNION_ORIGINS:
            return any(self.match_member(arg, value) for arg in get_args(member))
        if origin is not None:
            return is_runtime_class(origin) and self._is_instance(value, origin)

        if isinstance(member, TypeVar):
            return self._match_type_var(member, value)
        if isinstance(member, str):
            return self._match_type_name(member, value)

        supertype = getattr(member, "__supertype__", None)
        if supertype is not None:
            return self.match_member(supertype, value)

        if is_runtime_class(member):
            if self._is_instance(value, member):
                return True
            return isinstance(value, _NUMERIC_PROMOTIONS.get(member, ())) and not isinstance(
                value,
                bool,
            )
        return False

    def _match_type_var(self, type_var: TypeVar, value: Any) -> bool:
        if type_var.__bound__ is not None:
            return self.match_member(type_var.__bound__, value)
        if type_var.__constraints__:
            return any(
                self.match_member(constraint, value) for constraint in type_var.__constraints__
            )
        return True

    def _match_type_name(self, type_name: str, value: Any) -> bool:
        for candidate in type(value).__mro__:
            if type_name in {
                candidate.__name__,
                candidate.__qualname__,
                f"{candidate.__module__}.{candidate.__qualname__}",
            }:
                return True
        return False

    def _is_instance(self, value: Any, cls: type[Any]) -> bool:
        try:
            return isinstance(value, cls)
        except TypeError:
            # Protocols without @runtime_checkable refuse isinstance checks.
            return True


def is_instance_of(value: Any, cls: type[Any]) -> bool:
    """Return ``isinstance(value, cls)``, treating uncheckable classes as no match.

    Args:
        value: Runtime value to check.
        cls: Class to check.

    """
    try:
        return isinstance(value, cls)
    except TypeError:
        return False


__all__ = ["TypeMatcher", "is_instance_of"]
