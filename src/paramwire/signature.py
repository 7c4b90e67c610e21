from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from inspect import Parameter
from typing import Any, get_type_hints

from paramwire.descriptors import ParameterDescriptor, TypeSpec
from paramwire.exceptions import ParamWireInvalidDescriptorError
from paramwire.markers import extract_markers

_VARIADIC_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)


@dataclass(slots=True)
class ParameterDescriptorExtractor:
    """Build parameter descriptors from a callable's signature and annotations.

    Annotations are resolved with ``get_type_hints(include_extras=True)`` so
    ``Annotated`` markers survive. When hints cannot be evaluated (for
    example, a forward reference to an undefined name) the raw signature
    annotation is used instead. Unresolved string annotations are kept as
    type names when they are plain dotted names and ignored otherwise.

    Variadic parameters (``*args``/``**kwargs``) are not described, and their
    positions are skipped.
    """

    def describe(self, callable_obj: Callable[..., Any]) -> tuple[ParameterDescriptor, ...]:
        """Return descriptors for every non-variadic parameter of a callable.

        Args:
            callable_obj: Function, method, class or callable instance to describe.

        """
        declaring = self._callable_name(callable_obj)
        try:
            signature = inspect.signature(callable_obj)
        except (TypeError, ValueError) as error:
            msg = f"Unable to read the signature of '{declaring}': {error}"
            raise ParamWireInvalidDescriptorError(msg) from error

        annotations = self._resolved_type_hints(callable_obj)
        descriptors: list[ParameterDescriptor] = []
        for position, parameter in enumerate(signature.parameters.values()):
            annotation = annotations.get(parameter.name, self._raw_annotation(parameter))
            metadata = extract_markers(annotation)
            if parameter.kind in _VARIADIC_KINDS:
                if metadata:
                    msg = (
                        f"Variadic parameter '{parameter.name}' of '{declaring}' cannot carry "
                        "resolution markers."
                    )
                    raise ParamWireInvalidDescriptorError(msg)
                continue

            declared_type, nullable = TypeSpec.from_annotation(annotation)
            has_default = parameter.default is not Parameter.empty
            default = parameter.default if has_default else None
            descriptors.append(
                ParameterDescriptor(
                    name=parameter.name,
                    position=position,
                    declared_type=declared_type,
                    has_default=has_default,
                    default=default,
                    # `x: T = None` accepts None like an explicit Optional[T].
                    allows_null=nullable or (has_default and default is None),
                    metadata=metadata,
                    declaring=declaring,
                ),
            )
        return tuple(descriptors)

    def _raw_annotation(self, parameter: Parameter) -> Any:
        annotation = parameter.annotation
        if isinstance(annotation, str) and not _is_type_name(annotation):
            return Parameter.empty
        return annotation

    def _resolved_type_hints(self, callable_obj: Callable[..., Any]) -> dict[str, Any]:
        target: Any = callable_obj
        if inspect.isclass(callable_obj):
            target = callable_obj.__init__
        elif not (inspect.isfunction(callable_obj) or inspect.ismethod(callable_obj)):
            target = getattr(callable_obj, "__call__", callable_obj)  # noqa: B004
        try:
            return get_type_hints(target, include_extras=True)
        except (AttributeError, NameError, TypeError):
            return {}

    def _callable_name(self, callable_obj: Callable[..., Any]) -> str:
        return getattr(callable_obj, "__qualname__", repr(callable_obj))


def _is_type_name(annotation: str) -> bool:
    return bool(annotation) and all(part.isidentifier() for part in annotation.split("."))


def describe_callable(callable_obj: Callable[..., Any]) -> tuple[ParameterDescriptor, ...]:
    """Return descriptors for the parameters of a callable.

    Args:
        callable_obj: Function, method, class or callable instance to describe.

    """
    return ParameterDescriptorExtractor().describe(callable_obj)


__all__ = ["ParameterDescriptorExtractor", "describe_callable"]
