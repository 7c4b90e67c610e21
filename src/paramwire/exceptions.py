from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typing_extensions import Self

    from paramwire.descriptors import ParameterDescriptor

CONFIG_PATH_SEPARATOR = " → "


class ParamWireError(Exception):
    """Represent a base class for all paramwire-specific failures.

    Catch this type when you want to handle any paramwire error path without
    matching each concrete exception class individually.
    """


class ParamWireInvalidDescriptorError(ParamWireError):
    """Signal that a callable cannot be described as a parameter list.

    Raised by ``describe_callable`` when ``inspect.signature`` rejects the
    callable, or when resolution metadata is attached to a variadic parameter.
    """


class ParamWireInvalidStrategyError(ParamWireError):
    """Signal an object that cannot be installed in a resolver chain.

    Raised by ``ResolverChain`` composition methods when the object does not
    implement ``attempt``, for example when a strategy identifier configured
    for ``ResolverChain.from_lookup`` points at an unrelated entry.
    """


class ParamWireResolutionError(ParamWireError):
    """Represent a failure while resolving a single parameter.

    Every resolution error carries the failing descriptor together with the
    ``provided_parameters`` mapping supplied by the caller and the
    ``resolved_parameters`` accumulated so far in the current call. Both
    mappings are the objects used during resolution, kept as-is for
    diagnostics.

    ``descriptor`` is ``None`` only for errors raised outside of a chain, for
    example by ``ConfigPathResolver.resolve`` called directly.
    """

    def __init__(
        self,
        message: str,
        *,
        descriptor: ParameterDescriptor | None = None,
        provided_parameters: Mapping[Any, Any] | None = None,
        resolved_parameters: Mapping[int, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.descriptor = descriptor
        self.provided_parameters: Mapping[Any, Any] = (
            provided_parameters if provided_parameters is not None else {}
        )
        self.resolved_parameters: Mapping[int, Any] = (
            resolved_parameters if resolved_parameters is not None else {}
        )

    def with_context(
        self,
        *,
        descriptor: ParameterDescriptor,
        provided_parameters: Mapping[Any, Any],
        resolved_parameters: Mapping[int, Any],
    ) -> Self:
        """Return a copy of this error bound to a resolution context.

        Args:
            descriptor: Descriptor of the parameter being resolved.
            provided_parameters: Values supplied by the caller.
            resolved_parameters: Values resolved earlier in the same call.

        """
        error = self._copy_with_message(self._contextual_message(descriptor))
        error.descriptor = descriptor
        error.provided_parameters = provided_parameters
        error.resolved_parameters = resolved_parameters
        return error

    def _copy_with_message(self, message: str) -> Self:
        error = type(self).__new__(type(self))
        error.__dict__.update(self.__dict__)
        error.message = message
        error.args = (message,)
        return error

    def _contextual_message(self, descriptor: ParameterDescriptor) -> str:
        return (
            f"An error occurred while resolving parameter #{descriptor.position + 1} "
            f"'{descriptor.name}'{_declaring_suffix(descriptor)}: {self.message}"
        )


class ParamWireUnresolvableError(ParamWireResolutionError):
    """Signal that no strategy, default value, or nullability applied.

    Typical fixes include passing the value explicitly, registering the
    parameter type in the lookup service, giving the parameter a default, or
    declaring it ``Optional``.
    """

    @classmethod
    def for_parameter(
        cls,
        descriptor: ParameterDescriptor,
        provided_parameters: Mapping[Any, Any],
        resolved_parameters: Mapping[int, Any],
    ) -> Self:
        """Build the error for a parameter that could not be resolved.

        Args:
            descriptor: Descriptor of the unresolved parameter.
            provided_parameters: Values supplied by the caller.
            resolved_parameters: Values resolved earlier in the same call.

        """
        message = (
            f"Cannot resolve parameter #{descriptor.position + 1} "
            f"'{descriptor.name}'{_declaring_suffix(descriptor)}."
        )
        return cls(
            message,
            descriptor=descriptor,
            provided_parameters=provided_parameters,
            resolved_parameters=resolved_parameters,
        )


class ParamWireTypeMismatchError(ParamWireResolutionError):
    """Signal that a strategy produced a value incompatible with the declared type.

    Values are never coerced: the first strategy with an opinion decides the
    value, and that value must satisfy the declared type.
    """

    def __init__(
        self,
        message: str,
        *,
        value: Any = None,
        descriptor: ParameterDescriptor | None = None,
        provided_parameters: Mapping[Any, Any] | None = None,
        resolved_parameters: Mapping[int, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            descriptor=descriptor,
            provided_parameters=provided_parameters,
            resolved_parameters=resolved_parameters,
        )
        self.value = value

    @classmethod
    def for_value(
        cls,
        descriptor: ParameterDescriptor,
        provided_parameters: Mapping[Any, Any],
        resolved_parameters: Mapping[int, Any],
        value: Any,
    ) -> Self:
        """Build the error for a resolved value rejected by the declared type.

        Args:
            descriptor: Descriptor of the parameter whose value was rejected.
            provided_parameters: Values supplied by the caller.
            resolved_parameters: Values resolved earlier in the same call.
            value: The offending value.

        """
        message = (
            f"Argument #{descriptor.position + 1} '{descriptor.name}'"
            f"{_declaring_suffix(descriptor)} must be of type {descriptor.declared_type}, "
            f"given {_describe_value_type(value)}."
        )
        return cls(
            message,
            value=value,
            descriptor=descriptor,
            provided_parameters=provided_parameters,
            resolved_parameters=resolved_parameters,
        )


class ParamWireConfigPathError(ParamWireResolutionError):
    """Represent a failed traversal of a configuration path.

    ``path`` holds every segment of the requested path and ``consumed`` the
    segments reported in the message. ``consumed_path`` renders them joined
    with ``" → "``.

    Raised as-is when a configuration node itself fails while being read
    (for example a lazy mapping whose backend is unavailable); the original
    error is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Sequence[str] = (),
        consumed: Sequence[str] = (),
        descriptor: ParameterDescriptor | None = None,
        provided_parameters: Mapping[Any, Any] | None = None,
        resolved_parameters: Mapping[int, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            descriptor=descriptor,
            provided_parameters=provided_parameters,
            resolved_parameters=resolved_parameters,
        )
        self.path = tuple(path)
        self.consumed = tuple(consumed)

    @property
    def consumed_path(self) -> str:
        return CONFIG_PATH_SEPARATOR.join(self.consumed)

    @classmethod
    def for_failure(
        cls,
        path: Sequence[str],
        consumed: Sequence[str],
        error: BaseException,
    ) -> Self:
        """Build the error for a configuration node that raised while being read.

        Args:
            path: Every segment of the requested path.
            consumed: Segments up to and including the one being read.
            error: Error raised by the configuration node.

        """
        message = (
            f"Failed to read config key: {CONFIG_PATH_SEPARATOR.join(consumed)}: "
            f"{type(error).__name__}: {error}"
        )
        return cls(message, path=path, consumed=consumed)


class ParamWireConfigPathMissingError(ParamWireConfigPathError):
    """Signal that a configuration path segment is absent.

    The consumed path includes the missing segment.
    """

    @classmethod
    def for_path(cls, path: Sequence[str], consumed: Sequence[str]) -> Self:
        """Build the error for a missing key."""
        message = f"Undefined config key: {CONFIG_PATH_SEPARATOR.join(consumed)}"
        return cls(message, path=path, consumed=consumed)


class ParamWireConfigPathInaccessibleError(ParamWireConfigPathError):
    """Signal that traversal reached a node that cannot be indexed.

    The consumed path excludes the segment that could not be applied.
    """

    @classmethod
    def for_path(cls, path: Sequence[str], consumed: Sequence[str]) -> Self:
        """Build the error for a non-indexable node."""
        message = (
            f"Config value at path '{CONFIG_PATH_SEPARATOR.join(consumed)}' is not accessible"
        )
        return cls(message, path=path, consumed=consumed)


class ParamWireLookupServiceError(ParamWireResolutionError):
    """Signal that the lookup service failed while fetching an identifier.

    The original error is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        identifier: str,
        descriptor: ParameterDescriptor | None = None,
        provided_parameters: Mapping[Any, Any] | None = None,
        resolved_parameters: Mapping[int, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            descriptor=descriptor,
            provided_parameters=provided_parameters,
            resolved_parameters=resolved_parameters,
        )
        self.identifier = identifier

    @classmethod
    def for_failure(
        cls,
        *,
        identifier: str,
        error: BaseException,
        descriptor: ParameterDescriptor,
        provided_parameters: Mapping[Any, Any],
        resolved_parameters: Mapping[int, Any] | None = None,
    ) -> Self:
        """Build the error wrapping a lookup service failure.

        Args:
            identifier: Identifier requested from the lookup service.
            error: Error raised by the lookup service.
            descriptor: Descriptor of the parameter being resolved.
            provided_parameters: Values supplied by the caller.
            resolved_parameters: Values resolved earlier in the same call.

        """
        message = (
            f"Lookup service failed to provide '{identifier}' for parameter "
            f"#{descriptor.position + 1} '{descriptor.name}'{_declaring_suffix(descriptor)}: "
            f"{type(error).__name__}: {error}"
        )
        return cls(
            message,
            identifier=identifier,
            descriptor=descriptor,
            provided_parameters=provided_parameters,
            resolved_parameters=resolved_parameters,
        )


def _declaring_suffix(descriptor: ParameterDescriptor) -> str:
    if descriptor.declaring is None:
        return ""
    return f" of '{descriptor.declaring}()'"


def _describe_value_type(value: Any) -> str:
    if value is None:
        return "None"
    value_type = type(value)
    if value_type.__module__ == "builtins":
        return value_type.__qualname__
    return f"{value_type.__module__}.{value_type.__qualname__}"
