from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from paramwire._internal.type_checks import canonical_type_name
from paramwire.config_path import ConfigPathResolver
from paramwire.descriptors import ParameterDescriptor, ResolvedPair
from paramwire.exceptions import ParamWireConfigPathError, ParamWireLookupServiceError
from paramwire.lookup import LookupService
from paramwire.markers import Config, Inject
from paramwire.type_matcher import is_instance_of


@runtime_checkable
class Strategy(Protocol):
    """One resolution algorithm of a ``ResolverChain``.

    ``attempt`` returns a ``ResolvedPair`` when the strategy determines the
    value, or ``None`` when it has no opinion. A pair holding ``None`` is a
    legitimate resolution to ``None``. Strategies must not keep per-call state.

    Resolution errors raised from ``attempt`` carry the descriptor and the
    provided values; the chain attaches the values resolved so far.
    """

    def attempt(
        self,
        descriptor: ParameterDescriptor,
        provided: Mapping[Any, Any],
    ) -> ResolvedPair | None:
        """Try to resolve a parameter.

        Args:
            descriptor: Descriptor of the parameter being resolved.
            provided: Values supplied by the caller, keyed by name, position,
                type identifier or class.

        """
        ...


@dataclass(frozen=True, slots=True)
class ProvidedValueLookup:
    """Resolve from provided values by parameter name, then by position.

    Presence is checked by key, so a provided ``None`` resolves the parameter.
    """

    def attempt(
        self,
        descriptor: ParameterDescriptor,
        provided: Mapping[Any, Any],
    ) -> ResolvedPair | None:
        if descriptor.name in provided:
            return ResolvedPair(descriptor.position, provided[descriptor.name])
        if descriptor.position in provided:
            return ResolvedPair(descriptor.position, provided[descriptor.position])
        return None


@dataclass(frozen=True, slots=True)
class TypeScanLookup:
    """Resolve from provided values by the parameter's declared class.

    For each non-builtin class of the declared type, in declaration order,
    the provided values are checked for a key equal to the class identifier
    (``module.qualname``), then for the class itself, then scanned in
    insertion order for the first instance of the class.
    """

    def attempt(
        self,
        descriptor: ParameterDescriptor,
        provided: Mapping[Any, Any],
    ) -> ResolvedPair | None:
        if descriptor.declared_type is None:
            return None

        for named_type in descriptor.declared_type.named_types():
            type_name = canonical_type_name(named_type)
            if type_name in provided:
                return ResolvedPair(descriptor.position, provided[type_name])
            if named_type in provided:
                return ResolvedPair(descriptor.position, provided[named_type])
            for value in provided.values():
                if is_instance_of(value, named_type):
                    return ResolvedPair(descriptor.position, value)
        return None


@dataclass(frozen=True, slots=True)
class ExplicitIdentifierLookup:
    """Resolve parameters marked with ``Inject("identifier")`` from the lookup service.

    ``Inject()`` without an identifier yields no opinion.
    """

    lookup: LookupService

    def attempt(
        self,
        descriptor: ParameterDescriptor,
        provided: Mapping[Any, Any],
    ) -> ResolvedPair | None:
        marker = descriptor.get_metadata(Inject)
        if marker is None or not marker.identifier:
            return None
        value = _fetch(self.lookup, marker.identifier, descriptor=descriptor, provided=provided)
        return ResolvedPair(descriptor.position, value)


@dataclass(frozen=True, slots=True)
class ConfigPathLookup:
    """Resolve parameters marked with ``Config(path)`` from a configuration resource.

    The resource named by ``Config.root_key`` is fetched from the lookup
    service and traversed with ``ConfigPathResolver``. A missing or
    inaccessible path is a hard failure, never a fallthrough.
    """

    lookup: LookupService
    path_resolver: ConfigPathResolver = field(default_factory=ConfigPathResolver)

    def attempt(
        self,
        descriptor: ParameterDescriptor,
        provided: Mapping[Any, Any],
    ) -> ResolvedPair | None:
        marker = descriptor.get_metadata(Config)
        if marker is None:
            return None

        root = _fetch(self.lookup, marker.root_key, descriptor=descriptor, provided=provided)
        try:
            value = self.path_resolver.resolve(root, marker.segments)
        except ParamWireConfigPathError as error:
            raise error.with_context(
                descriptor=descriptor,
                provided_parameters=provided,
                resolved_parameters={},
            ) from error
        return ResolvedPair(descriptor.position, value)


@dataclass(frozen=True, slots=True)
class LookupServiceByType:
    """Resolve from the lookup service by the declared class identifier.

    Each non-builtin class of the declared type is tried in declaration order
    as ``module.qualname``; the first identifier the service has wins.
    """

    lookup: LookupService

    def attempt(
        self,
        descriptor: ParameterDescriptor,
        provided: Mapping[Any, Any],
    ) -> ResolvedPair | None:
        if descriptor.declared_type is None:
            return None

        for named_type in descriptor.declared_type.named_types():
            identifier = canonical_type_name(named_type)
            if _has(self.lookup, identifier, descriptor=descriptor, provided=provided):
                value = _fetch(self.lookup, identifier, descriptor=descriptor, provided=provided)
                return ResolvedPair(descriptor.position, value)
        return None


@dataclass(frozen=True, slots=True)
class DefaultValueFallback:
    """Resolve to the declared default value when one exists."""

    def attempt(
        self,
        descriptor: ParameterDescriptor,
        provided: Mapping[Any, Any],
    ) -> ResolvedPair | None:
        if descriptor.has_default:
            return ResolvedPair(descriptor.position, descriptor.default)
        return None


@dataclass(frozen=True, slots=True)
class NullableFallback:
    """Resolve to ``None`` when the parameter accepts ``None``."""

    def attempt(
        self,
        descriptor: ParameterDescriptor,
        provided: Mapping[Any, Any],
    ) -> ResolvedPair | None:
        if descriptor.allows_null:
            return ResolvedPair(descriptor.position, None)
        return None


def lookup_service_strategies(lookup: LookupService) -> tuple[Strategy, ...]:
    """Return the lookup-service-backed strategies in their standard order.

    Configuration paths come first, then explicit identifiers, then
    declared-type lookup.

    Args:
        lookup: Lookup service shared by the strategies.

    """
    return (
        ConfigPathLookup(lookup),
        ExplicitIdentifierLookup(lookup),
        LookupServiceByType(lookup),
    )


def _has(
    lookup: LookupService,
    identifier: str,
    *,
    descriptor: ParameterDescriptor,
    provided: Mapping[Any, Any],
) -> bool:
    try:
        return bool(lookup.has(identifier))
    except Exception as error:
        raise ParamWireLookupServiceError.for_failure(
            identifier=identifier,
            error=error,
            descriptor=descriptor,
            provided_parameters=provided,
        ) from error


def _fetch(
    lookup: LookupService,
    identifier: str,
    *,
    descriptor: ParameterDescriptor,
    provided: Mapping[Any, Any],
) -> Any:
    try:
        return lookup.get(identifier)
    except Exception as error:
        raise ParamWireLookupServiceError.for_failure(
            identifier=identifier,
            error=error,
            descriptor=descriptor,
            provided_parameters=provided,
        ) from error


__all__ = [
    "ConfigPathLookup",
    "DefaultValueFallback",
    "ExplicitIdentifierLookup",
    "LookupServiceByType",
    "NullableFallback",
    "ProvidedValueLookup",
    "Strategy",
    "TypeScanLookup",
    "lookup_service_strategies",
]
