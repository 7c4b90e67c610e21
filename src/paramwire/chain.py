from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from paramwire.config_path import ConfigPathResolver
from paramwire.descriptors import ParameterDescriptor, ResolvedPair
from paramwire.exceptions import (
    ParamWireConfigPathMissingError,
    ParamWireInvalidStrategyError,
    ParamWireResolutionError,
    ParamWireTypeMismatchError,
    ParamWireUnresolvableError,
)
from paramwire.lookup import LookupService
from paramwire.markers import DEFAULT_CONFIG_ROOT_KEY
from paramwire.signature import ParameterDescriptorExtractor
from paramwire.strategies import (
    DefaultValueFallback,
    NullableFallback,
    ProvidedValueLookup,
    Strategy,
    TypeScanLookup,
    lookup_service_strategies,
)
from paramwire.type_matcher import TypeMatcher

logger = logging.getLogger(__name__)

RESOLVERS_CONFIG_KEY = "paramwire.resolvers"
"""Configuration key listing lookup identifiers of extra strategies for ``from_lookup``."""


class ResolverChain:
    """Resolve parameter values through an ordered list of strategies.

    For each parameter the strategies are asked in order and the first one
    with an opinion decides the value. When none has an opinion the chain
    falls back to the provided value with the parameter's exact name, then to
    the default value, then to ``None`` for nullable parameters. Every
    resolved value is checked against the declared type; ``None`` passes only
    when the parameter is nullable.

    A chain is built once during composition and then shared. In-place
    mutation (``append``/``prepend``/``extend``) is not synchronized and must
    not overlap with resolution calls. The ``with_*`` variants return an
    independent copy and leave the original untouched; strategies themselves
    are shared between copies.

    Examples:
        .. code-block:: python

            chain = ResolverChain.create_defaults(lookup)
            values = chain.resolve_callable(handler, {"user_id": 42})
            handler(*values.values())

    """

    def __init__(
        self,
        strategies: Iterable[Strategy] = (),
        *,
        type_matcher: TypeMatcher | None = None,
        descriptor_extractor: ParameterDescriptorExtractor | None = None,
    ) -> None:
        self._strategies: list[Strategy] = [_checked(strategy) for strategy in strategies]
        self._type_matcher = type_matcher if type_matcher is not None else TypeMatcher()
        self._descriptor_extractor = (
            descriptor_extractor
            if descriptor_extractor is not None
            else ParameterDescriptorExtractor()
        )

    @classmethod
    def create_defaults(cls, lookup: LookupService | None = None) -> ResolverChain:
        """Build the standard chain.

        The order is: provided values by name or position, provided values by
        declared class, the lookup-service strategies when ``lookup`` is given
        (configuration path, explicit identifier, declared class), default
        value, ``None`` for nullable parameters.

        Args:
            lookup: Optional lookup service backing the container strategies.

        """
        strategies: list[Strategy] = [ProvidedValueLookup(), TypeScanLookup()]
        if lookup is not None:
            strategies.extend(lookup_service_strategies(lookup))
        strategies.extend((DefaultValueFallback(), NullableFallback()))
        chain = cls(strategies)
        logger.debug("Created default resolver chain: %s", chain._describe_strategies())
        return chain

    @classmethod
    def from_lookup(
        cls,
        lookup: LookupService,
        *,
        root_key: str = DEFAULT_CONFIG_ROOT_KEY,
        resolvers_key: str = RESOLVERS_CONFIG_KEY,
    ) -> ResolverChain:
        """Build a chain from strategies registered in a lookup service.

        The configuration resource ``root_key`` may list strategy identifiers
        under ``resolvers_key``; each one is fetched from the lookup service
        and installed in order. The lookup-service strategies are appended
        last. Missing configuration means no extra strategies.

        Args:
            lookup: Lookup service holding the configuration and strategies.
            root_key: Identifier of the configuration resource.
            resolvers_key: Literal configuration key listing strategy identifiers.

        """
        chain = cls()
        for identifier in cls._configured_strategy_identifiers(lookup, root_key, resolvers_key):
            chain.append(lookup.get(identifier))
        chain.extend(lookup_service_strategies(lookup))
        logger.debug(
            "Created resolver chain from lookup service: %s",
            chain._describe_strategies(),
        )
        return chain

    @property
    def strategies(self) -> tuple[Strategy, ...]:
        """Return a snapshot of the installed strategies in resolution order."""
        return tuple(self._strategies)

    def append(self, strategy: Strategy) -> None:
        """Install a strategy at the end of the chain.

        Args:
            strategy: Strategy to install.

        """
        self._strategies.append(_checked(strategy))

    def prepend(self, strategy: Strategy) -> None:
        """Install a strategy at the start of the chain.

        Args:
            strategy: Strategy to install.

        """
        self._strategies.insert(0, _checked(strategy))

    def extend(self, strategies: Iterable[Strategy], *, prepend: bool = False) -> None:
        """Install several strategies, keeping their relative order.

        Args:
            strategies: Strategies to install.
            prepend: Install them before the existing strategies instead of after.

        """
        checked = [_checked(strategy) for strategy in strategies]
        if prepend:
            self._strategies[:0] = checked
        else:
            self._strategies.extend(checked)

    def with_appended(self, strategy: Strategy) -> ResolverChain:
        """Return a copy of the chain with a strategy installed at the end."""
        copy = self._copy()
        copy.append(strategy)
        return copy

    def with_prepended(self, strategy: Strategy) -> ResolverChain:
        """Return a copy of the chain with a strategy installed at the start."""
        copy = self._copy()
        copy.prepend(strategy)
        return copy

    def with_strategies(
        self,
        strategies: Iterable[Strategy],
        *,
        prepend: bool = False,
    ) -> ResolverChain:
        """Return a copy of the chain with several strategies installed.

        Args:
            strategies: Strategies to install, in order.
            prepend: Install them before the existing strategies instead of after.

        """
        copy = self._copy()
        copy.extend(strategies, prepend=prepend)
        return copy

    def has(self, strategy: Strategy | type[Any]) -> bool:
        """Return whether a strategy instance or a strategy of a given class is installed.

        Instances are compared by identity, classes with ``isinstance``.

        Args:
            strategy: Strategy instance or strategy class.

        """
        if isinstance(strategy, type):
            return any(isinstance(installed, strategy) for installed in self._strategies)
        return any(installed is strategy for installed in self._strategies)

    def resolve_one(
        self,
        descriptor: ParameterDescriptor,
        provided: Mapping[Any, Any] | None = None,
        resolved: Mapping[int, Any] | None = None,
    ) -> ResolvedPair:
        """Resolve a single parameter.

        Args:
            descriptor: Descriptor of the parameter to resolve.
            provided: Values supplied by the caller.
            resolved: Values resolved earlier in the same call, keyed by position.

        Raises:
            ParamWireTypeMismatchError: The resolved value does not satisfy the declared type.
            ParamWireUnresolvableError: No strategy or fallback produced a value.
            ParamWireResolutionError: A strategy failed, for example on a config path.

        """
        provided = provided if provided is not None else {}
        resolved = resolved if resolved is not None else {}

        for strategy in self._strategies:
            try:
                pair = strategy.attempt(descriptor, provided)
            except ParamWireResolutionError as error:
                if error.descriptor is descriptor:
                    error.resolved_parameters = resolved
                raise
            if pair is not None:
                return self._validated(descriptor, pair, provided, resolved)

        pair = self._fallback(descriptor, provided)
        if pair is not None:
            return self._validated(descriptor, pair, provided, resolved)

        raise ParamWireUnresolvableError.for_parameter(descriptor, provided, resolved)

    def resolve_all(
        self,
        descriptors: Iterable[ParameterDescriptor],
        provided: Mapping[Any, Any] | None = None,
    ) -> dict[int, Any]:
        """Resolve every parameter of a signature.

        Parameters are resolved in ascending position order. Resolution stops
        at the first error; partial results travel only inside the raised
        error.

        Args:
            descriptors: Descriptors of the signature's parameters.
            provided: Values supplied by the caller.

        """
        provided = provided if provided is not None else {}
        resolved: dict[int, Any] = {}
        for descriptor in sorted(descriptors, key=lambda item: item.position):
            pair = self.resolve_one(descriptor, provided, resolved)
            resolved[pair.position] = pair.value
        return resolved

    def resolve_callable(
        self,
        callable_obj: Callable[..., Any],
        provided: Mapping[Any, Any] | None = None,
    ) -> dict[int, Any]:
        """Describe a callable's parameters and resolve all of them.

        Args:
            callable_obj: Function, method, class or callable instance.
            provided: Values supplied by the caller.

        """
        descriptors = self._descriptor_extractor.describe(callable_obj)
        return self.resolve_all(descriptors, provided)

    def _fallback(
        self,
        descriptor: ParameterDescriptor,
        provided: Mapping[Any, Any],
    ) -> ResolvedPair | None:
        if descriptor.name in provided:
            return ResolvedPair(descriptor.position, provided[descriptor.name])
        if descriptor.has_default:
            return ResolvedPair(descriptor.position, descriptor.default)
        if descriptor.allows_null:
            return ResolvedPair(descriptor.position, None)
        return None

    def _validated(
        self,
        descriptor: ParameterDescriptor,
        pair: ResolvedPair,
        provided: Mapping[Any, Any],
        resolved: Mapping[int, Any],
    ) -> ResolvedPair:
        if descriptor.declared_type is None:
            return pair
        if pair.value is None and descriptor.allows_null:
            return pair
        if self._type_matcher.match(descriptor.declared_type, pair.value):
            return pair
        raise ParamWireTypeMismatchError.for_value(descriptor, provided, resolved, pair.value)

    def _copy(self) -> ResolverChain:
        copy = type(self).__new__(type(self))
        copy._strategies = list(self._strategies)
        copy._type_matcher = self._type_matcher
        copy._descriptor_extractor = self._descriptor_extractor
        return copy

    def _describe_strategies(self) -> str:
        return ", ".join(type(strategy).__name__ for strategy in self._strategies)

    @staticmethod
    def _configured_strategy_identifiers(
        lookup: LookupService,
        root_key: str,
        resolvers_key: str,
    ) -> tuple[str, ...]:
        if not lookup.has(root_key):
            return ()
        config = lookup.get(root_key)
        try:
            identifiers = ConfigPathResolver().resolve(config, (resolvers_key,))
        except ParamWireConfigPathMissingError:
            return ()
        if identifiers is None:
            return ()
        if isinstance(identifiers, str):
            return (identifiers,)
        return tuple(identifiers)

    def __iter__(self) -> Iterator[Strategy]:
        return iter(tuple(self._strategies))

    def __len__(self) -> int:
        return len(self._strategies)

    def __repr__(self) -> str:
        return f"{type(self).__name__}([{self._describe_strategies()}])"


def _checked(strategy: Any) -> Strategy:
    if not callable(getattr(strategy, "attempt", None)):
        msg = (
            f"Resolver chain strategies must implement 'attempt', got {strategy!r}. "
            "Check the configured strategy identifiers."
        )
        raise ParamWireInvalidStrategyError(msg)
    return strategy


__all__ = ["RESOLVERS_CONFIG_KEY", "ResolverChain"]
