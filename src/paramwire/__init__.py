from paramwire.chain import RESOLVERS_CONFIG_KEY, ResolverChain
from paramwire.config_path import ConfigPathResolver, SupportsKeyedAccess
from paramwire.descriptors import ParameterDescriptor, ResolvedPair, TypeSpec
from paramwire.exceptions import (
    ParamWireConfigPathError,
    ParamWireConfigPathInaccessibleError,
    ParamWireConfigPathMissingError,
    ParamWireError,
    ParamWireInvalidDescriptorError,
    ParamWireInvalidStrategyError,
    ParamWireLookupServiceError,
    ParamWireResolutionError,
    ParamWireTypeMismatchError,
    ParamWireUnresolvableError,
)
from paramwire.lookup import LookupService, MappingLookupService
from paramwire.markers import Config, Inject
from paramwire.signature import ParameterDescriptorExtractor, describe_callable
from paramwire.strategies import (
    ConfigPathLookup,
    DefaultValueFallback,
    ExplicitIdentifierLookup,
    LookupServiceByType,
    NullableFallback,
    ProvidedValueLookup,
    Strategy,
    TypeScanLookup,
    lookup_service_strategies,
)
from paramwire.type_matcher import TypeMatcher

__all__ = [
    "RESOLVERS_CONFIG_KEY",
    "Config",
    "ConfigPathLookup",
    "ConfigPathResolver",
    "DefaultValueFallback",
    "ExplicitIdentifierLookup",
    "Inject",
    "LookupService",
    "LookupServiceByType",
    "MappingLookupService",
    "NullableFallback",
    "ParamWireConfigPathError",
    "ParamWireConfigPathInaccessibleError",
    "ParamWireConfigPathMissingError",
    "ParamWireError",
    "ParamWireInvalidDescriptorError",
    "ParamWireInvalidStrategyError",
    "ParamWireLookupServiceError",
    "ParamWireResolutionError",
    "ParamWireTypeMismatchError",
    "ParamWireUnresolvableError",
    "ParameterDescriptor",
    "ParameterDescriptorExtractor",
    "ProvidedValueLookup",
    "ResolvedPair",
    "ResolverChain",
    "Strategy",
    "SupportsKeyedAccess",
    "TypeMatcher",
    "TypeScanLookup",
    "TypeSpec",
    "describe_callable",
    "lookup_service_strategies",
]
