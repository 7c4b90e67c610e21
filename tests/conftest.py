"""Shared pytest fixtures for paramwire tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from paramwire.chain import ResolverChain
from paramwire.config_path import ConfigPathResolver
from paramwire.descriptors import ParameterDescriptor, TypeSpec
from paramwire.lookup import MappingLookupService
from paramwire.type_matcher import TypeMatcher


@pytest.fixture()
def lookup() -> MappingLookupService:
    """Empty dict-backed lookup service."""
    return MappingLookupService()


@pytest.fixture()
def chain(lookup: MappingLookupService) -> ResolverChain:
    """Default chain backed by the lookup fixture."""
    return ResolverChain.create_defaults(lookup)


@pytest.fixture()
def type_matcher() -> TypeMatcher:
    return TypeMatcher()


@pytest.fixture()
def path_resolver() -> ConfigPathResolver:
    return ConfigPathResolver()


@pytest.fixture()
def make_descriptor() -> Callable[..., ParameterDescriptor]:
    """Build descriptors with ``types`` given as declared union members."""

    def _make(
        name: str = "value",
        position: int = 0,
        *types: Any,
        **kwargs: Any,
    ) -> ParameterDescriptor:
        declared_type = TypeSpec.of(*types) if types else None
        return ParameterDescriptor(
            name=name,
            position=position,
            declared_type=declared_type,
            **kwargs,
        )

    return _make
