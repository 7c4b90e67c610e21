"""Custom strategies: plug your own resolution step into the chain.

A strategy is any object with an ``attempt`` method that returns a
``ResolvedPair`` or ``None``. Install it on a copy with ``with_prepended``,
or list its lookup identifier under ``paramwire.resolvers`` in the
configuration and build the chain with ``ResolverChain.from_lookup``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from paramwire import (
    RESOLVERS_CONFIG_KEY,
    MappingLookupService,
    ParameterDescriptor,
    ResolvedPair,
    ResolverChain,
)


@dataclass(frozen=True, slots=True)
class EnvironmentLookup:
    """Resolve parameters from upper-cased environment-style variables."""

    environ: Mapping[str, str]

    def attempt(
        self,
        descriptor: ParameterDescriptor,
        provided: Mapping[Any, Any],
    ) -> ResolvedPair | None:
        key = descriptor.name.upper()
        if key in self.environ:
            return ResolvedPair(descriptor.position, self.environ[key])
        return None


def deploy(region: str, zone: str = "a") -> None: ...


def main() -> None:
    base = ResolverChain.create_defaults()
    chain = base.with_prepended(EnvironmentLookup({"REGION": "eu-west-1"}))

    print(chain.resolve_callable(deploy))  # => {0: 'eu-west-1', 1: 'a'}
    print(f"copy_has={chain.has(EnvironmentLookup)}")  # => copy_has=True
    print(f"base_has={base.has(EnvironmentLookup)}")  # => base_has=False

    lookup = MappingLookupService(
        {
            "config": {RESOLVERS_CONFIG_KEY: ["deploy.environment"]},
            "deploy.environment": EnvironmentLookup({"REGION": "us-east-1", "ZONE": "b"}),
        },
    )
    configured = ResolverChain.from_lookup(lookup)

    print(configured.strategies[0])  # => EnvironmentLookup(environ={'REGION': 'us-east-1', 'ZONE': 'b'})
    print(configured.resolve_callable(deploy))  # => {0: 'us-east-1', 1: 'b'}


if __name__ == "__main__":
    main()
