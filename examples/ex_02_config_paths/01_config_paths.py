"""Config paths: read nested configuration values into parameters.

``Config("a.b")`` splits on dots, list items are addressed by index, and
``split_on_dot=False`` treats a dotted name as one literal key. A path that
does not exist is an error, even when the parameter has a default.
"""

from __future__ import annotations

from typing import Annotated

from paramwire import (
    Config,
    MappingLookupService,
    ParamWireConfigPathMissingError,
    ResolverChain,
)


def connect(
    host: Annotated[str, Config("database.host")],
    replica: Annotated[str, Config("database.replicas.1")],
    flags: Annotated[dict, Config("feature.flags", split_on_dot=False)],
) -> None: ...


def configure_pool(size: Annotated[int, Config("database.pool.size")] = 5) -> None: ...


def main() -> None:
    lookup = MappingLookupService(
        {
            "config": {
                "database": {"host": "db.internal", "replicas": ["replica-a", "replica-b"]},
                "feature.flags": {"beta": True},
            },
        },
    )
    chain = ResolverChain.create_defaults(lookup)

    values = chain.resolve_callable(connect)
    print(f"host={values[0]}")  # => host=db.internal
    print(f"replica={values[1]}")  # => replica=replica-b
    print(f"flags={values[2]}")  # => flags={'beta': True}

    try:
        chain.resolve_callable(configure_pool)
    except ParamWireConfigPathMissingError as error:
        print(f"missing={'/'.join(error.consumed)}")  # => missing=database/pool


if __name__ == "__main__":
    main()
