"""Pydantic settings: use a settings object as the configuration root.

Config paths walk Pydantic model fields the same way they walk mapping
keys, so a ``BaseSettings`` instance can be registered as ``"config"``.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from paramwire import Config, MappingLookupService, ResolverChain


class DatabaseSettings(BaseModel):
    host: str = "localhost"
    port: int = 5432


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BILLING_")

    database: DatabaseSettings = DatabaseSettings()
    debug: bool = False


def connect(
    host: Annotated[str, Config("database.host")],
    port: Annotated[int, Config("database.port")],
    debug: Annotated[bool, Config("debug")],
) -> None: ...


def main() -> None:
    settings = AppSettings(debug=True)
    chain = ResolverChain.create_defaults(MappingLookupService({"config": settings}))

    print(chain.resolve_callable(connect))  # => {0: 'localhost', 1: 5432, 2: True}


if __name__ == "__main__":
    main()
