"""Errors: what a failed resolution reports.

Every resolution error carries the failing parameter descriptor, the values
the caller provided and the values resolved before the failure.
"""

from __future__ import annotations

from typing import Annotated

from paramwire import (
    Inject,
    MappingLookupService,
    ParamWireLookupServiceError,
    ParamWireTypeMismatchError,
    ParamWireUnresolvableError,
    ResolverChain,
)


class Clock:
    pass


def schedule(delay: int, clock: Clock) -> None: ...


def notify(sender: Annotated[str, Inject("mail.sender")]) -> None: ...


def main() -> None:
    chain = ResolverChain.create_defaults(MappingLookupService())

    try:
        chain.resolve_callable(schedule, {"delay": 5})
    except ParamWireUnresolvableError as error:
        print(error)  # => Cannot resolve parameter #2 'clock' of 'schedule()'.
        print(f"resolved={dict(error.resolved_parameters)}")  # => resolved={0: 5}

    try:
        chain.resolve_callable(schedule, {"delay": "soon", "clock": Clock()})
    except ParamWireTypeMismatchError as error:
        print(error)  # => Argument #1 'delay' of 'schedule()' must be of type int, given str.
        print(f"value={error.value!r}")  # => value='soon'

    try:
        chain.resolve_callable(notify)
    except ParamWireLookupServiceError as error:
        print(f"identifier={error.identifier}")  # => identifier=mail.sender
        print(f"cause={type(error.__cause__).__name__}")  # => cause=KeyError


if __name__ == "__main__":
    main()
