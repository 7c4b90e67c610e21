"""Quickstart: resolve a function's parameters from several sources.

The caller supplies some values, a lookup service holds shared objects and
configuration, and defaults fill the rest. The default resolver chain asks
each source in turn.
"""

from __future__ import annotations

from typing import Annotated

from paramwire import Config, Inject, MappingLookupService, ResolverChain


class Mailer:
    def __init__(self, sender: str) -> None:
        self.sender = sender


def send_report(
    user_id: int,
    mailer: Annotated[Mailer, Inject("mailer")],
    subject: Annotated[str, Config("reports.subject")],
    retries: int = 3,
) -> str:
    return f"{mailer.sender} to user {user_id}: {subject} (retries={retries})"


def main() -> None:
    lookup = MappingLookupService(
        {
            "config": {"reports": {"subject": "Weekly report"}},
            "mailer": Mailer("reports@example.com"),
        },
    )
    chain = ResolverChain.create_defaults(lookup)

    resolved = chain.resolve_callable(send_report, {"user_id": 42})
    print(f"positions={list(resolved)}")  # => positions=[0, 1, 2, 3]

    message = send_report(*resolved.values())
    print(message)  # => reports@example.com to user 42: Weekly report (retries=3)


if __name__ == "__main__":
    main()
