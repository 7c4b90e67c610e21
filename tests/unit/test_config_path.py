from __future__ import annotations

from typing import Any

import pytest

from paramwire.config_path import ConfigPathResolver, SupportsKeyedAccess
from paramwire.exceptions import (
    ParamWireConfigPathError,
    ParamWireConfigPathInaccessibleError,
    ParamWireConfigPathMissingError,
    ParamWireResolutionError,
)


class KeyedSettings:
    """Keyed container that is neither a mapping nor a sequence."""

    def __init__(self, **values: Any) -> None:
        self._values = values

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __getitem__(self, key: str) -> Any:
        return self._values[key]


def test_resolves_nested_mapping_value(path_resolver: ConfigPathResolver) -> None:
    root = {"database": {"connections": {"primary": {"host": "db.local"}}}}

    value = path_resolver.resolve(root, ["database", "connections", "primary", "host"])

    assert value == "db.local"


def test_resolves_dotted_string_path(path_resolver: ConfigPathResolver) -> None:
    assert path_resolver.resolve({"a": {"b": 1}}, "a.b") == 1


def test_empty_path_returns_root(path_resolver: ConfigPathResolver) -> None:
    root = {"a": 1}

    assert path_resolver.resolve(root, []) is root


def test_missing_key_reports_path_including_segment(path_resolver: ConfigPathResolver) -> None:
    with pytest.raises(ParamWireConfigPathMissingError) as exc_info:
        path_resolver.resolve({"a": {"b": 1}}, ["a", "c"])

    assert exc_info.value.consumed_path == "a → c"
    assert exc_info.value.consumed == ("a", "c")
    assert exc_info.value.path == ("a", "c")
    assert str(exc_info.value) == "Undefined config key: a → c"


def test_non_indexable_node_reports_path_excluding_segment(
    path_resolver: ConfigPathResolver,
) -> None:
    with pytest.raises(ParamWireConfigPathInaccessibleError) as exc_info:
        path_resolver.resolve({"a": 1}, ["a", "b"])

    assert exc_info.value.consumed_path == "a"
    assert str(exc_info.value) == "Config value at path 'a' is not accessible"


def test_missing_first_segment(path_resolver: ConfigPathResolver) -> None:
    with pytest.raises(ParamWireConfigPathMissingError, match="Undefined config key: app$"):
        path_resolver.resolve({}, ["app", "debug"])


def test_non_indexable_root_reports_empty_path(path_resolver: ConfigPathResolver) -> None:
    with pytest.raises(ParamWireConfigPathInaccessibleError) as exc_info:
        path_resolver.resolve(42, ["a"])

    assert exc_info.value.consumed_path == ""


def test_terminal_none_is_returned(path_resolver: ConfigPathResolver) -> None:
    assert path_resolver.resolve({"a": {"b": None}}, ["a", "b"]) is None


def test_intermediate_none_is_not_accessible(path_resolver: ConfigPathResolver) -> None:
    with pytest.raises(ParamWireConfigPathInaccessibleError) as exc_info:
        path_resolver.resolve({"a": None}, ["a", "b", "c"])

    assert exc_info.value.consumed_path == "a"


def test_strings_are_leaves(path_resolver: ConfigPathResolver) -> None:
    with pytest.raises(ParamWireConfigPathInaccessibleError) as exc_info:
        path_resolver.resolve({"name": "service"}, ["name", "0"])

    assert exc_info.value.consumed_path == "name"


def test_sequence_segments_are_indexes(path_resolver: ConfigPathResolver) -> None:
    root = {"servers": [{"host": "a"}, {"host": "b"}]}

    assert path_resolver.resolve(root, ["servers", "1", "host"]) == "b"


@pytest.mark.parametrize("segment", ["2", "-1", "first"])
def test_invalid_sequence_index_is_missing(
    path_resolver: ConfigPathResolver,
    segment: str,
) -> None:
    with pytest.raises(ParamWireConfigPathMissingError) as exc_info:
        path_resolver.resolve({"servers": ["a", "b"]}, ["servers", segment])

    assert exc_info.value.consumed_path == f"servers → {segment}"


def test_mapping_with_integer_keys_accepts_decimal_segments(
    path_resolver: ConfigPathResolver,
) -> None:
    assert path_resolver.resolve({"ports": {0: 8080}}, ["ports", "0"]) == 8080


def test_keyed_access_objects_are_traversed(path_resolver: ConfigPathResolver) -> None:
    root = {"app": KeyedSettings(debug=True)}

    assert isinstance(root["app"], SupportsKeyedAccess)
    assert path_resolver.resolve(root, ["app", "debug"]) is True
    with pytest.raises(ParamWireConfigPathMissingError, match="app → verbose"):
        path_resolver.resolve(root, ["app", "verbose"])


def test_errors_raised_outside_a_chain_carry_no_descriptor(
    path_resolver: ConfigPathResolver,
) -> None:
    with pytest.raises(ParamWireConfigPathError) as exc_info:
        path_resolver.resolve({}, ["missing"])

    assert isinstance(exc_info.value, ParamWireResolutionError)
    assert exc_info.value.descriptor is None
    assert exc_info.value.provided_parameters == {}
    assert exc_info.value.resolved_parameters == {}


def test_split_normalizes_paths() -> None:
    assert ConfigPathResolver.split("a.b.c") == ("a", "b", "c")
    assert ConfigPathResolver.split("a.b", split_on_dot=False) == ("a.b",)
    assert ConfigPathResolver.split(["a.b", "c"]) == ("a.b", "c")


def test_integer_segments_are_normalized(path_resolver: ConfigPathResolver) -> None:
    root = {"servers": [{"host": "a"}, {"host": "b"}], "ports": {0: 8080}}

    assert ConfigPathResolver.split(("servers", 1, "host")) == ("servers", "1", "host")
    assert path_resolver.resolve(root, ["servers", 1, "host"]) == "b"
    assert path_resolver.resolve(root, ["ports", 0]) == 8080


def test_integer_segment_reports_missing_key(path_resolver: ConfigPathResolver) -> None:
    with pytest.raises(ParamWireConfigPathMissingError) as exc_info:
        path_resolver.resolve({"servers": ["a"]}, ["servers", 3])

    assert exc_info.value.consumed_path == "servers → 3"


def test_failing_node_is_reported_as_config_path_error(
    path_resolver: ConfigPathResolver,
) -> None:
    class BrokenSettings(KeyedSettings):
        def __contains__(self, key: object) -> bool:
            msg = "backend down"
            raise RuntimeError(msg)

    with pytest.raises(ParamWireConfigPathError) as exc_info:
        path_resolver.resolve({"app": BrokenSettings()}, ["app", "debug"])

    error = exc_info.value
    assert str(error) == "Failed to read config key: app → debug: RuntimeError: backend down"
    assert error.consumed == ("app", "debug")
    assert isinstance(error.__cause__, RuntimeError)
    assert error.descriptor is None
