from __future__ import annotations

from typing import Annotated, Optional, Union

from paramwire.markers import (
    DEFAULT_CONFIG_ROOT_KEY,
    Config,
    Inject,
    extract_markers,
    strip_annotated,
)


class Logger:
    pass


def test_inject_marker_is_value_based_and_hashable() -> None:
    marker = Inject("custom.logger")

    assert marker.identifier == "custom.logger"
    assert marker == Inject("custom.logger")
    assert marker != Inject("other.logger")
    assert Inject().identifier is None
    assert {marker: "logger"}[Inject("custom.logger")] == "logger"


def test_config_marker_defaults() -> None:
    marker = Config("database.host")

    assert marker.root_key == DEFAULT_CONFIG_ROOT_KEY == "config"
    assert marker.split_on_dot is True


def test_config_segments_split_on_dot() -> None:
    assert Config("database.host").segments == ("database", "host")


def test_config_segments_literal_key_mode() -> None:
    assert Config("db.primary", split_on_dot=False).segments == ("db.primary",)


def test_config_segments_from_sequence_are_used_as_is() -> None:
    assert Config(["db.primary", "host"]).segments == ("db.primary", "host")


def test_extract_markers_keeps_first_instance_of_each_kind() -> None:
    first = Inject("first")
    config = Config("app.debug")
    annotation = Annotated[Logger, first, "unrelated", config, Inject("second")]

    markers = extract_markers(annotation)

    assert markers == {Inject: first, Config: config}


def test_extract_markers_ignores_plain_annotations() -> None:
    assert extract_markers(Logger) == {}
    assert extract_markers(Annotated[Logger, "meta"]) == {}


def test_strip_annotated_unwraps_to_inner_type() -> None:
    assert strip_annotated(Annotated[Logger, Inject("x")]) is Logger
    assert strip_annotated(Logger) is Logger


def test_config_segments_normalize_integer_indexes() -> None:
    assert Config(("servers", 0, "host")).segments == ("servers", "0", "host")


def test_extract_markers_from_optional_annotated() -> None:
    marker = Inject("custom.logger")

    assert extract_markers(Optional[Annotated[Logger, marker]]) == {Inject: marker}  # noqa: UP007
    assert extract_markers(Union[None, Annotated[Logger, marker]]) == {Inject: marker}  # noqa: UP007


def test_extract_markers_walks_every_union_member() -> None:
    inject = Inject("custom.logger")
    config = Config("logging.level")
    annotation = Union[Annotated[Logger, inject], Annotated[str, config, Inject("later")]]  # noqa: UP007

    assert extract_markers(annotation) == {Inject: inject, Config: config}
