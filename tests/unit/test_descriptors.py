from __future__ import annotations

import inspect
from typing import Annotated, Optional, Union

import pytest

from paramwire.descriptors import ParameterDescriptor, ResolvedPair, TypeSpec
from paramwire.markers import Config, Inject


class Dog:
    pass


class Cat:
    pass


def test_from_annotation_single_type() -> None:
    spec, nullable = TypeSpec.from_annotation(Dog)

    assert spec == TypeSpec.of(Dog)
    assert spec is not None
    assert spec.is_union is False
    assert nullable is False


def test_from_annotation_union_preserves_declaration_order() -> None:
    spec, nullable = TypeSpec.from_annotation(Cat | Dog)

    assert spec is not None
    assert spec.members == (Cat, Dog)
    assert spec.is_union is True
    assert nullable is False


@pytest.mark.parametrize(
    "annotation",
    [Optional[Dog], Dog | None, Union[None, Dog]],  # noqa: UP007
)
def test_from_annotation_moves_none_to_nullability(annotation: object) -> None:
    spec, nullable = TypeSpec.from_annotation(annotation)

    assert spec == TypeSpec.of(Dog)
    assert nullable is True


def test_from_annotation_flattens_annotated_and_nested_unions() -> None:
    annotation = Annotated[
        Union[Dog, Annotated[Optional[Cat], "inner"]],  # noqa: UP007
        Inject("pets"),
    ]

    spec, nullable = TypeSpec.from_annotation(annotation)

    assert spec is not None
    assert spec.members == (Dog, Cat)
    assert nullable is True


def test_from_annotation_without_type() -> None:
    assert TypeSpec.from_annotation(inspect.Parameter.empty) == (None, False)
    assert TypeSpec.from_annotation(None) == (None, True)


def test_type_spec_requires_members() -> None:
    with pytest.raises(ValueError, match="at least one member"):
        TypeSpec.of()


def test_named_types_skip_builtins_and_typing_forms() -> None:
    spec = TypeSpec.of(int, Dog, list[int], "Cat", Cat)

    assert list(spec.named_types()) == [Dog, Cat]


def test_type_spec_renders_members() -> None:
    assert str(TypeSpec.of(Dog, int)) == "Dog | int"
    assert str(TypeSpec.of("Cat")) == "Cat"


def test_descriptor_metadata_lookup_by_kind() -> None:
    marker = Config("database.host")
    descriptor = ParameterDescriptor(name="host", position=0, metadata={Config: marker})

    assert descriptor.get_metadata(Config) is marker
    assert descriptor.get_metadata(Inject) is None


def test_descriptor_rejects_negative_position() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        ParameterDescriptor(name="value", position=-1)


def test_descriptor_is_immutable() -> None:
    descriptor = ParameterDescriptor(name="value", position=0)

    with pytest.raises(AttributeError):
        descriptor.position = 1  # type: ignore[misc]


def test_resolved_pair_holding_none_is_a_resolution() -> None:
    pair = ResolvedPair(position=0, value=None)

    assert pair is not None
    assert tuple(pair) == (0, None)
