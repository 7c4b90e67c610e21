from __future__ import annotations

import importlib
import warnings
from typing import Any

_PYDANTIC_V1_WARNING_PATTERN = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)


def _load_pydantic_base_model() -> type[Any] | None:
    return _load_base_model("pydantic")


def _load_pydantic_v1_base_model() -> type[Any] | None:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message=_PYDANTIC_V1_WARNING_PATTERN,
            category=UserWarning,
        )
        return _load_base_model("pydantic.v1")


def _load_base_model(module_name: str) -> type[Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    base_model = getattr(module, "BaseModel", None)
    if isinstance(base_model, type):
        return base_model
    return None


def _build_model_bases() -> tuple[type[Any], ...]:
    seen_ids: set[int] = set()
    bases: list[type[Any]] = []

    for candidate in (_load_pydantic_base_model(), _load_pydantic_v1_base_model()):
        if candidate is None:
            continue
        candidate_id = id(candidate)
        if candidate_id in seen_ids:
            continue
        seen_ids.add(candidate_id)
        bases.append(candidate)

    return tuple(bases)


MODEL_BASES: tuple[type[Any], ...] = _build_model_bases()


def is_pydantic_model(candidate: object) -> bool:
    """Return whether an object is an instance of a Pydantic model.

    Both ``pydantic.BaseModel`` and legacy ``pydantic.v1.BaseModel`` are
    recognized when available, which covers ``pydantic_settings.BaseSettings``
    subclasses. Without Pydantic installed this returns ``False``.

    Args:
        candidate: Object to test.

    """
    return bool(MODEL_BASES) and isinstance(candidate, MODEL_BASES)


def model_field_names(model: Any) -> frozenset[str]:
    """Return the field names readable on a Pydantic model instance.

    Declared fields come from ``model_fields`` (v2) or ``__fields__`` (v1).
    Extra values allowed by ``extra="allow"`` are included for v2 models.

    Args:
        model: Pydantic model instance.

    """
    model_type = type(model)
    declared = getattr(model_type, "model_fields", None)
    if declared is None:
        declared = getattr(model_type, "__fields__", {})
    names = set(declared)
    extra = getattr(model, "model_extra", None)
    if extra:
        names.update(extra)
    return frozenset(names)


def model_field_value(model: Any, name: str) -> Any:
    """Return a field value of a Pydantic model instance.

    Args:
        model: Pydantic model instance.
        name: Field name present in ``model_field_names(model)``.

    """
    return getattr(model, name)


__all__ = [
    "MODEL_BASES",
    "is_pydantic_model",
    "model_field_names",
    "model_field_value",
]
