"""Declarative validation of DTOs, reported as ValidationError."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from typing import Any

from .xerrors import (
    REASON_REQUIRED_ATTRIBUTE_MISSING,
    REASON_TYPE_INVALID_VALUE,
    ValidationError,
)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, dict, tuple)):
        return False
    if dataclasses.is_dataclass(value):
        return False
    return not value


def _check(obj: Any, prefix: str) -> Iterator[tuple[str, str]]:
    for f in dataclasses.fields(obj):
        value = getattr(obj, f.name)
        path = prefix + f.metadata.get("json", f.name)
        if f.metadata.get("required") and _is_missing(value):
            yield path, REASON_REQUIRED_ATTRIBUTE_MISSING
            continue
        one_of = f.metadata.get("one_of") or ()
        if one_of and value not in one_of:
            yield path, REASON_TYPE_INVALID_VALUE
            continue
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            yield from _check(value, path + ".")


def validate(obj: Any) -> None:
    """Raise ValidationError listing every field of ``obj`` that breaks its rules."""
    if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
        raise TypeError(f"cannot validate {type(obj).__name__}: not a dataclass instance")
    error = ValidationError("Invalid Body")
    for name, reason in _check(obj, ""):
        error = error.add_field(name, reason)
    if error.fields:
        raise error