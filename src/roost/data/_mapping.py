"""Row-to-dataclass mapping with type coercion.

Converts raw database rows (dicts) into typed dataclasses using field
introspection — no metaclass magic, no descriptors.

Coercion handles the mismatch between database drivers (SQLite returns
strings for some column types) and dataclass annotations. The same table
coerces route path values, which always arrive as strings, to the type
of the column they are compared against.
"""

import dataclasses
import re
import types
import typing
from typing import Any, get_args, get_origin

# Scalar types we know how to coerce from driver values or path strings.
_COERCIBLE: dict[type, Any] = {
    int: lambda v: int(v) if v != "" else 0,
    float: lambda v: float(v) if v != "" else 0.0,
    bool: lambda v: bool(int(v)) if isinstance(v, str) else bool(v),
    str: str,
}

# Spellings a path value must have before it is converted.
_PATH_LITERALS: dict[type, re.Pattern[str]] = {
    int: re.compile(r"-?[0-9]+"),
    float: re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?"),
    bool: re.compile(r"[01]"),
}


def _unwrap_optional(annotation: Any) -> Any:
    """``X | None`` -> ``X``; anything else unchanged (or None if ambiguous)."""
    origin = get_origin(annotation)
    if origin is types.UnionType or origin is typing.Union:
        args = [a for a in get_args(annotation) if a is not type(None)]
        return args[0] if len(args) == 1 else None
    return annotation


def _build_coercion_map(cls: type) -> dict[str, type | None]:
    """Build a {field_name: target_type} map for coercible fields.

    Returns ``None`` for fields that don't need coercion (complex types,
    generics, etc.).
    """
    hints = typing.get_type_hints(cls)
    result: dict[str, type | None] = {}
    for f in dataclasses.fields(cls):
        annotation = _unwrap_optional(hints.get(f.name, f.type))
        result[f.name] = annotation if annotation in _COERCIBLE else None
    return result


def _coerce(value: Any, target: type | None) -> Any:
    """Coerce a single value to the target type, if needed."""
    if target is None or value is None or isinstance(value, target):
        return value
    return _COERCIBLE[target](value)


def _require_dataclass(cls: type) -> None:
    if not dataclasses.is_dataclass(cls):
        msg = f"{cls.__name__} is not a dataclass — roost.data requires dataclasses"
        raise TypeError(msg)


def field_names(cls: type) -> frozenset[str]:
    """Names of the dataclass fields of *cls*."""
    _require_dataclass(cls)
    return frozenset(f.name for f in dataclasses.fields(cls))


def coerce_field(cls: type, name: str, value: str) -> Any:
    """Coerce a path string to the annotated type of field *name*.

    ``"42"`` for an ``id: int`` field becomes ``42``. Only the plain
    decimal spelling is accepted: ``"+42"``, ``"4_2"``, ``" 42"`` and
    non-ASCII digits are rejected rather than aliased onto row 42.

    Raises ``ValueError`` when the string cannot represent that type.
    """
    target = _build_coercion_map(cls).get(name)
    if target is None or target is str:
        return value
    pattern = _PATH_LITERALS[target]
    if pattern.fullmatch(value) is None:
        msg = f"{value!r} is not a valid {target.__name__} for {cls.__name__}.{name}"
        raise ValueError(msg)
    return _coerce(value, target)


def map_row[T](cls: type[T], row: dict[str, Any]) -> T:
    """Map a dict-like row to a dataclass instance.

    Only passes keys that match dataclass fields. Extra columns are silently
    ignored (SELECT * is fine even if the dataclass has fewer fields).

    Raises ``TypeError`` if required fields are missing from the row.
    """
    _require_dataclass(cls)
    coercion = _build_coercion_map(cls)
    filtered = {k: _coerce(v, coercion.get(k)) for k, v in row.items() if k in coercion}
    return cls(**filtered)


def map_rows[T](cls: type[T], rows: list[dict[str, Any]]) -> list[T]:
    """Map a list of dict-like rows to dataclass instances."""
    _require_dataclass(cls)
    coercion = _build_coercion_map(cls)
    return [
        cls(**{k: _coerce(v, coercion.get(k)) for k, v in row.items() if k in coercion})
        for row in rows
    ]
