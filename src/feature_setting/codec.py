"""Tagged string codec for stored setting values.

Every stored value is written as ``<tag>:<literal>`` so that decoding never has
to guess a type from content:

    bool:true   int:42   float:1.3   str:hello   sym:a_symbol   json:{"a": 1}

``None`` and ``False`` share ``bool:false``. Raw values without a known tag
(rows written by hand or by other tools) decode to the raw string.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any

from .exceptions import SerializationError

BOOL = "bool"
INT = "int"
FLOAT = "float"
STR = "str"
SYMBOL = "sym"
JSON = "json"

TAGS = frozenset({BOOL, INT, FLOAT, STR, SYMBOL, JSON})
_SEPARATOR = ":"


class Symbol(str):
    """A symbolic token, stored and restored distinctly from a plain string."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Symbol({str.__repr__(self)})"


class IndifferentDict(dict):
    """Dict whose keys are strings and whose lookups accept any key via ``str()``.

    Symbols, strings and other scalar keys address the same entry. Nested
    mappings are converted on insertion so access stays indifferent all the way down.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__()
        self.update(*args, **kwargs)

    def __getitem__(self, key: Any) -> Any:
        return super().__getitem__(_key(key))

    def __setitem__(self, key: Any, value: Any) -> None:
        super().__setitem__(_key(key), _indifferent(value))

    def __delitem__(self, key: Any) -> None:
        super().__delitem__(_key(key))

    def __contains__(self, key: object) -> bool:
        return super().__contains__(_key(key))

    def get(self, key: Any, default: Any = None) -> Any:
        return super().get(_key(key), default)

    def pop(self, key: Any, *default: Any) -> Any:
        return super().pop(_key(key), *default)

    def setdefault(self, key: Any, default: Any = None) -> Any:
        if key not in self:
            self[key] = default
        return self[key]

    def update(self, *args: Any, **kwargs: Any) -> None:
        for key, value in dict(*args, **kwargs).items():
            self[key] = value

    def copy(self) -> "IndifferentDict":
        return IndifferentDict(self)

    def __repr__(self) -> str:
        return f"IndifferentDict({dict.__repr__(self)})"


def _key(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def _indifferent(value: Any) -> Any:
    if isinstance(value, IndifferentDict):
        return value
    if isinstance(value, Mapping):
        return IndifferentDict(value)
    if isinstance(value, list):
        return [_indifferent(item) for item in value]
    return value


def _plain(value: Any) -> Any:
    """Convert containers into JSON-ready builtins, rejecting anything else."""

    if isinstance(value, Mapping):
        return {_key(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(value, "non-finite floats are not storable")
        return value
    raise SerializationError(value, "not a JSON-compatible value")


def encode(value: Any) -> str:
    """Return the tagged storage string for ``value``.

    Raises:
        SerializationError: if ``value`` has no stored representation.
    """

    if value is None or value is False:
        return f"{BOOL}{_SEPARATOR}false"
    if value is True:
        return f"{BOOL}{_SEPARATOR}true"
    if isinstance(value, int):
        try:
            text = str(int(value))
        except ValueError as exc:
            raise SerializationError(value, str(exc)) from exc
        return f"{INT}{_SEPARATOR}{text}"
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(value, "non-finite floats are not storable")
        return f"{FLOAT}{_SEPARATOR}{value!r}"
    # Symbol before str: every Symbol is also a str
    if isinstance(value, Symbol):
        return f"{SYMBOL}{_SEPARATOR}{str.__str__(value)}"
    if isinstance(value, str):
        return f"{STR}{_SEPARATOR}{value}"
    if isinstance(value, (Mapping, list, tuple)):
        try:
            text = json.dumps(_plain(value), allow_nan=False)
        except (TypeError, ValueError, RecursionError) as exc:
            raise SerializationError(value, str(exc)) from exc
        return f"{JSON}{_SEPARATOR}{text}"
    raise SerializationError(value)


def decode(raw: str | None) -> Any:
    """Return the in-memory value for a stored string. ``None`` reads as ``False``."""

    if raw is None:
        return False
    tag, sep, literal = raw.partition(_SEPARATOR)
    if not sep or tag not in TAGS:
        return raw

    if tag == BOOL:
        return literal == "true"
    if tag == INT:
        return int(literal)
    if tag == FLOAT:
        return float(literal)
    if tag == SYMBOL:
        return Symbol(literal)
    if tag == STR:
        return literal
    return _indifferent(json.loads(literal))


def normalize(value: Any) -> Any:
    """Return ``value`` as it would read back after a store/load cycle."""

    return decode(encode(value))


__all__ = ["IndifferentDict", "Symbol", "decode", "encode", "normalize"]
