from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union
import json
import logging

import yaml

from .data_and_types import (
    VALUE_TYPES, Value, HclNull, HclString, HclNumber, HclBool, Expression,
    HclList, HclMap, HclCycleError,
)

logger = logging.getLogger(__name__)


def is_expression(value: Any) -> bool:
    """
    True iff `value` is an expression record: a mapping holding exactly a
    `kind` equal to "expression" and a string `hcl`.
    """
    if not isinstance(value, Mapping):
        return False
    if set(value.keys()) != {"kind", "hcl"}:
        return False
    return value["kind"] == "expression" and isinstance(value["hcl"], str)

def expr(hcl: str) -> Expression:
    """Shorthand for an unquoted HCL expression, e.g. expr("var.location")"""
    if not isinstance(hcl, str):
        raise TypeError(f"Expression text must be a string, got {type(hcl).__name__}")
    return Expression(hcl)


def to_value(obj: Any) -> Value:
    """
    Convert plain Python data into the typed value tree.

    Dicts become maps (keys must be strings), lists and tuples become lists
    and expression records become Expression. A container that contains
    itself raises HclCycleError.
    """
    return _convert(obj, set())

def _convert(obj: Any, active: set) -> Value:
    if isinstance(obj, VALUE_TYPES):
        return obj
    if obj is None:
        return HclNull()
    # bool before int: bool is a subclass of int
    if isinstance(obj, bool):
        return HclBool(obj)
    if isinstance(obj, (int, float)):
        return HclNumber(obj)
    if isinstance(obj, str):
        return HclString(obj)

    if isinstance(obj, Mapping):
        if is_expression(obj):
            return Expression(obj["hcl"])
        _enter(obj, active)
        try:
            entries = {}
            for key, item in obj.items():
                if not isinstance(key, str):
                    raise TypeError(f"HCL map keys must be strings, got {type(key).__name__} key {key!r}")
                entries[key] = _convert(item, active)
        finally:
            active.discard(id(obj))
        return HclMap(entries)

    if isinstance(obj, (list, tuple)):
        _enter(obj, active)
        try:
            items = [_convert(item, active) for item in obj]
        finally:
            active.discard(id(obj))
        return HclList(items)

    raise TypeError(f"Cannot convert {type(obj).__name__} to an HCL value")

def _enter(container: Any, active: set):
    if id(container) in active:
        raise HclCycleError(f"Cyclic reference detected in {type(container).__name__} value")
    active.add(id(container))


def to_map(obj: Any, what: str = "body") -> HclMap:
    value = to_value(obj)
    if not isinstance(value, HclMap):
        raise TypeError(f"{what} must be a mapping, got {type(obj).__name__}")
    return value


def load_structured_file(path: Union[str, Path]) -> Any:
    """
    Load a JSON or YAML file. `.json` files are read as JSON, anything
    else as YAML (which also accepts JSON).
    """
    path = Path(path)
    logger.debug("Loading %s", path)
    with open(path, 'r', encoding='utf-8') as f:
        if path.suffix == '.json':
            return json.load(f)
        return yaml.safe_load(f)
