# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module provides utility functions for JSON data."""
import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from intoto_metablock.errors import FormatError

JsonType = int | float | str | None | bool | list["JsonType"] | dict[str, "JsonType"]
T = TypeVar("T", bound=JsonType)
V = TypeVar("V")

logger: logging.Logger = logging.getLogger(__name__)


def json_extract(entry: dict | list, keys: Sequence[str | int], type_: type[T]) -> T | None:
    """Return the value found by following the list of depth-sequential keys inside the passed JSON dictionary.

    The value must be of the passed type.

    Parameters
    ----------
    entry: dict | list
        An entry point into a JSON structure.
    keys: Sequence[str | int]
        The sequence of depth-sequential keys within the JSON. Can be dict keys or list indices.
    type: type[T]
        The type to check the value against and return it as.

    Returns
    -------
    T | None:
        The found value as the type of the type parameter.
    """
    for key in keys:
        if isinstance(entry, dict) and isinstance(key, str):
            if key not in entry:
                logger.debug("JSON key '%s' not found in dict entry.", key)
                return None
            entry = entry[key]
        elif isinstance(entry, list) and isinstance(key, int):
            if key < 0 or key >= len(entry):
                logger.debug("JSON list index '%s' is outside of list bounds %s.", key, len(entry))
                return None
            entry = entry[key]
        else:
            logger.debug("Cannot index '%s' (type: %s) in entry (type: %s).", key, type(key), type(entry))
            return None

    if isinstance(entry, type_):
        return entry

    logger.debug("Found value of incorrect type: %s instead of %s.", type(entry), type_)
    return None


def get_typed_field(obj: dict[str, Any], field: str, type_: type[T], owner: str) -> T | None:
    """Return the value of a field of a JSON object, checking its type.

    A missing field or an explicit ``null`` is returned as ``None`` so that callers can
    fall back to the zero value of the field.

    Parameters
    ----------
    obj : dict[str, Any]
        The JSON object.
    field : str
        The name of the field.
    type_ : type[T]
        The expected type of the value.
    owner : str
        A name for the JSON object, used in error messages.

    Returns
    -------
    T | None
        The value of the field or ``None`` if it is absent.

    Raises
    ------
    FormatError
        If the field holds a value of another type.
    """
    value = obj.get(field)
    if value is None:
        return None
    # bool is a subclass of int, which must not be accepted for integer fields.
    if not isinstance(value, type_) or (type_ is int and isinstance(value, bool)):
        raise FormatError(
            f"The value of attribute '{field}' in the {owner} is invalid: expecting {type_.__name__}."
        )
    return value


def get_str(obj: dict[str, Any], field: str, owner: str) -> str:
    """Return a string field of a JSON object, defaulting to the empty string."""
    return get_typed_field(obj, field, str, owner) or ""


def get_int(obj: dict[str, Any], field: str, owner: str) -> int:
    """Return an integer field of a JSON object, defaulting to ``0``."""
    return get_typed_field(obj, field, int, owner) or 0


def get_object(obj: dict[str, Any], field: str, owner: str) -> dict[str, JsonType]:
    """Return an object field of a JSON object, defaulting to an empty dict."""
    return dict(get_typed_field(obj, field, dict, owner) or {})


def get_str_list(obj: dict[str, Any], field: str, owner: str) -> list[str]:
    """Return a list-of-strings field of a JSON object, defaulting to an empty list.

    Raises
    ------
    FormatError
        If the field is not a list or an element is not a string.
    """
    values = get_typed_field(obj, field, list, owner) or []
    if not all(isinstance(value, str) for value in values):
        raise FormatError(f"The value of attribute '{field}' in the {owner} is invalid: expecting a list of strings.")
    return list(values)


def get_rule_list(obj: dict[str, Any], field: str, owner: str) -> list[list[str]]:
    """Return a list of artifact rules, each rule being a list of string tokens.

    Raises
    ------
    FormatError
        If the field is not a list of lists of strings.
    """
    rules = get_typed_field(obj, field, list, owner) or []
    result = []
    for rule in rules:
        if not isinstance(rule, list) or not all(isinstance(token, str) for token in rule):
            raise FormatError(
                f"The value of attribute '{field}' in the {owner} is invalid: expecting a list of string lists."
            )
        result.append(list(rule))
    return result


def get_object_list(
    obj: dict[str, Any], field: str, owner: str, decode: Callable[[dict[str, Any]], V]
) -> list[V]:
    """Decode a list of JSON objects with the passed decoding function.

    Raises
    ------
    FormatError
        If the field is not a list of objects or an element fails to decode.
    """
    items = get_typed_field(obj, field, list, owner) or []
    result = []
    for item in items:
        if not isinstance(item, dict):
            raise FormatError(f"An element of attribute '{field}' in the {owner} is invalid: expecting an object.")
        result.append(decode(item))
    return result
