# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Set operations on strings, used to compare artifact paths and key ids."""

from __future__ import annotations

import fnmatch
import logging
import re
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

logger: logging.Logger = logging.getLogger(__name__)


class StringSet:
    """A finite collection of distinct strings without ordering guarantee."""

    def __init__(self, elements: Iterable[str] = ()) -> None:
        self._elements: set[str] = set(elements)

    def has(self, element: str) -> bool:
        """Return True if the element is a member of the set."""
        return element in self._elements

    def add(self, element: str) -> None:
        """Add the element to the set. Adding an existing member has no effect."""
        self._elements.add(element)

    def remove(self, element: str) -> None:
        """Remove the element from the set if it is a member."""
        self._elements.discard(element)

    def intersection(self, other: StringSet) -> StringSet:
        """Return a new set with the elements that are also in ``other``."""
        return StringSet(element for element in self._elements if other.has(element))

    def difference(self, other: StringSet) -> StringSet:
        """Return a new set with the elements that are not in ``other``."""
        return StringSet(element for element in self._elements if not other.has(element))

    def filter(self, pattern: str) -> StringSet:
        """Return a new set with the elements matching a shell-style glob pattern.

        The pattern supports ``*``, ``?`` and ``[...]``, see :mod:`fnmatch`. Matching is
        case-sensitive. A malformed pattern, e.g. with an unterminated ``[``, a reversed
        range or a trailing backslash, matches no element and a warning is logged.

        Parameters
        ----------
        pattern : str
            The glob pattern.

        Returns
        -------
        StringSet
            The matching elements.
        """
        try:
            _check_pattern(pattern)
            matcher = re.compile(fnmatch.translate(pattern))
        except ValueError as error:
            logger.warning("%s, pattern was '%s'", error, pattern)
            return StringSet()

        return StringSet(element for element in self._elements if matcher.match(element))

    def slice(self) -> list[str]:
        """Return the elements in no particular order. Sort the result if a stable order is needed."""
        return list(self._elements)

    def __contains__(self, element: object) -> bool:
        return element in self._elements

    def __iter__(self) -> Iterator[str]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StringSet):
            return NotImplemented
        return self._elements == other._elements

    def __repr__(self) -> str:
        return f"StringSet({sorted(self._elements)!r})"


def _check_pattern(pattern: str) -> None:
    """Raise ValueError if the glob pattern is malformed.

    :func:`fnmatch.translate` accepts any pattern: it treats an unterminated ``[`` or a
    trailing backslash as literal characters, and a reversed range such as ``[z-a]`` as
    matching nothing.
    """
    trailing_backslashes = len(pattern) - len(pattern.rstrip("\\"))
    if trailing_backslashes % 2 == 1:
        raise ValueError("syntax error in pattern: trailing backslash")

    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        index += 1
        if char != "[":
            continue
        start = index
        if start < length and pattern[start] == "!":
            start += 1
        end = start
        # A ']' right after the opening bracket is part of the class.
        if end < length and pattern[end] == "]":
            end += 1
        while end < length and pattern[end] != "]":
            end += 1
        if end >= length:
            raise ValueError("syntax error in pattern: unterminated character class")
        _check_ranges(pattern[start:end])
        index = end + 1


def _check_ranges(char_class: str) -> None:
    """Raise ValueError if a range of a character class is reversed, e.g. ``z-a``."""
    index = 0
    while index < len(char_class):
        if index + 2 < len(char_class) and char_class[index + 1] == "-":
            if char_class[index] > char_class[index + 2]:
                raise ValueError(
                    f"syntax error in pattern: reversed range '{char_class[index:index + 3]}'"
                )
            index += 3
        else:
            index += 1


def subset_check(subset: Sequence[str], superset: Sequence[str]) -> bool:
    """Check that every string of ``subset`` occurs at least once in ``superset``.

    Order and duplicates are irrelevant. This is used, for instance, to check the
    ``keyid_hash_algorithms`` of a key against the supported hash algorithms.

    Parameters
    ----------
    subset : Sequence[str]
        The strings to look for.
    superset : Sequence[str]
        The strings to look in.

    Returns
    -------
    bool
        True if all strings of ``subset`` are found in ``superset``.
    """
    for sub in subset:
        if sub not in superset:
            # An element of subset is missing, e.g. an unsupported hash algorithm.
            return False
    return True


def get_key_strings(mapping: Mapping[str, Any]) -> list[str]:
    """Return the keys of a string-keyed mapping in no particular order."""
    return list(mapping.keys())
