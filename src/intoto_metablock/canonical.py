# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Canonical JSON encoding of signable metadata."""

from securesystemslib.formats import encode_canonical

from intoto_metablock.json_tools import JsonType


def encode_canonical_bytes(data: JsonType) -> bytes:
    """Return the canonical JSON encoding of the data as UTF-8 bytes.

    The encoding sorts object keys and has no insignificant whitespace, so equal data
    always gives identical bytes. For more details, see:
        http://wiki.laptop.org/go/Canonical_JSON.

    Parameters
    ----------
    data : JsonType
        The data to encode. Floating point numbers are not supported.

    Returns
    -------
    bytes
        The canonical encoding.

    Raises
    ------
    securesystemslib.exceptions.FormatError
        If the data cannot be canonicalized.
    """
    return encode_canonical(data).encode("utf-8")
