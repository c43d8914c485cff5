# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Keys and signatures of in-toto metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from intoto_metablock.config.defaults import defaults
from intoto_metablock.errors import FormatError
from intoto_metablock.json_tools import JsonType, get_str, get_str_list, get_typed_field
from intoto_metablock.set_tools import subset_check


@dataclass
class KeyVal:
    """The values of a key, as opposed to key metadata such as the key id or the key type.

    For public keys the ``private`` field is an empty string.
    """

    #: The private key material.
    private: str = ""

    #: The public key material.
    public: str = ""

    def to_dict(self) -> dict[str, JsonType]:
        """Return the JSON representation of the key values."""
        return {"private": self.private, "public": self.public}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> KeyVal:
        """Decode the key values from a JSON object."""
        return cls(private=get_str(data, "private", "keyval"), public=get_str(data, "public", "keyval"))


@dataclass
class Key:
    """A generic in-toto key.

    It holds the key id, the hash algorithms supported to create that id, the
    key type, the signature scheme and the key values.
    """

    #: The opaque key identifier.
    keyid: str = ""

    #: The hash algorithms that may be used to compute the key id.
    keyid_hash_algorithms: list[str] = field(default_factory=list)

    #: The key type, e.g. ``ed25519``.
    keytype: str = ""

    #: The key values.
    keyval: KeyVal = field(default_factory=KeyVal)

    #: The signature scheme, e.g. ``ed25519``.
    scheme: str = ""

    def to_dict(self) -> dict[str, JsonType]:
        """Return the JSON representation of the key."""
        return {
            "keyid": self.keyid,
            "keyid_hash_algorithms": list(self.keyid_hash_algorithms),
            "keytype": self.keytype,
            "keyval": self.keyval.to_dict(),
            "scheme": self.scheme,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Key:
        """Decode a key from a JSON object.

        Raises
        ------
        FormatError
            If a field holds a value of an unexpected type.
        """
        keyval = get_typed_field(data, "keyval", dict, "key")
        return cls(
            keyid=get_str(data, "keyid", "key"),
            keyid_hash_algorithms=get_str_list(data, "keyid_hash_algorithms", "key"),
            keytype=get_str(data, "keytype", "key"),
            keyval=KeyVal.from_dict(keyval) if keyval is not None else KeyVal(),
            scheme=get_str(data, "scheme", "key"),
        )

    def public_key(self) -> Key:
        """Return a copy of this key without the private key material."""
        return Key(
            keyid=self.keyid,
            keyid_hash_algorithms=list(self.keyid_hash_algorithms),
            keytype=self.keytype,
            keyval=KeyVal(public=self.keyval.public),
            scheme=self.scheme,
        )

    def has_supported_hash_algorithms(self, supported: list[str] | None = None) -> bool:
        """Check that the key id hash algorithms are all supported.

        Parameters
        ----------
        supported : list[str] | None
            The supported hash algorithms. When None, the ``keys.supported_keyid_hash_algorithms``
            default value is used.

        Returns
        -------
        bool
            True if every algorithm in ``keyid_hash_algorithms`` is supported.
        """
        if supported is None:
            supported = defaults.get_list(
                "keys", "supported_keyid_hash_algorithms", fallback=["sha256", "sha512"]
            )
        return subset_check(self.keyid_hash_algorithms, supported)


@dataclass
class Signature:
    """A signature and the id of the key that created it.

    The signature scheme is found in the corresponding key.
    """

    #: The id of the signing key.
    keyid: str = ""

    #: The encoded signature.
    sig: str = ""

    def to_dict(self) -> dict[str, JsonType]:
        """Return the JSON representation of the signature."""
        return {"keyid": self.keyid, "sig": self.sig}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Signature:
        """Decode a signature from a JSON object."""
        return cls(keyid=get_str(data, "keyid", "signature"), sig=get_str(data, "sig", "signature"))


def decode_signatures(signatures: JsonType) -> list[Signature]:
    """Decode the ``signatures`` array of a metablock, preserving the order.

    Raises
    ------
    FormatError
        If the value is not an array of objects or a signature is malformed.
    """
    if not isinstance(signatures, list):
        raise FormatError("The value of attribute 'signatures' is invalid: expecting an array.")

    result = []
    for signature in signatures:
        if not isinstance(signature, dict):
            raise FormatError("A signature in the metadata is invalid: expecting an object.")
        result.append(Signature.from_dict(signature))
    return result
