# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""The Metablock, a generic signed envelope for links and layouts."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any

from intoto_metablock.canonical import encode_canonical_bytes
from intoto_metablock.config.defaults import defaults
from intoto_metablock.errors import FormatError, InvalidSignatureError, NoSignatureError, UnknownTypeError
from intoto_metablock.json_tools import JsonType, json_extract
from intoto_metablock.models.keys import Key, Signature, decode_signatures
from intoto_metablock.models.layout import Layout
from intoto_metablock.models.link import Link
from intoto_metablock.signing import default_registry
from intoto_metablock.signing.registry import BackendRegistry

logger: logging.Logger = logging.getLogger(__name__)

# The signable payload of a metablock.
Signed = Link | Layout


def decode_signed(signed: dict[str, Any]) -> Signed:
    """Decode the ``signed`` part of a metablock into a link or a layout.

    The ``_type`` field is read first to pick the payload type; the object is then fully decoded.

    Parameters
    ----------
    signed : dict[str, Any]
        The ``signed`` JSON object.

    Returns
    -------
    Signed
        The link or layout.

    Raises
    ------
    UnknownTypeError
        If ``_type`` is missing or is neither ``link`` nor ``layout``.
    FormatError
        If the payload is malformed.
    """
    match json_extract(signed, ["_type"], str):
        case Link.TYPE:
            return Link.from_dict(signed)
        case Layout.TYPE:
            return Layout.from_dict(signed)
        case _:
            raise UnknownTypeError(
                "The '_type' field of the 'signed' part of in-toto metadata must be one of 'link' or 'layout'."
            )


def encode_signed(signed: Signed) -> dict[str, JsonType]:
    """Return the JSON representation of a link or a layout.

    Raises
    ------
    UnknownTypeError
        If the payload is neither a link nor a layout.
    """
    match signed:
        case Link() | Layout():
            return signed.to_dict()
        case _:
            raise UnknownTypeError(
                f"The signed payload must be a Link or a Layout, not {type(signed).__name__}."
            )


@dataclass
class Metablock:
    """A generic container for a signable link or layout and its signatures.

    The ``signed`` payload must not be modified after it is signed: the signatures
    would silently become invalid.
    """

    #: The signable payload.
    signed: Signed

    #: The signatures over the canonical encoding of ``signed``, in order.
    signatures: list[Signature] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.signed, (Link, Layout)):
            raise UnknownTypeError(
                f"The signed payload must be a Link or a Layout, not {type(self.signed).__name__}."
            )

    @classmethod
    def load(cls, path: str | os.PathLike) -> Metablock:
        """Load a metablock from a JSON metadata file.

        Parameters
        ----------
        path : str | os.PathLike
            The path to the metadata file.

        Returns
        -------
        Metablock
            The metablock holding a link or a layout.

        Raises
        ------
        OSError
            If the file cannot be read.
        FormatError
            If the file is not a valid metablock.
        UnknownTypeError
            If the payload is neither a link nor a layout.
        """
        with open(path, mode="rb") as file:
            content = file.read()

        logger.debug("Loading in-toto metadata from %s.", path)
        return cls.loads(content)

    @classmethod
    def loads(cls, content: bytes | str) -> Metablock:
        """Decode a metablock from JSON text.

        Fields other than ``signed`` and ``signatures`` are ignored.

        Raises
        ------
        FormatError
            If the content is not a valid metablock.
        UnknownTypeError
            If the payload is neither a link nor a layout.
        """
        try:
            raw = json.loads(content)
        except (json.JSONDecodeError, UnicodeDecodeError) as error:
            raise FormatError("Cannot deserialize the in-toto metadata as JSON.") from error

        if not isinstance(raw, dict):
            raise FormatError("The in-toto metadata is not a JSON object.")

        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Metablock:
        """Decode a metablock from a JSON object.

        Raises
        ------
        FormatError
            If ``signed`` or ``signatures`` is missing, null or malformed.
        UnknownTypeError
            If the payload is neither a link nor a layout.
        """
        signed = data.get("signed")
        signatures = data.get("signatures")
        if signed is None or signatures is None:
            raise FormatError("In-toto metadata requires 'signed' and 'signatures' parts.")

        decoded_signatures = decode_signatures(signatures)

        if not isinstance(signed, dict):
            raise FormatError("The 'signed' part of in-toto metadata must be a JSON object.")

        return cls(signed=decode_signed(signed), signatures=decoded_signatures)

    def to_dict(self) -> dict[str, JsonType]:
        """Return the JSON representation of the metablock.

        Raises
        ------
        UnknownTypeError
            If the signed payload is neither a link nor a layout.
        """
        return {
            "signed": encode_signed(self.signed),
            "signatures": [signature.to_dict() for signature in self.signatures],
        }

    def dumps(self) -> str:
        """Return the metablock as indented JSON text."""
        indent = defaults.getint("metadata", "json_indent", fallback=2)
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def dump(self, path: str | os.PathLike) -> None:
        """Write the metablock as indented JSON to a file.

        The file is made readable by everyone and writable by its owner only. The write is
        not atomic: a failure while writing can leave a partial file behind.

        Parameters
        ----------
        path : str | os.PathLike
            The path of the file to write.

        Raises
        ------
        OSError
            If the file cannot be written.
        """
        content = self.dumps()
        file_mode = defaults.get_file_mode("metadata", "file_mode", fallback=0o644)
        with open(path, mode="w", encoding="utf-8") as file:
            file.write(content)
        os.chmod(path, file_mode)
        logger.debug("Dumped in-toto %s metadata to %s.", self.signed.TYPE, path)

    def get_signable_representation(self) -> bytes:
        """Return the canonical JSON encoding of the signed payload.

        The signatures are not part of it.

        Raises
        ------
        UnknownTypeError
            If the signed payload is neither a link nor a layout.
        """
        return encode_canonical_bytes(encode_signed(self.signed))

    def get_signature(self, keyid: str) -> Signature | None:
        """Return the first signature created by the key with the given id, or None if there is none."""
        return next((signature for signature in self.signatures if signature.keyid == keyid), None)

    def sign(self, key: Key, registry: BackendRegistry | None = None) -> Signature:
        """Sign the payload with a private key and append the signature.

        Signing again with the same key appends another signature; verification uses the first one.

        Parameters
        ----------
        key : Key
            The signing key, with its private key value.
        registry : BackendRegistry | None
            The signature backends. The default registry is used if None.

        Returns
        -------
        Signature
            The new signature.

        Raises
        ------
        UnsupportedSchemeError
            If no backend supports the key type and signature scheme of the key.
        InvalidKeyError
            If the key cannot be used for signing.
        """
        data = self.get_signable_representation()
        backend = (registry or default_registry).get_for_key(key)

        if self.get_signature(key.keyid) is not None:
            logger.warning("The %s is already signed by key '%s'.", self.signed.TYPE, key.keyid)

        signature = backend.sign(data, key)
        self.signatures.append(signature)
        logger.debug("Signed the %s with key '%s'.", self.signed.TYPE, key.keyid)
        return signature

    def verify_signature(self, key: Key, registry: BackendRegistry | None = None) -> None:
        """Verify the first signature created by a key.

        Parameters
        ----------
        key : Key
            The verification key. Only its public key value is used.
        registry : BackendRegistry | None
            The signature backends. The default registry is used if None.

        Raises
        ------
        NoSignatureError
            If there is no signature for the key id.
        UnsupportedSchemeError
            If no backend supports the key type and signature scheme of the key.
        InvalidSignatureError
            If the signature is invalid.
        """
        signature = self.get_signature(key.keyid)
        if signature is None:
            raise NoSignatureError(f"No signature found for key '{key.keyid}'.")

        data = self.get_signable_representation()
        backend = (registry or default_registry).get_for_key(key)

        if not backend.verify(data, signature, key):
            raise InvalidSignatureError(f"Invalid signature for key '{key.keyid}'.")
        logger.debug("Verified the signature of key '%s'.", key.keyid)
