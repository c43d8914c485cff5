# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""The ed25519 signature backend.

Key values and signatures are hex-encoded: the public key is the 32-byte raw key,
the private key is either the 32-byte seed or the 64-byte seed followed by the public key.
"""

import binascii
import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey

from intoto_metablock.errors import InvalidKeyError
from intoto_metablock.models.keys import Key, Signature

logger: logging.Logger = logging.getLogger(__name__)

SEED_SIZE = 32
SIGNATURE_SIZE = 64


class Ed25519Backend:
    """Sign and verify with ed25519 keys."""

    def sign(self, data: bytes, key: Key) -> Signature:
        """Sign the data with the private key of an ed25519 key.

        Raises
        ------
        InvalidKeyError
            If the private key value is missing or malformed.
        """
        if not key.keyval.private:
            raise InvalidKeyError(f"The key '{key.keyid}' has no private key value.")
        try:
            private_bytes = bytes.fromhex(key.keyval.private)
        except ValueError as error:
            raise InvalidKeyError(f"The private key value of key '{key.keyid}' is not hex-encoded.") from error
        if len(private_bytes) not in (SEED_SIZE, 2 * SEED_SIZE):
            raise InvalidKeyError(f"The private key value of key '{key.keyid}' has an invalid length.")

        private_key = Ed25519PrivateKey.from_private_bytes(private_bytes[:SEED_SIZE])
        return Signature(keyid=key.keyid, sig=binascii.hexlify(private_key.sign(data)).decode("ascii"))

    def verify(self, data: bytes, signature: Signature, key: Key) -> bool:
        """Verify an ed25519 signature. Malformed key or signature values are rejected."""
        try:
            public_key = Ed25519PublicKey.from_public_bytes(bytes.fromhex(key.keyval.public))
            sig_bytes = bytes.fromhex(signature.sig)
        except ValueError as error:
            logger.debug("Cannot decode the key or signature of key '%s': %s", key.keyid, error)
            return False
        if len(sig_bytes) != SIGNATURE_SIZE:
            return False

        try:
            public_key.verify(sig_bytes, data)
        except InvalidSignature:
            return False
        return True
