# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""The registry of signature backends."""

import logging
import threading
from typing import Protocol

from intoto_metablock.errors import DuplicateBackendError, UnsupportedSchemeError
from intoto_metablock.models.keys import Key, Signature

logger: logging.Logger = logging.getLogger(__name__)


class SignatureBackend(Protocol):
    """Interface for the cryptographic primitives of one key type and signature scheme."""

    def sign(self, data: bytes, key: Key) -> Signature:
        """Sign the data with the private key material of the key.

        Parameters
        ----------
        data : bytes
            The canonical bytes to sign.
        key : Key
            The signing key.

        Returns
        -------
        Signature
            The signature, carrying the id of the key.
        """

    def verify(self, data: bytes, signature: Signature, key: Key) -> bool:
        """Verify a signature of the data with the public key material of the key.

        Parameters
        ----------
        data : bytes
            The canonical bytes that were signed.
        signature : Signature
            The signature to verify.
        key : Key
            The verification key.

        Returns
        -------
        bool
            True if the signature is valid.
        """


class BackendRegistry:
    """Map (key type, signature scheme) pairs to signature backends.

    Backends are meant to be registered at start-up. Registration holds a lock; lookups do not.
    """

    def __init__(self) -> None:
        self._backends: dict[tuple[str, str], SignatureBackend] = {}
        self._lock = threading.Lock()

    def register(self, keytype: str, scheme: str, backend: SignatureBackend, replace: bool = False) -> None:
        """Register a backend for a key type and signature scheme.

        Parameters
        ----------
        keytype : str
            The key type, e.g. ``ed25519``.
        scheme : str
            The signature scheme, e.g. ``ed25519``.
        backend : SignatureBackend
            The backend.
        replace : bool
            If True, replace a backend already registered for the pair.

        Raises
        ------
        DuplicateBackendError
            If a backend is already registered for the pair and ``replace`` is False.
        """
        with self._lock:
            if (keytype, scheme) in self._backends and not replace:
                raise DuplicateBackendError(f"A backend is already registered for {keytype}/{scheme}.")
            backends = dict(self._backends)
            backends[(keytype, scheme)] = backend
            self._backends = backends
        logger.debug("Registered signature backend %s for %s/%s.", type(backend).__name__, keytype, scheme)

    def get(self, keytype: str, scheme: str, keyid: str = "") -> SignatureBackend:
        """Return the backend registered for a key type and signature scheme.

        Parameters
        ----------
        keytype : str
            The key type.
        scheme : str
            The signature scheme.
        keyid : str
            The id of the key the backend is looked up for, used in the error message.

        Returns
        -------
        SignatureBackend
            The backend.

        Raises
        ------
        UnsupportedSchemeError
            If no backend is registered for the pair.
        """
        backend = self._backends.get((keytype, scheme))
        if backend is None:
            raise UnsupportedSchemeError(
                f"The key type '{keytype}' with signature scheme '{scheme}' of key '{keyid}' is not supported."
            )
        return backend

    def get_for_key(self, key: Key) -> SignatureBackend:
        """Return the backend for the key type and signature scheme of a key."""
        return self.get(key.keytype, key.scheme, key.keyid)

    def supported(self) -> list[tuple[str, str]]:
        """Return the registered (key type, signature scheme) pairs."""
        return sorted(self._backends)
