# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module contains error classes for in-toto metadata."""


class InTotoMetadataError(Exception):
    """The base class for in-toto metadata errors."""


class FormatError(InTotoMetadataError):
    """Happens when a metadata envelope or one of its sub-documents is structurally invalid."""


class UnknownTypeError(InTotoMetadataError):
    """Happens when the ``_type`` of a signed payload is missing or is neither ``link`` nor ``layout``."""


class SigningError(InTotoMetadataError):
    """The base error type for signing and signature verification errors."""


class UnsupportedSchemeError(SigningError):
    """Happens when no signature backend is registered for a key type and signature scheme."""


class NoSignatureError(SigningError):
    """Happens when a metablock carries no signature for a key id."""


class InvalidSignatureError(SigningError):
    """Happens when a signature backend rejects a signature."""


class InvalidKeyError(SigningError):
    """Happens when the key material cannot be used for signing."""


class DuplicateBackendError(SigningError):
    """Happens when a signature backend is registered twice for the same key type and scheme."""
