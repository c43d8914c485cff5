# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Signature backends, selected by key type and signature scheme."""

from intoto_metablock.signing.ed25519 import Ed25519Backend
from intoto_metablock.signing.registry import BackendRegistry, SignatureBackend

default_registry = BackendRegistry()
default_registry.register("ed25519", "ed25519", Ed25519Backend())

__all__ = ["BackendRegistry", "Ed25519Backend", "SignatureBackend", "default_registry"]
