# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Fixtures for tests."""
import hashlib
from collections.abc import Iterator

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from intoto_metablock.config.defaults import defaults, load_defaults
from intoto_metablock.models.keys import Key, KeyVal
from intoto_metablock.models.layout import Inspection, Layout, Step
from intoto_metablock.models.link import Link

# We need to pass fixture names as arguments to maintain an order.
# pylint: disable=redefined-outer-name


def make_ed25519_key() -> Key:
    """Generate an ed25519 key with hex-encoded key values."""
    private_key = Ed25519PrivateKey.generate()
    public_hex = private_key.public_key().public_bytes_raw().hex()
    return Key(
        keyid=hashlib.sha256(public_hex.encode()).hexdigest(),
        keyid_hash_algorithms=["sha256", "sha512"],
        keytype="ed25519",
        keyval=KeyVal(private=private_key.private_bytes_raw().hex(), public=public_hex),
        scheme="ed25519",
    )


@pytest.fixture(autouse=True)
def setup_test() -> Iterator[None]:
    """Load the packaged default values for each test and clear them afterwards."""
    load_defaults()
    yield
    defaults.clear()


@pytest.fixture()
def ed25519_key() -> Key:
    """Return a fresh ed25519 key with its private key value."""
    return make_ed25519_key()


@pytest.fixture()
def link() -> Link:
    """Return a link with materials, products and byproducts."""
    return Link(
        name="build",
        materials={"src/main.c": {"sha256": "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"}},
        products={"bin/main": {"sha256": "2c26b46b68ffc68ff99b453c1d30413413422d706483bfa0f98a5e886266e7ae"}},
        byproducts={"return-value": 0, "stdout": "", "stderr": ""},
        command=["make", "all"],
        environment={"workdir": "/src"},
    )


@pytest.fixture()
def layout(ed25519_key: Key) -> Layout:
    """Return a layout with one step, one inspection and one functionary key."""
    return Layout(
        steps=[
            Step(
                name="build",
                expected_materials=[["MATCH", "*", "WITH", "PRODUCTS", "FROM", "clone"], ["DISALLOW", "*"]],
                expected_products=[["CREATE", "bin/main"]],
                pubkeys=[ed25519_key.keyid],
                expected_command=["make", "all"],
                threshold=1,
            )
        ],
        inspect=[
            Inspection(
                name="untar",
                expected_materials=[["MATCH", "main.tar.gz", "WITH", "PRODUCTS", "FROM", "build"]],
                run=["tar", "xzf", "main.tar.gz"],
            )
        ],
        keys={ed25519_key.keyid: ed25519_key.public_key()},
        expires="2030-01-01T00:00:00Z",
        readme="Build and package main.",
    )


@pytest.fixture()
def other_ed25519_key() -> Key:
    """Return another fresh ed25519 key."""
    return make_ed25519_key()
