# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Tests for keys and signatures."""

import pytest

from intoto_metablock.errors import FormatError
from intoto_metablock.models.keys import Key, KeyVal, Signature, decode_signatures


def test_key_json_field_order() -> None:
    """The JSON representation of a key follows the in-toto field order."""
    key = Key(
        keyid="abc",
        keyid_hash_algorithms=["sha256"],
        keytype="ed25519",
        keyval=KeyVal(public="00"),
        scheme="ed25519",
    )
    data = key.to_dict()
    assert list(data) == ["keyid", "keyid_hash_algorithms", "keytype", "keyval", "scheme"]
    assert data["keyval"] == {"private": "", "public": "00"}
    assert Key.from_dict(data) == key


def test_key_from_dict_defaults() -> None:
    """Missing fields take their empty value and unknown fields are ignored."""
    assert Key.from_dict({"keyid": "abc", "unknown": 1}) == Key(keyid="abc")


@pytest.mark.parametrize(
    ("data"),
    [
        pytest.param({"keyid": 1}, id="Integer key id"),
        pytest.param({"keyid_hash_algorithms": "sha256"}, id="Hash algorithms not a list"),
        pytest.param({"keyid_hash_algorithms": ["sha256", 1]}, id="Hash algorithm not a string"),
        pytest.param({"keyval": "00"}, id="Key values not an object"),
        pytest.param({"keyval": {"public": ["00"]}}, id="Public key value not a string"),
    ],
)
def test_key_from_dict_invalid(data: dict) -> None:
    """Fields of an unexpected type are rejected."""
    with pytest.raises(FormatError):
        Key.from_dict(data)


def test_public_key(ed25519_key: Key) -> None:
    """The public key has no private key value."""
    public_key = ed25519_key.public_key()
    assert public_key.keyval.private == ""
    assert public_key.keyval.public == ed25519_key.keyval.public
    assert public_key.keyid == ed25519_key.keyid
    assert ed25519_key.keyval.private


@pytest.mark.parametrize(
    ("algorithms", "expected"),
    [
        pytest.param([], True, id="No algorithm"),
        pytest.param(["sha256"], True, id="sha256"),
        pytest.param(["sha512", "sha256"], True, id="sha512 and sha256"),
        pytest.param(["md5"], False, id="md5"),
        pytest.param(["sha256", "md5"], False, id="sha256 and md5"),
    ],
)
def test_has_supported_hash_algorithms(algorithms: list[str], expected: bool) -> None:
    """Test checking key id hash algorithms against the configured algorithms."""
    assert Key(keyid_hash_algorithms=algorithms).has_supported_hash_algorithms() is expected


def test_has_supported_hash_algorithms_explicit() -> None:
    """The supported algorithms can be passed explicitly."""
    assert Key(keyid_hash_algorithms=["md5"]).has_supported_hash_algorithms(["md5"])
    assert not Key(keyid_hash_algorithms=["sha256"]).has_supported_hash_algorithms([])


def test_decode_signatures() -> None:
    """Signatures are decoded in order."""
    signatures = decode_signatures([{"keyid": "b", "sig": "01"}, {"keyid": "a", "sig": "02", "extra": True}])
    assert signatures == [Signature(keyid="b", sig="01"), Signature(keyid="a", sig="02")]
    assert not decode_signatures([])


@pytest.mark.parametrize(
    ("signatures"),
    [
        pytest.param({}, id="Object"),
        pytest.param("sig", id="String"),
        pytest.param(["sig"], id="String element"),
        pytest.param([{"keyid": 1, "sig": "00"}], id="Integer key id"),
    ],
)
def test_decode_signatures_invalid(signatures: object) -> None:
    """Malformed signature arrays are rejected."""
    with pytest.raises(FormatError):
        decode_signatures(signatures)  # type: ignore[arg-type]
