# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module tests the defaults module."""

from pathlib import Path

import pytest

from intoto_metablock.config.defaults import ConfigParser, defaults, load_defaults
from intoto_metablock.models.keys import Key
from intoto_metablock.models.link import Link
from intoto_metablock.models.metablock import Metablock


def test_packaged_defaults() -> None:
    """Test the packaged default values."""
    assert defaults.getint("metadata", "json_indent") == 2
    assert defaults.get_file_mode("metadata", "file_mode", fallback=0) == 0o644
    assert defaults.get_list("keys", "supported_keyid_hash_algorithms") == ["sha256", "sha512"]


def test_load_user_defaults(tmp_path: Path) -> None:
    """Values in the user configuration take precedence."""
    user_config = tmp_path / "defaults.ini"
    user_config.write_text(
        "[metadata]\njson_indent = 4\nfile_mode = 600\n\n[keys]\nsupported_keyid_hash_algorithms = sha384\n",
        encoding="utf-8",
    )
    assert load_defaults(str(user_config)) is True
    assert defaults.getint("metadata", "json_indent") == 4
    assert not Key(keyid_hash_algorithms=["sha256"]).has_supported_hash_algorithms()
    assert Key(keyid_hash_algorithms=["sha384"]).has_supported_hash_algorithms()

    path = tmp_path / "build.link"
    Metablock(signed=Link(name="build")).dump(path)
    assert path.read_text(encoding="utf-8").startswith('{\n    "signed"')
    assert path.stat().st_mode & 0o777 == 0o600


def test_load_missing_user_defaults(tmp_path: Path) -> None:
    """Loading a configuration file that does not exist fails."""
    assert load_defaults(str(tmp_path / "missing.ini")) is False


def test_fallbacks_without_defaults() -> None:
    """Consumers work with the fallback values when no configuration is loaded."""
    defaults.clear()
    assert Metablock(signed=Link()).dumps().startswith('{\n  "signed"')
    assert Key(keyid_hash_algorithms=["sha512"]).has_supported_hash_algorithms()


@pytest.mark.parametrize(
    ("user_config_input", "delimiter", "duplicated_ok", "expect"),
    [
        (
            """
            [test.list]
            list = sha256 sha512
                sha256
            """,
            None,
            False,
            ["sha256", "sha512"],
        ),
        (
            """
            [test.list]
            list = sha256 sha512
                sha256
            """,
            None,
            True,
            ["sha256", "sha512", "sha256"],
        ),
        (
            """
            [test.list]
            list = sha256,sha512
            """,
            ",",
            False,
            ["sha256", "sha512"],
        ),
    ],
)
def test_get_list(user_config_input: str, delimiter: str | None, duplicated_ok: bool, expect: list[str]) -> None:
    """Test parsing lists from the configuration."""
    content = ConfigParser()
    content.read_string(user_config_input)
    assert content.get_list("test.list", "list", delimiter=delimiter, duplicated_ok=duplicated_ok) == expect


def test_get_list_fallback() -> None:
    """Missing items give the fallback value."""
    content = ConfigParser()
    assert content.get_list("missing", "list", fallback=["sha256"]) == ["sha256"]
    assert content.get_list("missing", "list") == []


@pytest.mark.parametrize(
    ("value", "expect"),
    [
        pytest.param("644", 0o644, id="Octal"),
        pytest.param("0600", 0o600, id="Leading zero"),
        pytest.param("rw-r--r--", 0o644, id="Invalid"),
    ],
)
def test_get_file_mode(value: str, expect: int) -> None:
    """Test parsing octal file modes."""
    content = ConfigParser()
    content.read_string(f"[metadata]\nfile_mode = {value}\n")
    assert content.get_file_mode("metadata", "file_mode", fallback=0o644) == expect
