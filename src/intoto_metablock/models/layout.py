# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""The in-toto Layout, the definition of a software supply chain."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from intoto_metablock.errors import FormatError
from intoto_metablock.json_tools import (
    JsonType,
    get_int,
    get_object,
    get_object_list,
    get_rule_list,
    get_str,
    get_str_list,
)
from intoto_metablock.models.keys import Key

# The directory holding the links of a sub-layout: the name of the step and the first 8
# characters of the functionary key id.
SUBLAYOUT_LINK_DIR_FORMAT = "{name}.{keyid:.8}"


@dataclass
class SupplyChainItem:
    """The fields common to steps and inspections.

    The artifact rules in ``expected_materials`` and ``expected_products`` are token lists
    such as ``["MATCH", "*", "WITH", "PRODUCTS", "FROM", "build"]``. They are not interpreted here.
    """

    #: The name of the item.
    name: str = ""

    #: The artifact rules constraining the materials.
    expected_materials: list[list[str]] = field(default_factory=list)

    #: The artifact rules constraining the products.
    expected_products: list[list[str]] = field(default_factory=list)

    def _item_fields(self) -> dict[str, JsonType]:
        return {
            "name": self.name,
            "expected_materials": [list(rule) for rule in self.expected_materials],
            "expected_products": [list(rule) for rule in self.expected_products],
        }


def _check_item_type(data: dict[str, Any], expected: str) -> None:
    type_ = data.get("_type")
    if type_ is not None and type_ != expected:
        raise FormatError(f"The value of attribute '_type' of a layout item must be '{expected}'.")


@dataclass
class Step(SupplyChainItem):
    """A supply chain step performed by a functionary.

    Link metadata signed by ``threshold`` of the keys in ``pubkeys`` is the evidence
    that the step was performed.
    """

    TYPE: ClassVar[str] = "step"

    #: The ids of the keys authorized to sign links for this step.
    pubkeys: list[str] = field(default_factory=list)

    #: The command the functionary is expected to run.
    expected_command: list[str] = field(default_factory=list)

    #: The number of functionaries required to agree on the step.
    threshold: int = 0

    def to_dict(self) -> dict[str, JsonType]:
        """Return the JSON representation of the step."""
        return {
            "_type": self.TYPE,
            "pubkeys": list(self.pubkeys),
            "expected_command": list(self.expected_command),
            "threshold": self.threshold,
            **self._item_fields(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Step:
        """Decode a step from a JSON object.

        Raises
        ------
        FormatError
            If a field holds a value of an unexpected type.
        """
        _check_item_type(data, cls.TYPE)
        return cls(
            name=get_str(data, "name", "step"),
            expected_materials=get_rule_list(data, "expected_materials", "step"),
            expected_products=get_rule_list(data, "expected_products", "step"),
            pubkeys=get_str_list(data, "pubkeys", "step"),
            expected_command=get_str_list(data, "expected_command", "step"),
            threshold=get_int(data, "threshold", "step"),
        )


@dataclass
class Inspection(SupplyChainItem):
    """A command run by the verifier during final product verification.

    The inspection produces unsigned link metadata constrained by its artifact rules.
    """

    TYPE: ClassVar[str] = "inspection"

    #: The command to run.
    run: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, JsonType]:
        """Return the JSON representation of the inspection."""
        return {
            "_type": self.TYPE,
            "run": list(self.run),
            **self._item_fields(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Inspection:
        """Decode an inspection from a JSON object.

        Raises
        ------
        FormatError
            If a field holds a value of an unexpected type.
        """
        _check_item_type(data, cls.TYPE)
        return cls(
            name=get_str(data, "name", "inspection"),
            expected_materials=get_rule_list(data, "expected_materials", "inspection"),
            expected_products=get_rule_list(data, "expected_products", "inspection"),
            run=get_str_list(data, "run", "inspection"),
        )


@dataclass
class Layout:
    """The definition of a software supply chain.

    It lists the steps of the supply chain, the functionaries authorized to perform
    them, identified by their public keys, and the inspections run during verification.
    """

    TYPE: ClassVar[str] = "layout"

    #: The steps, in order.
    steps: list[Step] = field(default_factory=list)

    #: The inspections, in order.
    inspect: list[Inspection] = field(default_factory=list)

    #: The functionary keys, by key id.
    keys: dict[str, Key] = field(default_factory=dict)

    #: The expiration date of the layout.
    expires: str = ""

    #: A human readable description of the supply chain.
    readme: str = ""

    def to_dict(self) -> dict[str, JsonType]:
        """Return the JSON representation of the layout."""
        return {
            "_type": self.TYPE,
            "steps": [step.to_dict() for step in self.steps],
            "inspect": [inspection.to_dict() for inspection in self.inspect],
            "keys": {keyid: key.to_dict() for keyid, key in self.keys.items()},
            "expires": self.expires,
            "readme": self.readme,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Layout:
        """Decode a layout from a JSON object.

        Raises
        ------
        FormatError
            If a field, or a field of a nested step, inspection or key, is malformed.
        """
        keys = {}
        for keyid, key in get_object(data, "keys", "layout").items():
            if not isinstance(key, dict):
                raise FormatError(f"The key '{keyid}' in the layout is invalid: expecting an object.")
            keys[keyid] = Key.from_dict(key)

        return cls(
            steps=get_object_list(data, "steps", "layout", Step.from_dict),
            inspect=get_object_list(data, "inspect", "layout", Inspection.from_dict),
            keys=keys,
            expires=get_str(data, "expires", "layout"),
            readme=get_str(data, "readme", "layout"),
        )

    def step_names(self) -> list[str]:
        """Return the names of the steps, in order. The steps themselves are in ``steps``."""
        return [step.name for step in self.steps]

    def inspection_names(self) -> list[str]:
        """Return the names of the inspections, in order. The inspections themselves are in ``inspect``."""
        return [inspection.name for inspection in self.inspect]

    def get_key(self, keyid: str) -> Key | None:
        """Return the functionary key with the given id, or None if the layout does not list it."""
        return self.keys.get(keyid)


def sublayout_link_dir(name: str, keyid: str) -> str:
    """Return the name of the directory holding the links of a sub-layout.

    Parameters
    ----------
    name : str
        The name of the step the sub-layout stands for.
    keyid : str
        The id of the functionary key that signed the sub-layout.

    Returns
    -------
    str
        ``<name>.<first 8 characters of keyid>``.
    """
    return SUBLAYOUT_LINK_DIR_FORMAT.format(name=name, keyid=keyid)
