# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""The in-toto Link, the evidence of a supply chain step performed by a functionary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from intoto_metablock.json_tools import JsonType, get_object, get_str, get_str_list

# The file name of a signed link: the link name and the first 8 characters of the signing key id,
# e.g. ``package.2f89b927.link``.
LINK_NAME_FORMAT = "{name}.{keyid:.8}.link"

# The file name of a link that is not signed, e.g. ``unsigned.link``.
LINK_NAME_FORMAT_SHORT = "{name}.link"


@dataclass
class Link:
    """Evidence of a supply chain step performed by a functionary.

    A link is wrapped in a :class:`~intoto_metablock.models.metablock.Metablock` to be
    signed, verified, and read from or written to disk.
    """

    #: The value of the ``_type`` discriminator.
    TYPE: ClassVar[str] = "link"

    #: The name of the step.
    name: str = ""

    #: The artifacts consumed by the step, mapping paths to hashes.
    materials: dict[str, JsonType] = field(default_factory=dict)

    #: The artifacts produced by the step, mapping paths to hashes.
    products: dict[str, JsonType] = field(default_factory=dict)

    #: Other information about the step, e.g. the standard streams and return value of the command.
    byproducts: dict[str, JsonType] = field(default_factory=dict)

    #: The command executed in the step.
    command: list[str] = field(default_factory=list)

    #: Information about the environment the step was performed in.
    environment: dict[str, JsonType] = field(default_factory=dict)

    def to_dict(self) -> dict[str, JsonType]:
        """Return the JSON representation of the link."""
        return {
            "_type": self.TYPE,
            "name": self.name,
            "materials": dict(self.materials),
            "products": dict(self.products),
            "byproducts": dict(self.byproducts),
            "command": list(self.command),
            "environment": dict(self.environment),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Link:
        """Decode a link from a JSON object.

        Missing fields take their empty value and unknown fields are ignored.

        Raises
        ------
        FormatError
            If a field holds a value of an unexpected type.
        """
        return cls(
            name=get_str(data, "name", "link"),
            materials=get_object(data, "materials", "link"),
            products=get_object(data, "products", "link"),
            byproducts=get_object(data, "byproducts", "link"),
            command=get_str_list(data, "command", "link"),
            environment=get_object(data, "environment", "link"),
        )


def link_file_name(name: str, keyid: str | None = None) -> str:
    """Return the file name of a link.

    Parameters
    ----------
    name : str
        The name of the link.
    keyid : str | None
        The id of the key that signed the link, or None if the link is not signed.

    Returns
    -------
    str
        ``<name>.<first 8 characters of keyid>.link``, or ``<name>.link`` without a key id.
    """
    if not keyid:
        return LINK_NAME_FORMAT_SHORT.format(name=name)
    return LINK_NAME_FORMAT.format(name=name, keyid=keyid)
