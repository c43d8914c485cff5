# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module provides functions to manage default values."""

import configparser
import logging
import os
import pathlib

logger: logging.Logger = logging.getLogger(__name__)


class ConfigParser(configparser.ConfigParser):
    """This class extends ConfigParser with useful methods."""

    def get_list(
        self,
        section: str,
        item: str,
        delimiter: str | None = None,
        fallback: list | None = None,
        duplicated_ok: bool = False,
    ) -> list:
        """Parse and return a list of strings from an item in ``defaults.ini``.

        If ``delimiter`` is not set (default: None), return strings are split on any whitespace character
        and will discard empty strings from the result. If `delimiter` is set, it will be used to split
        the list of strings only (any whitespace character are not removed).

        If ``duplicated_ok`` is True (default: False), duplicated values are not removed from the final list.
        The order of the first occurrence of each value is preserved.

        Parameters
        ----------
        section : str
            The section in ``defaults.ini``.
        item : str
            The item to parse the list.
        delimiter : str | None
            The delimiter used to split the strings.
        fallback : list | None
            The fallback value in case of errors.
        duplicated_ok : bool
            If True allow duplicate values.

        Returns
        -------
        list
            The result list of strings or the fallback if the item does not exist.

        Examples
        --------
        Given the following ``defaults.ini``

        .. code-block::

            [keys]
            supported_keyid_hash_algorithms =
                sha256 sha512

        >>> config_parser.get_list("keys", "supported_keyid_hash_algorithms")
        ['sha256', 'sha512']
        """
        try:
            value = self.get(section, item)
            if isinstance(value, str):
                content = value.split(sep=delimiter)

                if duplicated_ok:
                    return content

                return list(dict.fromkeys(content))
        except (configparser.NoOptionError, configparser.NoSectionError) as error:
            logger.debug(error)

        return fallback or []

    def get_file_mode(self, section: str, item: str, fallback: int) -> int:
        """Parse an octal file mode such as ``644`` from an item in ``defaults.ini``.

        Parameters
        ----------
        section : str
            The section in ``defaults.ini``.
        item : str
            The item holding the octal permission bits.
        fallback : int
            The mode returned when the item is missing or is not a valid octal number.

        Returns
        -------
        int
            The file mode.
        """
        value = self.get(section, item, fallback=None)
        if value is None:
            return fallback
        try:
            return int(value, 8)
        except ValueError:
            logger.error("Invalid file mode '%s' for %s.%s, using %o.", value, section, item, fallback)
            return fallback


defaults = ConfigParser()


def load_defaults(user_config_path: str | None = None) -> bool:
    """Read the default values from ``defaults.ini`` file and store them in the defaults global object.

    Parameters
    ----------
    user_config_path : str | None
        The path to the user's defaults configuration file. Its values take precedence over the packaged ones.

    Returns
    -------
    bool
        Return True if succeeded or False if failed.
    """
    curr_dir = pathlib.Path(__file__).parent.absolute()
    config_files = [os.path.join(curr_dir, "defaults.ini")]
    if user_config_path:
        if not os.path.isfile(user_config_path):
            logger.error("The user configuration file %s does not exist.", user_config_path)
            return False
        config_files.append(user_config_path)

    try:
        defaults.read(config_files, encoding="utf8")
        return True
    except (configparser.Error, ValueError) as error:
        logger.error("Failed to read the defaults.ini files.")
        logger.error(error)
        return False
