# Copyright (c) 2024 - 2025, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Signed in-toto metadata: links, layouts and the Metablock envelope."""

# The version of this package.
__version__ = "0.1.0"
