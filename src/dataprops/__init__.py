# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""dataprops -- hierarchical, human-editable property files with interpolation."""

from dataprops.errors import (
    IncludeCycleError,
    IncludeNotFoundError,
    MalformedLineError,
    MissingContextError,
    NoValueError,
    ParseError,
    PropertiesError,
    StackUnderflowError,
    UnfinishedBlockError,
)
from dataprops.properties import LookupResult, Properties
from dataprops.store import PropertyStore

__all__ = [
    "__version__",
    "Properties",
    "PropertyStore",
    "LookupResult",
    "PropertiesError",
    "ParseError",
    "MalformedLineError",
    "StackUnderflowError",
    "UnfinishedBlockError",
    "IncludeCycleError",
    "IncludeNotFoundError",
    "MissingContextError",
    "NoValueError",
]
__version__ = "0.1.0"
