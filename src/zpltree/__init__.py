# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""zpltree - Parser and tree model for ZPL indentation-structured configuration.

A small, zero-dependency library that turns ``key`` / ``key = value``
lines nested by leading spaces into a tree of ZplNode objects, with
lookup by name, relative path resolution and child iteration.
"""

__version__ = "0.1.0"

from .configuration import (
    Configuration,
    create_container,
    load,
    parse_source,
    parse_text,
)
from .exceptions import (
    DestroyedNodeError,
    InvalidNameError,
    NotFoundError,
    StructuralLimitError,
    TabIndentationError,
    ZplError,
    ZplSyntaxError,
)
from .names import is_valid_name
from .node import ChildIterator, ZplNode
from .parser import ZplParser, parse_zpl
from .values import decode_value

__all__ = [
    # Entry points
    "Configuration",
    "create_container",
    "parse_text",
    "parse_source",
    "load",
    # Tree
    "ZplNode",
    "ChildIterator",
    # Parsing
    "ZplParser",
    "parse_zpl",
    "decode_value",
    "is_valid_name",
    # Exceptions
    "ZplError",
    "InvalidNameError",
    "NotFoundError",
    "ZplSyntaxError",
    "StructuralLimitError",
    "TabIndentationError",
    "DestroyedNodeError",
]
