# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Command line reader for ZPL files.

Usage:
    zpltree FILE [PATH ...] [--tree] [--log-level LEVEL]

Examples:
    # List top-level entries
    zpltree data/example.zpl

    # Print the whole tree
    zpltree data/example.zpl --tree

    # Look up values
    zpltree data/example.zpl main/type main/frontend/bind
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .configuration import create_container
from .exceptions import NotFoundError, ZplError
from .node import ZplNode
from .parser import DEFAULT_MAX_DEPTH, TAB_POLICIES

LOG = logging.getLogger(__name__)

EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _depth_limit(text: str) -> int | None:
    if text.lower() == 'none':
        return None
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError("must be a positive integer or 'none'")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='zpltree',
        description='Read a ZPL configuration file and print entries or values.',
    )
    parser.add_argument('file', help='ZPL file to read')
    parser.add_argument('paths', nargs='*', metavar='PATH',
                        help="slash separated path to look up, e.g. 'main/frontend/bind'")
    parser.add_argument('--tree', action='store_true',
                        help='print the whole tree instead of the top-level names')
    parser.add_argument('--max-depth', type=_depth_limit, default=DEFAULT_MAX_DEPTH,
                        help="indentation stack limit, or 'none' (default: %(default)s)")
    parser.add_argument('--tabs', choices=TAB_POLICIES, default='literal',
                        help='handling of tabs in indentation (default: %(default)s)')
    parser.add_argument('--log-level', default='WARNING',
                        help='logging level (default: %(default)s)')
    return parser


def format_entry(node: ZplNode) -> str:
    if node.value is None:
        return node.name
    return f"{node.name} = {node.value}"


def format_tree(root: ZplNode, indent: str = '    ') -> list[str]:
    """Return one line per descendant of ``root``, indented by depth."""
    base = root.depth + 1
    return [
        f"{indent * (node.depth - base)}{format_entry(node)}"
        for _, node in root.walk()
    ]


def main(argv: Sequence[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    _configure_logging(args.log_level)

    config = create_container(max_depth=args.max_depth, tab_policy=args.tabs)
    try:
        root = config.load(args.file)
    except ZplError as e:
        print(f"{args.file}: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (OSError, UnicodeDecodeError) as e:
        print(f"{args.file}: cannot read: {e}", file=sys.stderr)
        return EXIT_ERROR

    status = 0
    with root:
        if not args.paths:
            if args.tree:
                lines = format_tree(root)
            else:
                lines = [node.name for node in root]
            for line in lines:
                print(line)
        for path in args.paths:
            try:
                node = root.locate(path)
            except NotFoundError as e:
                LOG.debug("Lookup failed for %s", path)
                print(f"{args.file}: {e}", file=sys.stderr)
                status = EXIT_NOT_FOUND
                continue
            if node.value is None:
                print(path)
            else:
                print(f"{path} = {node.value}")
    return status
