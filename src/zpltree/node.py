# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ZplNode - a node of a parsed or programmatically built ZPL tree.

Each node owns its children as an ordered list, in insertion order.
The link to the parent is a weak reference: a node never keeps its
parent alive, and destroying a node never touches its ancestors
beyond removing itself from the parent's child list.

Path Syntax:
    - Slash separated names: 'main/frontend/bind'
    - Empty segments are skipped: 'main//frontend/' == 'main/frontend'
    - Positional: '#0' (first child), '#-1' (last child)

Example:
    Basic usage::

        root = create_container().new_tree('root')
        main = root.add('main')
        main.add_with_value('type', 'zqueue')

        print(root.locate('main/type').value)  # 'zqueue'
        print([n.name for n in main])  # ['type']
"""

from __future__ import annotations

import re
import weakref
from typing import Iterator, TYPE_CHECKING

from .exceptions import DestroyedNodeError, NotFoundError
from .names import check_name

if TYPE_CHECKING:
    from .configuration import Configuration

POSITION = re.compile(r'#(-?[0-9]+)')


def _index_in(nodes: list[ZplNode], node: ZplNode) -> int | None:
    for i, candidate in enumerate(nodes):
        if candidate is node:
            return i
    return None


class ChildIterator:
    """Lazy, non-restartable iterator over the direct children of a node.

    Children are read from the live child list one at a time. Once the
    iterator is exhausted it stays exhausted, even if children are added
    afterwards.
    """

    __slots__ = ('_nodes', '_index')

    def __init__(self, nodes: list[ZplNode]) -> None:
        self._nodes: list[ZplNode] | None = nodes
        self._index = 0

    def __iter__(self) -> ChildIterator:
        return self

    def __next__(self) -> ZplNode:
        if self._nodes is None or self._index >= len(self._nodes):
            self._nodes = None
            raise StopIteration
        node = self._nodes[self._index]
        self._index += 1
        return node


class ZplNode:
    """A node in a ZPL configuration tree.

    Each node has:
    - name: The key, validated against the ZPL name set. Siblings may
      share the same name (e.g. repeated 'bind' entries).
    - value: A string, or None for a key without value. An empty string
      is a present value and differs from None.
    - parent: Weak reference to the containing node, None for a root.
    - children: Owned child nodes in insertion order.
    - owned: True when the node was created by the library (add() or the
      parser root), False for a root built with Configuration.new_tree().

    Example:
        >>> root = ZplNode('root', owned=False)
        >>> root.add_with_value('iothreads', '1')
        ZplNode('iothreads', value='1')
        >>> root.child_by_name('iothreads').value
        '1'
    """

    __slots__ = (
        '_name', '_value', '_parent', '_children', '_siblings',
        'owned', 'container', '_destroyed', '__weakref__',
    )

    def __init__(
        self,
        name: str,
        value: str | None = None,
        parent: ZplNode | None = None,
        container: Configuration | None = None,
        owned: bool = True,
    ) -> None:
        """Initialize a ZplNode.

        Args:
            name: The node's key. Must pass is_valid_name().
            value: Optional initial value.
            parent: The node containing this one (kept as weak reference).
            container: The Configuration that created the node.
            owned: Whether the library created the node.

        Raises:
            InvalidNameError: If name is not a valid ZPL key.
        """
        self._name: str | None = check_name(name)
        self._value: str | None = None
        self._parent: weakref.ref[ZplNode] | None = (
            weakref.ref(parent) if parent is not None else None
        )
        self._children: list[ZplNode] = []
        # the parent's child list, set by add(); keeps siblings reachable
        # without keeping the parent alive
        self._siblings: list[ZplNode] | None = None
        self.owned = owned
        self.container = container
        self._destroyed = False
        if value is not None:
            self.set_value(value)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        if self._destroyed:
            return f"{type(self).__name__}(<destroyed>)"
        return f"{type(self).__name__}({self._name!r}, value={self._value!r})"

    def __len__(self) -> int:
        """Return the number of direct children."""
        self._check_alive()
        return len(self._children)

    def __bool__(self) -> bool:
        # A node without children is still a node
        return True

    def __iter__(self) -> Iterator[ZplNode]:
        """Iterate over direct children in insertion order."""
        return self.iterator()

    def __contains__(self, path: str) -> bool:
        """Check if a relative path resolves from this node."""
        try:
            self.locate(path)
        except NotFoundError:
            return False
        return True

    def __enter__(self) -> ZplNode:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.destroy()

    def _check_alive(self) -> None:
        if self._destroyed:
            raise DestroyedNodeError("Node has been destroyed")

    # ==================== Properties ====================

    @property
    def name(self) -> str:
        """The node's key."""
        self._check_alive()
        return self._name  # type: ignore[return-value]

    @property
    def value(self) -> str | None:
        """The node's value, or None for a key without value."""
        self._check_alive()
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        self.set_value(value)

    @property
    def parent(self) -> ZplNode | None:
        """The containing node, or None for a root."""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def first_child(self) -> ZplNode | None:
        """The first child in insertion order, or None."""
        self._check_alive()
        return self._children[0] if self._children else None

    @property
    def next_sibling(self) -> ZplNode | None:
        """The node inserted after this one in the same parent, or None.

        Works even when the parent itself is no longer referenced.
        """
        self._check_alive()
        siblings = self._siblings
        if siblings is None:
            return None
        index = _index_in(siblings, self)
        if index is None or index + 1 >= len(siblings):
            return None
        return siblings[index + 1]

    @property
    def destroyed(self) -> bool:
        """True once destroy() has released this node."""
        return self._destroyed

    @property
    def root(self) -> ZplNode:
        """Get the topmost reachable ancestor of this node."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def depth(self) -> int:
        """Get the depth of this node in the hierarchy (root=0)."""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    @property
    def path(self) -> str:
        """Slash separated names from the root to this node.

        The root's own name is not included, so the path can be passed
        to root.locate(). With repeated sibling names, locate() returns
        the first of them.
        """
        names: list[str] = []
        node: ZplNode | None = self
        while node is not None and node.parent is not None:
            names.append(node.name)
            node = node.parent
        return '/'.join(reversed(names))

    # ==================== Mutation ====================

    def set_value(self, value: str) -> None:
        """Replace the node's value.

        Args:
            value: The new value. Any previous value is dropped.

        Raises:
            TypeError: If value is not a string.
        """
        self._check_alive()
        if not isinstance(value, str):
            raise TypeError(f"value must be str, not {type(value).__name__}")
        self._value = value

    def add(self, key: str) -> ZplNode:
        """Append a new child named ``key`` and return it.

        The child is created with the container's node class (or this
        node's class when there is no container) and placed after all
        existing children. Names are not required to be unique.

        Args:
            key: The child's name.

        Returns:
            The new child node.

        Raises:
            InvalidNameError: If key is not a valid ZPL name.
        """
        self._check_alive()
        node_class = self.container.node_class if self.container is not None else type(self)
        node = node_class(key, parent=self, container=self.container, owned=True)
        node._siblings = self._children
        self._children.append(node)
        return node

    def add_with_value(self, key: str, value: str) -> ZplNode:
        """Append a new child named ``key`` with ``value`` and return it."""
        node = self.add(key)
        node.set_value(value)
        return node

    def destroy(self) -> None:
        """Release this node and its whole subtree.

        Every node of the subtree drops its name, value, children and
        links. An owned node is also removed from its parent's child list.
        Calling destroy() twice is a no-op.
        """
        if self._destroyed:
            return
        if self.owned and self._siblings is not None:
            index = _index_in(self._siblings, self)
            if index is not None:
                del self._siblings[index]

        # explicit stack: trees may be deeper than the recursion limit
        pending = [self]
        while pending:
            node = pending.pop()
            pending.extend(node._children)
            node._children.clear()
            node._siblings = None
            node._value = None
            node._name = None
            node._parent = None
            node.container = None
            node._destroyed = True

    # ==================== Lookup ====================

    def child_by_name(self, key: str) -> ZplNode | None:
        """Return the first direct child named ``key``, or None."""
        self._check_alive()
        for child in self._children:
            if child._name == key:
                return child
        return None

    def children(self, name: str | None = None) -> list[ZplNode]:
        """Return direct children in insertion order.

        Args:
            name: If given, only children with this name are returned.
        """
        self._check_alive()
        if name is None:
            return list(self._children)
        return [child for child in self._children if child._name == name]

    def _resolve_segment(self, segment: str) -> ZplNode | None:
        match = POSITION.fullmatch(segment)
        if match:
            try:
                return self._children[int(match.group(1))]
            except IndexError:
                return None
        return self.child_by_name(segment)

    def locate(self, path: str) -> ZplNode:
        """Resolve a slash separated path relative to this node.

        Args:
            path: Path such as 'main/frontend/bind'. Empty segments are
                skipped; an empty path returns this node.

        Returns:
            The node reached by the last segment.

        Raises:
            NotFoundError: If any segment does not match a child.

        Example:
            >>> root.locate('main/frontend').child_by_name('bind').value
            'inproc://addr1'
            >>> root.locate('main/#0').name
            'type'
        """
        self._check_alive()
        node = self
        for segment in path.split('/'):
            if not segment:
                continue
            child = node._resolve_segment(segment)
            if child is None:
                raise NotFoundError(path, segment)
            node = child
        return node

    # ==================== Iteration ====================

    def iterator(self) -> ChildIterator:
        """Return a fresh lazy iterator over the direct children."""
        self._check_alive()
        return ChildIterator(self._children)

    def walk(self) -> Iterator[tuple[str, ZplNode]]:
        """Yield (path, node) for every descendant, depth first.

        Paths are relative to this node.

        Example:
            >>> for path, node in root.walk():
            ...     print(path, node.value)
        """
        self._check_alive()

        def _walk_gen(start: ZplNode) -> Iterator[tuple[str, ZplNode]]:
            pending = [(child._name, child) for child in reversed(start._children)]
            while pending:
                path, node = pending.pop()
                yield path, node  # type: ignore[misc]
                pending.extend(
                    (f"{path}/{child._name}", child) for child in reversed(node._children)
                )

        return _walk_gen(self)
