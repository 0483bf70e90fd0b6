#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
red_black_tree.py
-----------------

An ordered index of unique keys kept in a **Red‑Black** tree.  Keys only need
to be totally ordered (``<`` / ``==``); short fixed‑length strings are the
usual case but nothing here depends on that.

Features
~~~~~~~~
* `tree.insert(key)`      – add a key (returns ``False`` on a duplicate)
* `tree.delete(key)`      – remove a key (returns ``False`` if it is absent)
* `tree.search(key)` / `key in tree` – membership test
* `tree.predecessor(key)`, `tree.successor(key)` – nearest keys strictly
  below / above *key*, whether or not *key* itself is stored (``None`` if
  there is none)
* `tree.range(lo, hi)`   – all keys ``lo <= k <= hi`` in ascending order
* `len(tree)`, iteration, `tree.min_key()`, `tree.max_key()`
* `tree.validate()` – check every red‑black invariant (raises InvariantError)

Operations that do not apply to the current state (duplicate insert, delete
of a missing key, lookups on an empty tree) are reported through the return
value, never by raising.

Leaves are a **single shared sentinel node** (`self._nil`), so rotations and
fix‑ups never special‑case ``None``.

Typical usage
~~~~~~~~~~~~~
>>> from red_black_tree import RedBlackTree
>>> index = RedBlackTree(["1111", "2222", "3333"])
>>> index.insert("2222")
False
>>> index.predecessor("2222"), index.successor("2222")
('1111', '3333')
>>> index.successor("2000")
'2222'
>>> index.range("1500", "9999")
['2222', '3333']
>>> index.delete("2222")
True
>>> "2222" in index
False
"""

from __future__ import annotations

import logging
from typing import (
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    TypeVar,
)

logger = logging.getLogger(__name__)

# ----------------------------------------------------------------------
#  Type variable (keys must be totally ordered)
# ----------------------------------------------------------------------
K = TypeVar("K")

# ----------------------------------------------------------------------
#  Node colour constants
# ----------------------------------------------------------------------
RED = True
BLACK = False


class InvariantError(AssertionError):
    """Raised by :meth:`RedBlackTree.validate` when the tree is corrupt."""


class _Node(Generic[K]):
    """Internal node object – not meant to be used directly by callers."""

    __slots__ = ("key", "color", "left", "right", "parent")

    def __init__(
        self,
        key: Optional[K] = None,
        color: bool = BLACK,
        left: Optional["_Node[K]"] = None,
        right: Optional["_Node[K]"] = None,
        parent: Optional["_Node[K]"] = None,
    ) -> None:
        self.key = key
        self.color = color
        self.left = left
        self.right = right
        self.parent = parent

    def __repr__(self) -> str:
        col = "R" if self.color == RED else "B"
        return f"<{col} {self.key!r}>"


class RedBlackTree(Generic[K]):
    """
    A mutable ordered set of keys stored in a red‑black tree.

    Parameters
    ----------
    items : iterable of keys, optional
        Keys inserted one by one at construction time; duplicates are
        skipped just as :meth:`insert` skips them.
    validate_on_write : bool, default ``False``
        Run :meth:`validate` after every successful insert and delete.
        Costs O(n) per write, so it is meant for debugging only.
    """

    __slots__ = ("_root", "_nil", "_size", "_validate_on_write")

    def __init__(
        self,
        items: Optional[Iterable[K]] = None,
        *,
        validate_on_write: bool = False,
    ) -> None:
        # The sentinel leaf node – shared by every leaf in the tree.
        self._nil: _Node[K] = _Node()
        self._nil.left = self._nil.right = self._nil.parent = self._nil

        self._root: _Node[K] = self._nil
        self._size: int = 0
        self._validate_on_write = validate_on_write

        if items is not None:
            for key in items:
                self.insert(key)

    # ------------------------------------------------------------------
    #   Search path (internal)
    # ------------------------------------------------------------------
    def _locate(self, key: K) -> Tuple[_Node[K], bool]:
        """
        Descend from the root towards *key*.

        Returns ``(node, True)`` if *key* is stored in ``node``.  Otherwise
        returns ``(last, False)`` where ``last`` is the final node visited
        (the would‑be parent of *key*), or the sentinel if the tree is empty.
        """
        last = self._nil
        cur = self._root
        while cur is not self._nil:
            last = cur
            if key < cur.key:
                cur = cur.left
            elif cur.key < key:
                cur = cur.right
            else:
                return cur, True
        return last, False

    # ------------------------------------------------------------------
    #   Public query methods
    # ------------------------------------------------------------------
    def is_empty(self) -> bool:
        return self._root is self._nil

    def search(self, key: K) -> bool:
        """Return ``True`` if *key* is stored in the tree."""
        return self._locate(key)[1]

    def __contains__(self, key: object) -> bool:
        return self.search(key)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._root is not self._nil

    def __iter__(self) -> Iterator[K]:
        """Yield keys in ascending order (in‑order traversal)."""
        stack: List[_Node[K]] = []
        cur: _Node[K] = self._root
        while stack or cur is not self._nil:
            while cur is not self._nil:
                stack.append(cur)
                cur = cur.left
            cur = stack.pop()
            yield cur.key  # type: ignore[misc]
            cur = cur.right

    def keys(self) -> List[K]:
        """Return a list of all keys in sorted order."""
        return list(self)

    # ------------------------------------------------------------------
    #   Minimum / maximum helpers
    # ------------------------------------------------------------------
    def _minimum_node(self, start: Optional[_Node[K]] = None) -> _Node[K]:
        """Return the node with the smallest key in the subtree rooted at *start*."""
        node = start if start is not None else self._root
        if node is self._nil:
            raise ValueError("Tree is empty")
        while node.left is not self._nil:
            node = node.left
        return node

    def _maximum_node(self, start: Optional[_Node[K]] = None) -> _Node[K]:
        """Return the node with the largest key in the subtree rooted at *start*."""
        node = start if start is not None else self._root
        if node is self._nil:
            raise ValueError("Tree is empty")
        while node.right is not self._nil:
            node = node.right
        return node

    def min_key(self) -> K:
        """Return the smallest key stored in the tree."""
        return self._minimum_node().key  # type: ignore[return-value]

    def max_key(self) -> K:
        """Return the largest key stored in the tree."""
        return self._maximum_node().key  # type: ignore[return-value]

    # ------------------------------------------------------------------
    #   Successor / predecessor
    # ------------------------------------------------------------------
    def _successor_node(self, node: _Node[K]) -> _Node[K]:
        """In‑order successor of a stored node, or the sentinel."""
        if node.right is not self._nil:
            return self._minimum_node(node.right)
        # Walk up until we leave a left subtree.
        parent = node.parent
        while parent is not self._nil and node is parent.right:
            node = parent
            parent = parent.parent
        return parent

    def _predecessor_node(self, node: _Node[K]) -> _Node[K]:
        """In‑order predecessor of a stored node, or the sentinel."""
        if node.left is not self._nil:
            return self._maximum_node(node.left)
        parent = node.parent
        while parent is not self._nil and node is parent.left:
            node = parent
            parent = parent.parent
        return parent

    def _key_or_none(self, node: _Node[K]) -> Optional[K]:
        return None if node is self._nil else node.key

    def successor(self, key: K) -> Optional[K]:
        """
        Return the smallest stored key strictly greater than *key*.

        *key* does not have to be stored.  ``None`` if there is no such key.
        """
        node, found = self._locate(key)
        if node is self._nil:
            return None
        if not found and key < node.key:
            # The search stopped at a node above key: that node is next.
            return node.key
        return self._key_or_none(self._successor_node(node))

    def predecessor(self, key: K) -> Optional[K]:
        """
        Return the greatest stored key strictly smaller than *key*.

        *key* does not have to be stored.  ``None`` if there is no such key.
        """
        node, found = self._locate(key)
        if node is self._nil:
            return None
        if not found and node.key < key:
            return node.key
        return self._key_or_none(self._predecessor_node(node))

    # ------------------------------------------------------------------
    #   Range enumeration
    # ------------------------------------------------------------------
    def range(self, lo: K, hi: K) -> List[K]:
        """
        Return every stored key ``k`` with ``lo <= k <= hi``, ascending.

        Subtrees that lie wholly outside ``[lo, hi]`` are never entered, so
        the cost is O(log n + number of results).  ``lo > hi`` describes an
        empty interval and yields ``[]``.
        """
        result: List[K] = []
        if hi < lo:
            logger.debug("range(%r, %r): lower bound above upper bound", lo, hi)
            return result

        stack: List[_Node[K]] = []
        cur = self._root
        while stack or cur is not self._nil:
            # Go left only while keys further left can still be >= lo.
            while cur is not self._nil:
                stack.append(cur)
                cur = cur.left if lo < cur.key else self._nil
            node = stack.pop()
            if not (node.key < lo) and not (hi < node.key):
                result.append(node.key)  # type: ignore[arg-type]
            cur = node.right if node.key < hi else self._nil
        return result

    # ------------------------------------------------------------------
    #   Insertion
    # ------------------------------------------------------------------
    def insert(self, key: K) -> bool:
        """
        Add *key* to the tree.

        Returns ``False`` and leaves the tree untouched if *key* is already
        stored; there is no overwrite.
        """
        parent, found = self._locate(key)
        if found:
            logger.debug("insert(%r): duplicate key rejected", key)
            return False

        new_node = _Node(
            key=key,
            color=RED,
            left=self._nil,
            right=self._nil,
            parent=parent,
        )
        if parent is self._nil:
            self._root = new_node
        elif key < parent.key:
            parent.left = new_node
        else:
            parent.right = new_node

        self._size += 1
        self._fix_insert(new_node)
        if self._validate_on_write:
            self.validate()
        return True

    def _fix_insert(self, z: _Node[K]) -> None:
        """Restore red‑black properties after inserting node `z` (which is RED)."""
        # The root's parent is the black sentinel, so the loop stops there.
        while z.parent.color == RED:
            if z.parent is z.parent.parent.left:
                uncle = z.parent.parent.right
                if uncle.color == RED:
                    # Case 1 – recolour, push the violation up two levels
                    z.parent.color = BLACK
                    uncle.color = BLACK
                    z.parent.parent.color = RED
                    z = z.parent.parent
                else:
                    if z is z.parent.right:
                        # Case 2 – turn the zig‑zag into a straight line
                        z = z.parent
                        self._rotate_left(z)
                    # Case 3
                    z.parent.color = BLACK
                    z.parent.parent.color = RED
                    self._rotate_right(z.parent.parent)
            else:
                uncle = z.parent.parent.left
                if uncle.color == RED:
                    z.parent.color = BLACK
                    uncle.color = BLACK
                    z.parent.parent.color = RED
                    z = z.parent.parent
                else:
                    if z is z.parent.left:
                        z = z.parent
                        self._rotate_right(z)
                    z.parent.color = BLACK
                    z.parent.parent.color = RED
                    self._rotate_left(z.parent.parent)
        self._root.color = BLACK

    # ------------------------------------------------------------------
    #   Left / right rotations
    # ------------------------------------------------------------------
    def _rotate_left(self, x: _Node[K]) -> None:
        """Left‑rotate the subtree rooted at `x`."""
        y = x.right
        if y is self._nil:
            raise RuntimeError("rotate_left called on a node with nil right child")
        x.right = y.left
        if y.left is not self._nil:
            y.left.parent = x
        y.parent = x.parent
        if x.parent is self._nil:
            self._root = y
        elif x is x.parent.left:
            x.parent.left = y
        else:
            x.parent.right = y
        y.left = x
        x.parent = y

    def _rotate_right(self, y: _Node[K]) -> None:
        """Right‑rotate the subtree rooted at `y`."""
        x = y.left
        if x is self._nil:
            raise RuntimeError("rotate_right called on a node with nil left child")
        y.left = x.right
        if x.right is not self._nil:
            x.right.parent = y
        x.parent = y.parent
        if y.parent is self._nil:
            self._root = x
        elif y is y.parent.right:
            y.parent.right = x
        else:
            y.parent.left = x
        x.right = y
        y.parent = x

    # ------------------------------------------------------------------
    #   Deletion
    # ------------------------------------------------------------------
    def _transplant(self, u: _Node[K], v: _Node[K]) -> None:
        """Put the subtree rooted at `v` where `u` hangs (v may be the sentinel)."""
        if u.parent is self._nil:
            self._root = v
        elif u is u.parent.left:
            u.parent.left = v
        else:
            u.parent.right = v
        v.parent = u.parent

    def delete(self, key: K) -> bool:
        """
        Remove *key* from the tree.

        Returns ``False`` and leaves the tree untouched if *key* is absent.
        """
        z, found = self._locate(key)
        if not found:
            logger.debug("delete(%r): key not present", key)
            return False
        self._delete_node(z)
        if self._validate_on_write:
            self.validate()
        return True

    def _delete_node(self, z: _Node[K]) -> None:
        """Unlink the node holding a key and repair the colouring."""
        if z.left is not self._nil and z.right is not self._nil:
            # Two children: take over the successor's key and remove the
            # successor's node instead; it has no left child.
            succ = self._minimum_node(z.right)
            z.key = succ.key
            z = succ

        x = z.left if z.left is not self._nil else z.right
        # Sets the sentinel's parent too, which the fix‑up relies on.
        self._transplant(z, x)
        removed_color = z.color

        z.left = z.right = z.parent = None
        self._size -= 1

        if removed_color == BLACK:
            # A red replacement simply turns black at the end of the fix‑up.
            self._fix_delete(x)
        self._nil.parent = self._nil

    def _fix_delete(self, x: _Node[K]) -> None:
        """
        Restore red‑black properties after removing a black node.
        `x` carries the extra black and may be the sentinel.
        """
        while x is not self._root and x.color == BLACK:
            if x is x.parent.left:
                w = x.parent.right  # sibling
                if w.color == RED:
                    # Case 1 – red sibling, rotate to get a black one
                    w.color = BLACK
                    x.parent.color = RED
                    self._rotate_left(x.parent)
                    w = x.parent.right
                if w.left.color == BLACK and w.right.color == BLACK:
                    # Case 2 – push the deficit up
                    w.color = RED
                    x = x.parent
                else:
                    if w.right.color == BLACK:
                        # Case 3 – red near child, black far child
                        w.left.color = BLACK
                        w.color = RED
                        self._rotate_right(w)
                        w = x.parent.right
                    # Case 4 – red far child
                    w.color = x.parent.color
                    x.parent.color = BLACK
                    w.right.color = BLACK
                    self._rotate_left(x.parent)
                    x = self._root
            else:
                w = x.parent.left
                if w.color == RED:
                    w.color = BLACK
                    x.parent.color = RED
                    self._rotate_right(x.parent)
                    w = x.parent.left
                if w.right.color == BLACK and w.left.color == BLACK:
                    w.color = RED
                    x = x.parent
                else:
                    if w.left.color == BLACK:
                        w.right.color = BLACK
                        w.color = RED
                        self._rotate_left(w)
                        w = x.parent.left
                    w.color = x.parent.color
                    x.parent.color = BLACK
                    w.left.color = BLACK
                    self._rotate_right(x.parent)
                    x = self._root
        x.color = BLACK

    def clear(self) -> None:
        """Drop every key."""
        logger.debug("clear(): dropping %d keys", self._size)
        self._root = self._nil
        self._size = 0

    # ------------------------------------------------------------------
    #   Shape inspection
    # ------------------------------------------------------------------
    def height(self) -> int:
        """Number of nodes on the longest root‑to‑leaf path (0 when empty)."""
        best = 0
        stack = [(self._root, 1)]
        while stack:
            node, depth = stack.pop()
            if node is self._nil:
                continue
            best = max(best, depth)
            stack.append((node.left, depth + 1))
            stack.append((node.right, depth + 1))
        return best

    def black_height(self) -> int:
        """Black nodes on the leftmost root‑to‑NIL path, root included."""
        count = 0
        node = self._root
        while node is not self._nil:
            if node.color == BLACK:
                count += 1
            node = node.left
        return count

    # ------------------------------------------------------------------
    #   Validation – useful for debugging and tests
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """
        Verify that the tree satisfies all red‑black invariants.

        Checks search order (which also rules out duplicate keys), colours,
        black root, no red node with a red child, uniform black height,
        parent links, the sentinel's colour and the cached size.  Raises
        ``InvariantError`` describing the first violation found.
        """

        def check(cond: bool, message: str) -> None:
            if not cond:
                raise InvariantError(message)

        check(self._nil.color == BLACK, "Sentinel is not black")
        check(self._root.color == BLACK, "Root is not black")
        check(self._root.parent is self._nil, "Root has a parent")

        def dfs(
            node: _Node[K], lo: Optional[_Node[K]], hi: Optional[_Node[K]]
        ) -> Tuple[int, int]:
            """Return ``(black_height, node_count)`` of the subtree."""
            if node is self._nil:
                return 1, 0
            check(node.color in (RED, BLACK), f"Bad colour on {node!r}")
            # Strict bounds from the ancestors: BST order and uniqueness.
            if lo is not None:
                check(lo.key < node.key, f"Order violated: {node!r} under {lo!r}")
            if hi is not None:
                check(node.key < hi.key, f"Order violated: {node!r} under {hi!r}")
            if node.color == RED:
                check(node.left.color == BLACK, f"Red {node!r} has red left child")
                check(node.right.color == BLACK, f"Red {node!r} has red right child")
            for child in (node.left, node.right):
                if child is not self._nil:
                    check(child.parent is node, f"Bad parent link on {child!r}")

            left_black, left_count = dfs(node.left, lo, node)
            right_black, right_count = dfs(node.right, node, hi)
            check(left_black == right_black, f"Black-height mismatch at {node!r}")
            bh = left_black + (1 if node.color == BLACK else 0)
            return bh, left_count + right_count + 1

        _, count = dfs(self._root, None, None)
        check(count == self._size, f"Size is {self._size} but {count} nodes found")

    def __repr__(self) -> str:
        return f"RedBlackTree({self.keys()!r})"
