#!/usr/bin/env python3
"""Directory nodes and the path parser/builder.

A path is ``origin/segment/segment/.../``. Menu and terminal nodes are named
by their own token; a dimension node is written as its keyword followed by an
optional value token (an id or "-1"). Parsing resolves each token against the
kind of the node before it, so every node in a parsed chain is a legal child
of its parent.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple
from medialibfs.constants import ALL_ITEMS_TOKEN, PATH_SEPARATOR, UNSET_ID
from medialibfs.errors import ParseError
from medialibfs.node_types import (
    NodeKind,
    dimension_child_kind,
    is_dimension,
    is_menu,
    kind_info,
    menu_child_kind,
    menu_entry_for_kind,
)
from medialibfs.query_params import FilterCollector


@dataclass(frozen=True)
class DirectoryNode:
    """One element of a resolved path.

    Attributes:
        kind: The node kind
        name: Token for menu/terminal nodes, value for dimension nodes
            ("" while a dimension has no value yet)
        origin: Tag of the logical library the path belongs to
        parent: The parent node, None for the root
    """

    kind: NodeKind
    name: str
    origin: str
    parent: Optional["DirectoryNode"] = field(default=None, repr=False)

    @classmethod
    def root(cls, origin: str) -> "DirectoryNode":
        return cls(NodeKind.ROOT, "", origin, None)

    @property
    def is_dimension(self) -> bool:
        return is_dimension(self.kind)

    @property
    def is_selected(self) -> bool:
        """True for a dimension node that carries a value."""
        return self.is_dimension and self.name != ""

    @property
    def is_all(self) -> bool:
        return self.is_dimension and self.name == ALL_ITEMS_TOKEN

    @property
    def node_id(self) -> int:
        if not self.is_selected:
            return UNSET_ID
        return int(self.name)

    def chain(self) -> List["DirectoryNode"]:
        """Return the nodes from the root down to this node."""
        nodes = []
        current = self
        while current is not None:
            nodes.append(current)
            current = current.parent
        nodes.reverse()
        return nodes

    def content_type(self) -> str:
        return FilterCollector().collect(self).content

    def child_kind(self) -> NodeKind:
        """Return the single child kind of a selected dimension node."""
        if not self.is_selected:
            return NodeKind.NONE
        return dimension_child_kind(self.kind, self.name, self.content_type())

    def with_value(self, value: str) -> "DirectoryNode":
        return replace(self, name=value)

    def build_path(self) -> str:
        return build_path(self)


def is_valid_value(token: str) -> bool:
    """Dimension values are "-1" or a non-negative integer."""
    return token == ALL_ITEMS_TOKEN or (token.isascii() and token.isdigit())


def resolve_child_kind(node: DirectoryNode, token: str) -> NodeKind:
    """Resolve the kind of the child reached from ``node`` through ``token``.

    Menus look the token up in their entry table. A selected dimension has
    exactly one child kind and accepts only that kind's keyword. Terminal
    kinds and dimensions still waiting for a value have no children.

    Args:
        node: The parent node
        token: The path token naming the child

    Returns:
        The child kind, or NodeKind.NONE if the token is not a legal child
    """
    if is_menu(node.kind):
        return menu_child_kind(node.kind, token)

    if node.is_selected:
        child = node.child_kind()
        info = kind_info(child)
        if info is not None and info.keyword == token:
            return child

    return NodeKind.NONE


def token_for(parent: DirectoryNode, kind: NodeKind) -> str:
    """Return the path token that introduces a ``kind`` node below ``parent``."""
    if is_menu(parent.kind):
        entry = menu_entry_for_kind(parent.kind, kind)
        if entry is not None:
            return entry.token
    info = kind_info(kind)
    if info is None or not info.keyword:
        raise ValueError(f"{kind} has no path token below {parent.kind}")
    return info.keyword


def create_child(parent: DirectoryNode, kind: NodeKind, token: str) -> DirectoryNode:
    """Create the node introduced by ``token``; dimensions start without a value."""
    name = "" if is_dimension(kind) else token
    return DirectoryNode(kind, name, parent.origin, parent)


def split_path(path: str, origin: Optional[str] = None) -> Tuple[str, List[str]]:
    """Split a path string into its origin and tokens.

    Args:
        path: The path string
        origin: Origin tag when ``path`` carries no origin prefix

    Returns:
        Tuple of (origin, tokens)

    Raises:
        ParseError: On an empty origin or an empty segment
    """
    if path.endswith(PATH_SEPARATOR):
        path = path[: -len(PATH_SEPARATOR)]

    if origin is None:
        tokens = path.split(PATH_SEPARATOR)
        origin = tokens.pop(0)
    else:
        path = path.lstrip(PATH_SEPARATOR)
        tokens = path.split(PATH_SEPARATOR) if path else []

    if not origin:
        raise ParseError(path, reason="missing origin")

    for token in tokens:
        if not token:
            raise ParseError(path, token, "empty path segment")

    return origin, tokens


def parse_path(path: str, origin: Optional[str] = None) -> DirectoryNode:
    """Parse a path string into a node chain and return its last node.

    Args:
        path: Path such as "library/tvshows/genres/5/titles/"
        origin: Origin tag when ``path`` is given without its origin prefix

    Returns:
        The DirectoryNode the path points at

    Raises:
        ParseError: If a token does not resolve to a legal node
    """
    origin, tokens = split_path(path, origin)
    node = DirectoryNode.root(origin)

    for token in tokens:
        if node.is_dimension and not node.is_selected:
            if not is_valid_value(token):
                raise ParseError(path, token, f"invalid {node.kind.name} value")
            node = node.with_value(token)
            continue

        kind = resolve_child_kind(node, token)
        if kind is NodeKind.NONE:
            raise ParseError(path, token, f"no such child of {node.kind.name}")
        node = create_child(node, kind, token)

    return node


def try_parse_path(path: str, origin: Optional[str] = None) -> Optional[DirectoryNode]:
    try:
        return parse_path(path, origin)
    except ParseError:
        return None


def build_path(node: DirectoryNode) -> str:
    """Serialize a node chain into its canonical path string."""
    parts = [node.origin]
    for current in node.chain():
        if current.parent is None:
            continue
        if current.is_dimension:
            parts.append(token_for(current.parent, current.kind))
            if current.name:
                parts.append(current.name)
        else:
            parts.append(current.name)
    return PATH_SEPARATOR.join(parts) + PATH_SEPARATOR
