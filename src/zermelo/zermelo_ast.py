"""
Defines the abstract syntax tree (AST) node structure for the Zermelo programming language.

Classes:
    ASTNode:
        An immutable node tagged by `kind`. Used by the parser, the emitter, and
        test suites for asserting structure.

    ASTDict:
        TypedDict representation for serializing ASTNode instances to plain Python
        dictionaries, suitable for JSON output or debugging.

Each ASTNode tracks:
    kind (str): The node kind (e.g., "program", "loop", "set").
    value (int | str | None): Kind-specific payload: the integer of an
        `integer` node, the character of `print_char`/`if_char`, the operator
        tag of `set_op`, the predicate tag of `loop`.
    children (tuple[ASTNode, ...]): Statements of `program`, elements of `set`,
        the expression of `flip`, the operand of `set_op`, the guard set followed
        by the body of `loop`, the body of `if_char`.

Example:
    node = ASTNode("set_op", "UNION", [ASTNode("set", children=[ASTNode("integer", 1)])])
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, TypedDict

from zermelo.zermelo_constants import LOOP, NODE_KINDS


class ASTDict(TypedDict):
    """
    TypedDict representation of an ASTNode used for serialization.

    Fields:
        kind (str): The type of AST node.
        value (int | str | None): The node's payload, if any.
        children (list[ASTDict]): Child nodes in source order.
    """

    kind: str
    value: int | str | None
    children: list["ASTDict"]


class ASTNode:
    """
    Represents a node in the abstract syntax tree (AST) for the Zermelo language.

    Nodes are built bottom-up by the parser and never change afterwards:
    children are stored as a tuple and attribute assignment raises
    `AttributeError`.

    Args:
        kind (str): One of the node kinds in `NODE_KINDS`.
        value (int | str | None): Kind-specific payload.
        children (Iterable[ASTNode], optional): Child nodes in source order.

    Raises:
        ValueError: If `kind` is not a known node kind.
    """

    __slots__ = ("kind", "value", "children")

    kind: str
    value: int | str | None
    children: tuple[ASTNode, ...]

    def __init__(
        self,
        kind: str,
        value: int | str | None = None,
        children: Iterable[ASTNode] | None = None,
    ):
        if kind not in NODE_KINDS:
            raise ValueError(f"Unknown AST node kind: {kind!r}")
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "children", tuple(children or ()))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"ASTNode is immutable; cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"ASTNode is immutable; cannot delete {name!r}")

    @property
    def guard(self) -> ASTNode:
        """The guard set of a `loop` node."""
        if self.kind != LOOP:
            raise AttributeError(f"{self.kind} node has no guard set")
        return self.children[0]

    @property
    def body(self) -> tuple[ASTNode, ...]:
        """Body statements of a `loop` or `if_char` node (all children otherwise)."""
        if self.kind == LOOP:
            return self.children[1:]
        return self.children

    def walk(self) -> Iterator[ASTNode]:
        """Yields this node and all descendants in depth-first pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def __repr__(self) -> str:
        parts = [f"{self.kind}"]
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        if self.children:
            preview = ", ".join(repr(c) for c in self.children[:3])
            if len(self.children) > 3:
                preview += ", ..."
            parts.append(f"children=[{preview}]")
        return f"ASTNode({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return False
        return (
            self.kind == other.kind
            and self.value == other.value
            and self.children == other.children
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.value, self.children))

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "value": self.value,
            "children": [c.to_dict() for c in self.children],
        }
