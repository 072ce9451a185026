"""Read-only script syntax tree consumed by the declaration resolver.

Nodes are produced by an external parser. They are immutable and compare by
identity, so two textually identical definitions stay distinct. Parent links
are not stored on nodes; ``ScriptTree`` indexes the tree once into an arena
(node list plus parent ids) and answers parent lookups from it.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from scriptnav.symbols.models import SourceSpan


@dataclass(frozen=True, eq=False)
class Node:
    """Base class for all syntax tree nodes."""

    span: SourceSpan

    def children(self) -> tuple[Node, ...]:
        return ()


@dataclass(frozen=True, eq=False)
class ScriptBlock(Node):
    """Top-level script or a function body."""

    statements: tuple[Node, ...] = ()

    def children(self) -> tuple[Node, ...]:
        return self.statements


@dataclass(frozen=True, eq=False)
class StatementBlock(Node):
    """Braced statement list (if/loop bodies and the like)."""

    statements: tuple[Node, ...] = ()

    def children(self) -> tuple[Node, ...]:
        return self.statements


@dataclass(frozen=True, eq=False)
class Pipeline(Node):
    elements: tuple[Node, ...] = ()

    def children(self) -> tuple[Node, ...]:
        return self.elements


@dataclass(frozen=True, eq=False)
class FunctionDefinition(Node):
    """``function Name { ... }``. Also the body of a method or constructor."""

    name: str = ""
    body: ScriptBlock | None = None

    def children(self) -> tuple[Node, ...]:
        return (self.body,) if self.body is not None else ()


@dataclass(frozen=True, eq=False)
class TypeDefinition(Node):
    """``class Name { ... }`` or ``enum Name { ... }``."""

    name: str = ""
    is_enum: bool = False
    members: tuple[Node, ...] = ()

    def children(self) -> tuple[Node, ...]:
        return self.members


@dataclass(frozen=True, eq=False)
class FunctionMember(Node):
    """Method or constructor of a type; its body is a FunctionDefinition child."""

    name: str = ""
    is_constructor: bool = False
    body: FunctionDefinition | None = None

    def children(self) -> tuple[Node, ...]:
        return (self.body,) if self.body is not None else ()


@dataclass(frozen=True, eq=False)
class PropertyMember(Node):
    name: str = ""
    initial_value: Node | None = None

    def children(self) -> tuple[Node, ...]:
        return (self.initial_value,) if self.initial_value is not None else ()


@dataclass(frozen=True, eq=False)
class ConfigurationDefinition(Node):
    """``Configuration Name { ... }``; the instance name is its own node."""

    instance_name: Node | None = None
    body: Node | None = None

    def children(self) -> tuple[Node, ...]:
        return tuple(n for n in (self.instance_name, self.body) if n is not None)


@dataclass(frozen=True, eq=False)
class AssignmentStatement(Node):
    left: Node | None = None
    right: Node | None = None

    def children(self) -> tuple[Node, ...]:
        return tuple(n for n in (self.left, self.right) if n is not None)


@dataclass(frozen=True, eq=False)
class VariableExpression(Node):
    """``$name`` or ``${name}``; ``user_path`` holds the bare name."""

    user_path: str = ""


@dataclass(frozen=True, eq=False)
class MemberExpression(Node):
    """``$obj.Member``."""

    expression: Node | None = None
    member: Node | None = None

    def children(self) -> tuple[Node, ...]:
        return tuple(n for n in (self.expression, self.member) if n is not None)


@dataclass(frozen=True, eq=False)
class IndexExpression(Node):
    """``$obj[index]``."""

    target: Node | None = None
    index: Node | None = None

    def children(self) -> tuple[Node, ...]:
        return tuple(n for n in (self.target, self.index) if n is not None)


@dataclass(frozen=True, eq=False)
class ArrayLiteral(Node):
    """Comma list, e.g. ``$a, $b`` on the left of a multi-assignment."""

    elements: tuple[Node, ...] = ()

    def children(self) -> tuple[Node, ...]:
        return self.elements


@dataclass(frozen=True, eq=False)
class ConvertExpression(Node):
    """``[type]$child``."""

    type_name: str = ""
    child: Node | None = None

    def children(self) -> tuple[Node, ...]:
        return (self.child,) if self.child is not None else ()


@dataclass(frozen=True, eq=False)
class StringConstant(Node):
    value: str = ""


@dataclass(frozen=True, eq=False)
class CommandParameter(Node):
    """``-Name`` in a command invocation; ``name`` excludes the dash."""

    name: str = ""


@dataclass(frozen=True, eq=False)
class CommandInvocation(Node):
    """A command call; ``elements[0]`` is the command name."""

    elements: tuple[Node, ...] = ()

    @property
    def command_name(self) -> str | None:
        if self.elements and isinstance(self.elements[0], StringConstant):
            return self.elements[0].value
        return None

    def children(self) -> tuple[Node, ...]:
        return self.elements


NODE_TYPES: tuple[type[Node], ...] = (
    ScriptBlock,
    StatementBlock,
    Pipeline,
    FunctionDefinition,
    TypeDefinition,
    FunctionMember,
    PropertyMember,
    ConfigurationDefinition,
    AssignmentStatement,
    VariableExpression,
    MemberExpression,
    IndexExpression,
    ArrayLiteral,
    ConvertExpression,
    StringConstant,
    CommandParameter,
    CommandInvocation,
)


class ScriptTree:
    """Arena over one parsed script.

    Every reachable node gets an integer id in pre-order; ``parent_of`` is a
    lookup through the parent id list. The tree is never mutated after
    construction.
    """

    def __init__(self, root: Node) -> None:
        self.root = root
        self._nodes: list[Node] = []
        self._parent_ids: list[int | None] = []
        self._ids: dict[Node, int] = {}

        stack: list[tuple[Node, int | None]] = [(root, None)]
        while stack:
            node, parent_id = stack.pop()
            node_id = len(self._nodes)
            self._nodes.append(node)
            self._parent_ids.append(parent_id)
            self._ids.setdefault(node, node_id)
            stack.extend((child, node_id) for child in reversed(node.children()))

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def node_id(self, node: Node) -> int | None:
        return self._ids.get(node)

    def parent_of(self, node: Node) -> Node | None:
        node_id = self.node_id(node)
        if node_id is None:
            return None
        parent_id = self._parent_ids[node_id]
        return self._nodes[parent_id] if parent_id is not None else None
