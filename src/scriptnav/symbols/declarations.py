"""Find the node that declares a symbol and the span of its name.

One pre-order walk over the script tree; every declaration-shaped node is
checked against the target and the first match stops the walk. Narrowed
spans are derived from the declaring node's own span, never computed from
scratch.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from scriptnav.core.errors import ResolverError
from scriptnav.symbols.ast import (
    AssignmentStatement,
    CommandInvocation,
    ConfigurationDefinition,
    FunctionDefinition,
    FunctionMember,
    Node,
    PropertyMember,
    ScriptTree,
    TypeDefinition,
)
from scriptnav.symbols.models import SourceSpan, SymbolKind, SymbolReference
from scriptnav.symbols.traversal import VisitAction, walk
from scriptnav.symbols.variables import find_in_assignment_target, find_in_variable_command


def narrow_span(span: SourceSpan, name: str, column_base: int) -> SourceSpan:
    """Span covering the first case-insensitive occurrence of ``name`` in ``span.text``.

    The result sits on ``span``'s start line at ``column_base + offset``.
    ``column_base`` is the node's own start column, or 1 when the offset is
    taken as a column of its own. If ``name`` does not occur, the offset is 0.
    """
    match = re.search(re.escape(name), span.text, re.IGNORECASE)
    offset = match.start() if match else 0
    start_column = column_base + offset
    return SourceSpan(
        text=name,
        start_line=span.start_line,
        start_column=start_column,
        end_line=span.start_line,
        end_column=start_column + len(name),
        file=span.file,
    )


def _names_equal(left: str, right: str) -> bool:
    return left.casefold() == right.casefold()


@dataclass
class _DeclarationSearch:
    tree: ScriptTree
    target: SymbolReference
    narrow_properties: bool = False
    command_variables: bool = False
    found: SymbolReference | None = None

    def _stop(self, found: SymbolReference) -> VisitAction:
        self.found = found
        return VisitAction.STOP

    def function_definition(self, node: FunctionDefinition) -> VisitAction:
        # Method and constructor bodies are matched through their FunctionMember.
        # Functions nested inside those bodies have a ScriptBlock parent and still count.
        if isinstance(self.tree.parent_of(node), FunctionMember):
            return VisitAction.CONTINUE
        if self.target.kind is SymbolKind.FUNCTION and _names_equal(node.name, self.target.name):
            name_span = narrow_span(node.span, node.name, 1)
            return self._stop(SymbolReference(SymbolKind.FUNCTION, node.name, name_span))
        return VisitAction.CONTINUE

    def type_definition(self, node: TypeDefinition) -> VisitAction:
        kind = SymbolKind.ENUM if node.is_enum else SymbolKind.CLASS
        if self.target.kind in (SymbolKind.TYPE, kind) and _names_equal(
            node.name, self.target.name
        ):
            name_span = narrow_span(node.span, node.name, node.span.start_column)
            return self._stop(SymbolReference(kind, node.name, name_span))
        return VisitAction.CONTINUE

    def function_member(self, node: FunctionMember) -> VisitAction:
        kind = SymbolKind.CONSTRUCTOR if node.is_constructor else SymbolKind.METHOD
        if self.target.kind is kind and _names_equal(node.name, self.target.name):
            name_span = narrow_span(node.span, node.name, node.span.start_column)
            return self._stop(SymbolReference(kind, node.name, name_span))
        return VisitAction.CONTINUE

    def property_member(self, node: PropertyMember) -> VisitAction:
        if self.target.kind is SymbolKind.PROPERTY and _names_equal(node.name, self.target.name):
            span = node.span
            if self.narrow_properties:
                span = narrow_span(span, node.name, span.start_column)
            return self._stop(SymbolReference(SymbolKind.PROPERTY, node.name, span))
        return VisitAction.CONTINUE

    def configuration_definition(self, node: ConfigurationDefinition) -> VisitAction:
        if node.instance_name is None:
            return VisitAction.CONTINUE
        name = node.instance_name.span.text
        if (
            name
            and self.target.kind is SymbolKind.CONFIGURATION
            and _names_equal(name, self.target.name)
        ):
            name_span = narrow_span(node.span, name, node.span.start_column)
            return self._stop(SymbolReference(SymbolKind.CONFIGURATION, name, name_span))
        return VisitAction.CONTINUE

    def assignment_statement(self, node: AssignmentStatement) -> VisitAction:
        if self.target.kind is not SymbolKind.VARIABLE or node.left is None:
            return VisitAction.CONTINUE
        found = find_in_assignment_target(node.left, self.target)
        return self._stop(found) if found is not None else VisitAction.CONTINUE

    def command_invocation(self, node: CommandInvocation) -> VisitAction:
        if not self.command_variables:
            return VisitAction.CONTINUE
        found = find_in_variable_command(node, self.target)
        return self._stop(found) if found is not None else VisitAction.CONTINUE

    def visit(self, node: Node) -> VisitAction:
        handler = DECLARATION_HANDLERS.get(type(node))
        if handler is None:
            return VisitAction.CONTINUE
        return handler(self, node)


DECLARATION_HANDLERS: dict[type[Node], Callable[[_DeclarationSearch, Node], VisitAction]] = {
    FunctionDefinition: _DeclarationSearch.function_definition,  # type: ignore[dict-item]
    TypeDefinition: _DeclarationSearch.type_definition,  # type: ignore[dict-item]
    FunctionMember: _DeclarationSearch.function_member,  # type: ignore[dict-item]
    PropertyMember: _DeclarationSearch.property_member,  # type: ignore[dict-item]
    ConfigurationDefinition: _DeclarationSearch.configuration_definition,  # type: ignore[dict-item]
    AssignmentStatement: _DeclarationSearch.assignment_statement,  # type: ignore[dict-item]
    CommandInvocation: _DeclarationSearch.command_invocation,  # type: ignore[dict-item]
}


def find_declaration(
    tree: ScriptTree | Node | None,
    target: SymbolReference,
    *,
    narrow_properties: bool = False,
    command_variables: bool = False,
) -> SymbolReference | None:
    """Return the first declaration of ``target`` in pre-order, or None.

    Args:
        tree: Indexed script tree to search, or the root node of one.
        target: Symbol to resolve; its name is compared case-insensitively.
        narrow_properties: Report property declarations by name only instead
            of their full extent.
        command_variables: Treat Set-Variable/New-Variable invocations as
            variable declarations.

    Raises:
        ResolverError: If ``tree`` is not a tree or node, or ``target`` is not a
            SymbolReference.
    """
    if isinstance(tree, Node):
        tree = ScriptTree(tree)
    if not isinstance(tree, ScriptTree):
        raise ResolverError.invalid_argument("tree", "a parsed script tree is required")
    if not isinstance(target, SymbolReference):
        raise ResolverError.invalid_argument("target", "expected a SymbolReference")

    search = _DeclarationSearch(
        tree,
        target,
        narrow_properties=narrow_properties,
        command_variables=command_variables,
    )
    walk(tree.root, search.visit)
    return search.found
