"""Variable declarations on the left-hand side of assignments.

Only bare variable targets count: ``$x = 1`` declares ``x``, and so do
``[int]$x = 1`` and ``$x, $y = 1, 2``. Member and index targets such as
``$obj.Field = 1`` or ``$arr[0] = 1`` never declare ``obj`` or ``arr``.
"""

from __future__ import annotations

from scriptnav.symbols.ast import (
    CommandInvocation,
    CommandParameter,
    IndexExpression,
    MemberExpression,
    Node,
    StringConstant,
    VariableExpression,
)
from scriptnav.symbols.models import SymbolKind, SymbolReference
from scriptnav.symbols.traversal import VisitAction, walk

VARIABLE_SIGIL = "$"

# Commands that declare the variable named by their -Name argument.
VARIABLE_COMMANDS = frozenset({"set-variable", "new-variable", "set", "sv", "nv"})

# Parameters of those commands that take no value.
SWITCH_PARAMETERS = ("passthru", "force", "whatif", "confirm", "verbose", "debug")


def normalize_variable_name(name: str) -> str:
    """Strip one leading sigil, then one enclosing brace pair.

    ``$count`` and ``${count}`` both become ``count``.
    """
    if name.startswith(VARIABLE_SIGIL):
        name = name[1:]
    if len(name) >= 2 and name.startswith("{") and name.endswith("}"):
        name = name[1:-1]
    return name


def _ordinal_char_equals(left: str, right: str) -> bool:
    if left == right:
        return True
    upper_left, upper_right = left.upper(), right.upper()
    return len(upper_left) == 1 and upper_left == upper_right


def _ordinal_equals(left: str, right: str) -> bool:
    """Case-insensitive comparison per code point; no multi-character case mappings."""
    return len(left) == len(right) and all(map(_ordinal_char_equals, left, right))


def find_in_assignment_target(lhs: Node, target: SymbolReference) -> SymbolReference | None:
    """Find the variable ``target`` names among the bare variables of ``lhs``."""
    if target.kind is not SymbolKind.VARIABLE:
        return None

    variable_name = normalize_variable_name(target.name)
    if not variable_name:
        return None
    found: SymbolReference | None = None

    def visit(node: Node) -> VisitAction:
        nonlocal found
        if isinstance(node, (MemberExpression, IndexExpression)):
            return VisitAction.SKIP_CHILDREN
        if isinstance(node, VariableExpression) and _ordinal_equals(
            node.user_path, variable_name
        ):
            found = SymbolReference(SymbolKind.VARIABLE, node.user_path, node.span)
            return VisitAction.STOP
        return VisitAction.CONTINUE

    walk(lhs, visit)
    return found


def _is_switch(parameter: str) -> bool:
    return bool(parameter) and any(s.startswith(parameter) for s in SWITCH_PARAMETERS)


def _name_argument(command: CommandInvocation) -> StringConstant | None:
    """Return the argument that names the variable, by -Name or first position."""
    arguments = command.elements[1:]
    positional: StringConstant | None = None
    expect_name = False
    skip_value = False
    for element in arguments:
        if isinstance(element, CommandParameter):
            parameter = element.name.lower()
            # -Name:value binds the next element even for switches.
            bound = parameter.endswith(":")
            parameter = parameter.rstrip(":")
            expect_name = bool(parameter) and "name".startswith(parameter)
            skip_value = not expect_name and (bound or not _is_switch(parameter))
            continue
        if expect_name:
            return element if isinstance(element, StringConstant) else None
        if skip_value:
            skip_value = False
            continue
        if positional is None and isinstance(element, StringConstant):
            positional = element
    return positional


def find_in_variable_command(
    command: CommandInvocation, target: SymbolReference
) -> SymbolReference | None:
    """Match ``Set-Variable -Name count`` (and friends) against ``target``."""
    if target.kind is not SymbolKind.VARIABLE:
        return None
    command_name = command.command_name
    if command_name is None or command_name.lower() not in VARIABLE_COMMANDS:
        return None

    argument = _name_argument(command)
    if argument is None:
        return None
    declared = normalize_variable_name(argument.value)
    if declared and _ordinal_equals(declared, normalize_variable_name(target.name)):
        return SymbolReference(SymbolKind.VARIABLE, declared, argument.span)
    return None
