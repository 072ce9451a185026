"""Declaration resolution over parsed script trees."""

from scriptnav.symbols.ast import NODE_TYPES, Node, ScriptTree
from scriptnav.symbols.declarations import find_declaration, narrow_span
from scriptnav.symbols.models import SourceSpan, SymbolKind, SymbolReference
from scriptnav.symbols.ops import DefinitionFinder
from scriptnav.symbols.traversal import VisitAction, walk
from scriptnav.symbols.variables import find_in_assignment_target, normalize_variable_name

__all__ = [
    "DefinitionFinder",
    "NODE_TYPES",
    "Node",
    "ScriptTree",
    "SourceSpan",
    "SymbolKind",
    "SymbolReference",
    "VisitAction",
    "find_declaration",
    "find_in_assignment_target",
    "narrow_span",
    "normalize_variable_name",
    "walk",
]
