"""Symbol references and source spans exchanged with the resolver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class SymbolKind(str, Enum):
    """Semantic kind of a symbol.

    TYPE is a search wildcard that matches either CLASS or ENUM declarations.
    """

    VARIABLE = "variable"
    FUNCTION = "function"
    TYPE = "type"
    CLASS = "class"
    ENUM = "enum"
    CONSTRUCTOR = "constructor"
    METHOD = "method"
    PROPERTY = "property"
    CONFIGURATION = "configuration"


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Line/column range plus the text it covers. Lines and columns are 1-based."""

    text: str
    start_line: int
    start_column: int
    end_line: int
    end_column: int
    file: str | None = None

    @classmethod
    def from_text(cls, text: str, line: int, column: int, file: str | None = None) -> SourceSpan:
        """Build a span for ``text`` starting at ``line``/``column``.

        The end position is exclusive: one column past the last character.
        """
        lines = text.split("\n")
        end_line = line + len(lines) - 1
        if len(lines) == 1:
            end_column = column + len(text)
        else:
            end_column = len(lines[-1]) + 1
        return cls(
            text=text,
            start_line=line,
            start_column=column,
            end_line=end_line,
            end_column=end_column,
            file=file,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "start_line": self.start_line,
            "start_column": self.start_column,
            "end_line": self.end_line,
            "end_column": self.end_column,
            "file": self.file,
        }


@dataclass(frozen=True, slots=True)
class SymbolReference:
    """A symbol at a use site (search input) or declaration site (result).

    ``name`` is the canonical name, already alias-resolved by the caller.
    """

    kind: SymbolKind
    name: str
    span: SourceSpan

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "kind": self.kind.value,
            "name": self.name,
            "span": self.span.to_dict(),
        }
