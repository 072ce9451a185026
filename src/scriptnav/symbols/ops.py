"""Go-to-definition entry point.

Wraps the pure declaration search with configuration and structured logging.
Callers own parsing, caching and alias resolution; this layer receives an
already-parsed tree and a canonical symbol reference.
"""

from __future__ import annotations

from pathlib import Path

from scriptnav.config.loader import load_config
from scriptnav.config.models import ResolverConfig
from scriptnav.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)
from scriptnav.symbols.ast import Node, ScriptTree
from scriptnav.symbols.declarations import find_declaration
from scriptnav.symbols.models import SymbolReference

LOGGER_NAME = "scriptnav.symbols"


class DefinitionFinder:
    """Resolve symbol references to their declaration sites.

    Stateless across calls; a single instance can serve concurrent lookups
    against trees that are not being mutated.
    """

    def __init__(self, config: ResolverConfig | None = None) -> None:
        self.config = config or ResolverConfig()

    @classmethod
    def from_config(cls, repo_root: Path | None = None) -> DefinitionFinder:
        """Load config for ``repo_root``, configure logging from it, build a finder."""
        config = load_config(repo_root)
        configure_logging(config=config.logging)
        return cls(config.resolver)

    def find_definition(
        self,
        tree: ScriptTree | Node | None,
        target: SymbolReference,
        *,
        request_id: str | None = None,
    ) -> SymbolReference | None:
        """Find the declaration of ``target``.

        Log events carry ``request_id``: the one given, the caller's current
        one, or a fresh id for this lookup.
        """
        previous = get_request_id()
        rid = set_request_id(request_id or previous)
        try:
            return self._lookup(tree, target, rid)
        finally:
            if previous is None:
                clear_request_id()
            else:
                set_request_id(previous)

    def _lookup(
        self, tree: ScriptTree | Node | None, target: SymbolReference, rid: str
    ) -> SymbolReference | None:
        log = get_logger(LOGGER_NAME).bind(request_id=rid)
        found = find_declaration(
            tree,
            target,
            narrow_properties=self.config.narrow_property_spans,
            command_variables=self.config.command_variable_declarations,
        )

        if found is None:
            log.debug("definition_not_found", kind=target.kind.value, name=target.name)
        else:
            log.debug(
                "definition_found",
                kind=found.kind.value,
                name=found.name,
                file=found.span.file,
                line=found.span.start_line,
                column=found.span.start_column,
            )
        return found
