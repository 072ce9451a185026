"""Tests for ops module (DefinitionFinder)."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import pytest
import structlog
from structlog.testing import capture_logs

from scriptnav.config.models import ResolverConfig
from scriptnav.core.errors import ResolverError
from scriptnav.core.logging import clear_request_id, get_request_id, set_request_id
from scriptnav.symbols.ast import (
    AssignmentStatement,
    CommandInvocation,
    CommandParameter,
    PropertyMember,
    ScriptBlock,
    ScriptTree,
    StringConstant,
    TypeDefinition,
    VariableExpression,
)
from scriptnav.symbols.models import SourceSpan, SymbolKind, SymbolReference
from scriptnav.symbols.ops import DefinitionFinder


def _span(text: str, line: int = 1, column: int = 1) -> SourceSpan:
    return SourceSpan.from_text(text, line, column, file="/scripts/profile.ps1")


def _ref(kind: SymbolKind, name: str) -> SymbolReference:
    return SymbolReference(kind, name, _span(name, 40))


@pytest.fixture
def script() -> ScriptBlock:
    prop = PropertyMember(_span("[int] $Port", 2, 5), name="Port")
    cls = TypeDefinition(_span("class Server {"), name="Server", members=(prop,))
    command = CommandInvocation(
        _span("New-Variable -Name retries", 4),
        elements=(
            StringConstant(_span("New-Variable", 4), value="New-Variable"),
            CommandParameter(_span("-Name", 4, 14), name="Name"),
            StringConstant(_span("retries", 4, 20), value="retries"),
        ),
    )
    left = VariableExpression(_span("$retries", 5), user_path="retries")
    assignment = AssignmentStatement(_span("$retries = 3", 5), left=left)
    return ScriptBlock(_span("class Server {"), statements=(cls, command, assignment))


class TestDefinitionFinder:
    """DefinitionFinder behaviour and logging."""

    def setup_method(self) -> None:
        """Reset structlog so debug events reach capture_logs."""
        structlog.reset_defaults()
        clear_request_id()

    def teardown_method(self) -> None:
        """Drop handlers installed by from_config."""
        for handler in logging.getLogger().handlers[:]:
            logging.getLogger().removeHandler(handler)
            handler.close()
        structlog.reset_defaults()
        clear_request_id()

    def test_default_config(self, script: ScriptBlock) -> None:
        """Defaults keep the full property span and ignore commands."""
        finder = DefinitionFinder()
        prop = finder.find_definition(ScriptTree(script), _ref(SymbolKind.PROPERTY, "Port"))
        assert prop is not None
        assert prop.span.text == "[int] $Port"

        variable = finder.find_definition(script, _ref(SymbolKind.VARIABLE, "$retries"))
        assert variable is not None
        assert variable.span.start_line == 5

    def test_configured_finder(self, script: ScriptBlock) -> None:
        """Resolver options flow through to the search."""
        finder = DefinitionFinder(
            ResolverConfig(narrow_property_spans=True, command_variable_declarations=True)
        )
        prop = finder.find_definition(script, _ref(SymbolKind.PROPERTY, "port"))
        assert prop is not None
        assert prop.span.text == "Port"
        assert prop.span.start_column == 5 + len("[int] $")

        variable = finder.find_definition(script, _ref(SymbolKind.VARIABLE, "$retries"))
        assert variable is not None
        assert variable.span.start_line == 4
        assert variable.span.start_column == 20

    def test_logs_found(self, script: ScriptBlock) -> None:
        """A hit is logged with its location."""
        with capture_logs() as logs:
            DefinitionFinder().find_definition(
                script, _ref(SymbolKind.TYPE, "Server"), request_id="req-7"
            )
        assert logs == [
            {
                "event": "definition_found",
                "log_level": "debug",
                "logger": "scriptnav.symbols",
                "request_id": "req-7",
                "kind": "class",
                "name": "Server",
                "file": "/scripts/profile.ps1",
                "line": 1,
                "column": 7,
            }
        ]

    def test_logs_not_found(self, script: ScriptBlock) -> None:
        """A miss is logged and returns None."""
        with capture_logs() as logs:
            result = DefinitionFinder().find_definition(script, _ref(SymbolKind.ENUM, "Server"))
        assert result is None
        assert logs[0]["event"] == "definition_not_found"
        assert logs[0]["kind"] == "enum"

    def test_missing_tree(self) -> None:
        """A None tree raises ResolverError."""
        with pytest.raises(ResolverError):
            DefinitionFinder().find_definition(None, _ref(SymbolKind.FUNCTION, "Get-Foo"))

    def test_serializable_result(self, script: ScriptBlock) -> None:
        """Results convert to plain dicts for responses."""
        result = DefinitionFinder().find_definition(script, _ref(SymbolKind.CLASS, "Server"))
        assert result is not None
        assert result.to_dict() == {
            "kind": "class",
            "name": "Server",
            "span": {
                "text": "Server",
                "start_line": 1,
                "start_column": 7,
                "end_line": 1,
                "end_column": 13,
                "file": "/scripts/profile.ps1",
            },
        }

    def test_generated_request_id_is_scoped_to_lookup(self, script: ScriptBlock) -> None:
        """Without a caller id, each lookup gets its own and leaves none behind."""
        with capture_logs() as logs:
            DefinitionFinder().find_definition(script, _ref(SymbolKind.CLASS, "Server"))
        assert len(logs[0]["request_id"]) == 12
        assert get_request_id() is None

    def test_caller_request_id_is_reused_and_kept(self, script: ScriptBlock) -> None:
        """An id set by the caller is logged and still set afterwards."""
        set_request_id("outer-1")
        with capture_logs() as logs:
            DefinitionFinder().find_definition(script, _ref(SymbolKind.CLASS, "Server"))
        assert logs[0]["request_id"] == "outer-1"
        assert get_request_id() == "outer-1"

    def test_from_config(
        self, script: ScriptBlock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Repo config drives both resolver options and log outputs."""
        monkeypatch.setattr(
            "scriptnav.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "global" / "config.yaml"
        )
        for key in list(os.environ):
            if key.upper().startswith("SCRIPTNAV__"):
                monkeypatch.delenv(key)
        log_file = tmp_path / "logs" / "scriptnav.log"
        config_dir = tmp_path / ".scriptnav"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text(
            "logging:\n"
            "  level: DEBUG\n"
            "  outputs:\n"
            f"    - format: json\n      destination: {log_file}\n"
            "resolver:\n"
            "  narrow_property_spans: true\n"
        )

        finder = DefinitionFinder.from_config(tmp_path)
        result = finder.find_definition(
            script, _ref(SymbolKind.PROPERTY, "Port"), request_id="req-9"
        )

        assert result is not None
        assert result.span.text == "Port"
        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "definition_found"
        assert record["logger"] == "scriptnav.symbols"
        assert record["request_id"] == "req-9"
