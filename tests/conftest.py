"""Shared pytest fixtures for netguard tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from netguard.graph import Graph
from netguard.network_builder import build_network

# Scenario A: A -> B between two vulnerable nodes, C safe.
SCENARIO_A = """\
3
A true
B true
C false
A B 1.0 3
"""

# Scenario B: one safe server, one vulnerable node, undirected level-1 link.
SCENARIO_B = """\
2
S false
V true
S V 10.0 1
"""

# Scenario C: same nodes, no link.
SCENARIO_C = """\
2
S false
V true
"""

# A small campus: two safe servers, a vulnerable chain with a safe shortcut.
CAMPUS = """\
# campus network
7
srv1 false
srv2 false
v1 true
v2 true
v3 true
v4 true
gw false

srv1 v1 2.0 3
v1 v2 1.0 1
v2 v3 1.0 2
v1 gw 0.5 3
gw v3 0.5 3
v3 v4 4.0 3
srv2 v4 1.0 3
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def make_graph() -> Callable[..., Graph]:
    """Build a graph from network text."""

    def _make(text: str, directed: bool = False) -> Graph:
        return build_network(text.splitlines(), directed=directed)

    return _make


@pytest.fixture
def write_network(tmp_path: Path) -> Callable[[str], Path]:
    """Write network text to a file under tmp_path and return its path."""

    def _write(text: str, name: str = "network.txt") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root and netguard logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    netguard = logging.getLogger("netguard")
    netguard_level = netguard.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    netguard.setLevel(netguard_level)
