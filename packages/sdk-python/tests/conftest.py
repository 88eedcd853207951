"""Pytest configuration and fixtures for SDK tests."""

import json
from typing import Any, Dict, List, Optional

import pytest


class FakeRunner:
    """Stand-in for CommandRunner returning canned output per command."""

    def __init__(self, outputs: Optional[Dict[str, Any]] = None):
        self.outputs: Dict[str, Any] = dict(outputs or {})
        self.commands: List[str] = []

    def set_output(self, command: str, output: Any) -> None:
        self.outputs[command] = output

    async def run(self, command: str) -> str:
        self.commands.append(command)
        result = self.outputs.get(command, "")
        if isinstance(result, BaseException):
            raise result
        return result


def _node(name: str, children: Optional[List[str]] = None) -> Dict[str, Any]:
    return {
        "name": name,
        "children": [
            {"name": child, "color": "dim", "shadow": True} for child in (children or [])
        ],
        "hint": None,
        "color": "bold",
        "depth": 0,
    }


@pytest.fixture
def tree_node():
    """Build one raw tree entry: tree_node("a@1.0.0", ["b@2.0.0"])."""
    return _node


@pytest.fixture
def tree_output():
    """Render entries the way `yarn list --json --prod` prints them."""

    def render(trees: List[Dict[str, Any]]) -> str:
        payload = {"type": "tree", "data": {"type": "list", "trees": trees}}
        return json.dumps(payload, separators=(",", ":")) + "\n"

    return render


@pytest.fixture
def config_output():
    """Render a config the way `yarn config current --json` prints it."""

    def render(config: Dict[str, Any]) -> str:
        payload = {"type": "log", "data": json.dumps(config, indent=2)}
        return json.dumps(payload, separators=(",", ":")) + "\n"

    return render


@pytest.fixture
def fake_runner():
    """Create an empty FakeRunner."""
    return FakeRunner()


@pytest.fixture
def sample_graph():
    """Graph A -> B, C; B -> D."""
    return {"A": ["B", "C"], "B": ["D"], "C": [], "D": []}
