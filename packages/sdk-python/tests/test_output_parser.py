"""Tests for output_parser.py - package-manager output parsing."""

from pathlib import Path

import pytest

from shipyard_common import ParseError
from shipyard_sdk.resolve.output_parser import (
    parse_config,
    parse_dependency_tree,
    resolve_modules_folder,
)


class TestParseDependencyTree:
    """Tests for parse_dependency_tree()."""

    def test_parse_tree(self, tree_output, tree_node):
        """Should return every reported node in order."""
        stdout = tree_output([
            tree_node("a@1.0.0", ["b@2.0.0"]),
            tree_node("b@2.0.0"),
        ])

        nodes = parse_dependency_tree(stdout)

        assert [n.name for n in nodes] == ["a@1.0.0", "b@2.0.0"]
        assert [c.name for c in nodes[0].children] == ["b@2.0.0"]
        assert nodes[1].children == []

    def test_extra_keys_tolerated(self, tree_output):
        """Unknown keys in entries should not fail parsing."""
        stdout = tree_output([{"name": "a@1.0.0", "children": [], "shadow": False, "depth": 0}])

        nodes = parse_dependency_tree(stdout)

        assert nodes[0].name == "a@1.0.0"

    def test_missing_children_defaults_to_empty(self, tree_output):
        """Entries without a children key have no children."""
        nodes = parse_dependency_tree(tree_output([{"name": "a@1.0.0"}]))

        assert nodes[0].children == []

    def test_empty_tree(self, tree_output):
        """An empty array is a valid tree."""
        assert parse_dependency_tree(tree_output([])) == []

    def test_no_envelope_fails(self):
        """Output without the tree envelope should fail with the raw output."""
        stdout = '{"type":"info","data":"No lockfile found."}'

        with pytest.raises(ParseError) as exc_info:
            parse_dependency_tree(stdout, command="yarn list --json --prod")

        assert exc_info.value.raw_output == stdout
        assert exc_info.value.command == "yarn list --json --prod"
        assert "Not able to find a dependency tree" in exc_info.value.message

    def test_extra_lines_fail(self, tree_output):
        """The envelope must cover the whole output."""
        stdout = '{"type":"warning","data":"x"}\n' + tree_output([])

        with pytest.raises(ParseError):
            parse_dependency_tree(stdout)

    def test_invalid_json_fails(self):
        """A matching envelope with broken JSON should fail."""
        stdout = '{"type":"tree","data":{"type":"list","trees":[{"name":}]}}'

        with pytest.raises(ParseError) as exc_info:
            parse_dependency_tree(stdout)

        assert "Invalid dependency tree JSON" in exc_info.value.message

    def test_non_array_fails(self):
        """The trees payload must be an array."""
        stdout = '{"type":"tree","data":{"type":"list","trees":{"name":"a@1"}}}'

        with pytest.raises(ParseError):
            parse_dependency_tree(stdout)

    def test_entry_without_name_fails(self):
        """Entries without a name are malformed."""
        stdout = '{"type":"tree","data":{"type":"list","trees":[{"children":[]}]}}'

        with pytest.raises(ParseError) as exc_info:
            parse_dependency_tree(stdout)

        assert "Malformed dependency tree entry" in exc_info.value.message

    def test_empty_output_fails(self):
        """Empty output is not a tree."""
        with pytest.raises(ParseError):
            parse_dependency_tree("")


class TestParseConfig:
    """Tests for parse_config()."""

    def test_modules_folder(self):
        """Escaped config should be decoded."""
        stdout = '{"type":"log","data":"{\\"modulesFolder\\":\\"/tmp/nm\\"}"}'

        config = parse_config(stdout)

        assert config["modulesFolder"] == "/tmp/nm"

    def test_pretty_printed_config(self, config_output):
        """Escaped newlines from pretty printing are dropped."""
        stdout = config_output({"version-tag-prefix": "v", "modulesFolder": "/srv/nm"})

        config = parse_config(stdout)

        assert config == {"version-tag-prefix": "v", "modulesFolder": "/srv/nm"}

    def test_no_envelope_fails(self):
        """Output lacking the log envelope should fail."""
        stdout = '{"modulesFolder":"/tmp/nm"}'

        with pytest.raises(ParseError) as exc_info:
            parse_config(stdout, command="yarn config current --json")

        assert exc_info.value.raw_output == stdout
        assert "Not able to get package manager configuration" in exc_info.value.message

    def test_invalid_embedded_json_fails(self):
        """Unescaped text that is not JSON should fail."""
        stdout = '{"type":"log","data":"not json"}'

        with pytest.raises(ParseError) as exc_info:
            parse_config(stdout)

        assert "Invalid configuration JSON" in exc_info.value.message

    def test_non_object_fails(self):
        """The configuration must be a JSON object."""
        with pytest.raises(ParseError):
            parse_config('{"type":"log","data":"[1, 2]"}')


class TestResolveModulesFolder:
    """Tests for resolve_modules_folder()."""

    def test_uses_configured_folder(self):
        """modulesFolder wins when set."""
        assert resolve_modules_folder({"modulesFolder": "/tmp/nm"}, "/project") == "/tmp/nm"

    def test_falls_back_to_root_node_modules(self, tmp_path):
        """Missing modulesFolder falls back to <root>/node_modules."""
        folder = resolve_modules_folder({}, str(tmp_path))

        assert folder == str(tmp_path.resolve() / "node_modules")

    def test_empty_value_falls_back(self, tmp_path):
        """An empty modulesFolder is treated as unset."""
        folder = resolve_modules_folder({"modulesFolder": ""}, str(tmp_path))

        assert Path(folder).name == "node_modules"
