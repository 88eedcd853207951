"""Pytest configuration and fixtures for CLI tests."""

import json

import pytest
import yaml


class FakeRunner:
    """Canned package-manager output keyed by command."""

    def __init__(self, outputs):
        self.outputs = outputs
        self.directories = []

    async def run(self, command: str) -> str:
        result = self.outputs.get(command, "")
        if isinstance(result, BaseException):
            raise result
        return result


def _tree(entries):
    trees = [
        {"name": name, "children": [{"name": c} for c in children]}
        for name, children in entries
    ]
    return json.dumps(
        {"type": "tree", "data": {"type": "list", "trees": trees}}, separators=(",", ":")
    )


def _config(config):
    return json.dumps({"type": "log", "data": json.dumps(config)}, separators=(",", ":"))


@pytest.fixture
def project(tmp_path):
    """A project with a module store, an assembly and a Bundlefile."""
    nm = tmp_path / "node_modules"
    for name in ["b", "c", "d"]:
        (nm / name).mkdir(parents=True)
        (nm / name / "package.json").write_text("{}")

    assembly = tmp_path / "examples" / "assembly"
    (assembly / "lib").mkdir(parents=True)
    (assembly / "lib" / "index.html").write_text("")
    (assembly / "package.json").write_text("{}")

    bundlefile = tmp_path / "Bundlefile.yaml"
    bundlefile.write_text(
        yaml.dump(
            {
                "version": "1.0",
                "bundle": {"root_module": "a", "root_dir": "."},
                "policy": {"excluded_packages": [], "forbidden_packages": []},
            }
        )
    )
    return tmp_path


@pytest.fixture
def package_manager(monkeypatch, project):
    """Replace the real command runner with canned output for a -> b, c; b -> d."""
    outputs = {
        "yarn list --json --prod": _tree([
            ("a@1.0.0", ["b@1.0.0", "c@1.0.0"]),
            ("b@1.0.0", ["d@1.0.0"]),
            ("c@1.0.0", []),
            ("d@1.0.0", []),
        ]),
        "yarn config current --json": _config({"modulesFolder": str(project / "node_modules")}),
    }
    runner = FakeRunner(outputs)

    def factory(directory, timeout=None, max_output_bytes=None):
        runner.directories.append(directory)
        return runner

    monkeypatch.setattr("shipyard_sdk.resolve.resolver.CommandRunner", factory)
    return runner
