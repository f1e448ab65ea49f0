"""Tests for graph definition files."""

import tomllib
from pathlib import Path

import pytest

from depgraph import (
    DuplicateKeyError,
    GraphFileError,
    SelfReferenceError,
    TaskNode,
    UnknownNodeError,
    export_order_to_toml,
    load_graph_from_toml,
)
from depgraph._io import GraphDefinition, definition_to_graph, toml_to_graph


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "graph.toml"
    path.write_text(text)
    return path


class TestTomlToGraph:
    def test_empty_contents(self) -> None:
        graph = toml_to_graph({})
        assert len(graph) == 0

    def test_nodes_and_dependencies(self) -> None:
        graph = toml_to_graph(
            {
                "nodes": ["A", "B", "C"],
                "dependencies": {"C": ["A", "B"], "B": ["A"]},
            },
        )
        assert graph.keys() == ["A", "B", "C"]
        assert graph.top_sort() == ["C", "B", "A"]

    def test_rejects_unknown_sections(self) -> None:
        with pytest.raises(GraphFileError, match="Invalid graph definition"):
            toml_to_graph({"vertices": ["A"]})

    def test_rejects_wrong_types(self) -> None:
        with pytest.raises(GraphFileError):
            toml_to_graph({"nodes": "A"})

    def test_definition_model(self) -> None:
        definition = GraphDefinition(nodes=["a"], tasks=[TaskNode(name="b")], dependencies={"b": ["a"]})
        graph = definition_to_graph(definition)
        assert graph.build_order() == ["a", "b"]


class TestLoadGraphFromToml:
    def test_load_with_tasks(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            """
nodes = ["boot", "shell"]

[[tasks]]
name = "login"
description = "Start the login prompt"
tags = ["tty"]

[dependencies]
shell = ["boot"]
login = ["shell", "boot"]
""",
        )
        graph = load_graph_from_toml(path)

        assert graph.keys() == ["boot", "shell", "login"]
        login = graph.get("login").value
        assert isinstance(login, TaskNode)
        assert login.description == "Start the login prompt"
        assert login.tags == ("tty",)
        assert graph.build_order() == ["boot", "shell", "login"]

    def test_accepts_str_path(self, tmp_path: Path) -> None:
        path = _write(tmp_path, 'nodes = ["a"]\n')
        assert load_graph_from_toml(str(path)).keys() == ["a"]

    def test_unknown_dependency(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            """
nodes = ["A"]

[dependencies]
A = ["B"]
""",
        )
        with pytest.raises(UnknownNodeError) as exc_info:
            load_graph_from_toml(path)
        assert exc_info.value.key == "B"

    def test_self_dependency(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            """
nodes = ["A"]

[dependencies]
A = ["A"]
""",
        )
        with pytest.raises(SelfReferenceError):
            load_graph_from_toml(path)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "nodes = [\n")
        with pytest.raises(GraphFileError, match="Invalid TOML"):
            load_graph_from_toml(path)

    def test_duplicate_keys_overwrite(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            """
nodes = ["build"]

[[tasks]]
name = "build"
""",
        )
        graph = load_graph_from_toml(path)
        assert isinstance(graph.get("build").value, TaskNode)

    def test_duplicate_keys_strict(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            """
nodes = ["build"]

[[tasks]]
name = "build"
""",
        )
        with pytest.raises(DuplicateKeyError):
            load_graph_from_toml(path, strict=True)


class TestExportOrderToToml:
    def test_writes_order(self, tmp_path: Path) -> None:
        output = tmp_path / "out" / "order.toml"
        export_order_to_toml(["c", "b", "a"], output)

        with output.open("rb") as f:
            data = tomllib.load(f)

        assert data == {"order": ["c", "b", "a"]}

    def test_empty_order(self, tmp_path: Path) -> None:
        output = tmp_path / "order.toml"
        export_order_to_toml([], output)
        with output.open("rb") as f:
            assert tomllib.load(f) == {"order": []}


class TestExampleGraphs:
    def test_init_order_example(self) -> None:
        path = Path(__file__).parent.parent / "examples" / "init_order.toml"
        graph = load_graph_from_toml(path)

        assert graph.keys() == ["network", "database", "cache", "migrations", "api", "worker"]
        assert graph.edge_count == 7
        api = graph.get("api").value
        assert isinstance(api, TaskNode)
        assert api.tags == ("web",)

        order = graph.build_order()
        assert order == ["network", "database", "cache", "migrations", "worker", "api"]
        for dependent, dependent_on in graph.edges():
            assert order.index(dependent_on) < order.index(dependent)
