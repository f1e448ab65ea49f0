import logging
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ._errors import GraphFileError
from ._graph import DependencyGraph
from ._keyer import TaskNode

logger = logging.getLogger(__name__)


class GraphDefinition(BaseModel):
    """Schema of a graph definition file.

    Example:
        nodes = ["boot", "shell"]

        [[tasks]]
        name = "login"
        description = "Start the login prompt"

        [dependencies]
        shell = ["boot"]
        login = ["shell"]

    """

    model_config = ConfigDict(extra="forbid")

    nodes: list[str] = Field(default_factory=list)
    tasks: list[TaskNode] = Field(default_factory=list)
    dependencies: dict[str, list[str]] = Field(default_factory=dict)


def definition_to_graph(definition: GraphDefinition, *, strict: bool = False) -> DependencyGraph:
    """Build a graph from a validated definition.

    Plain nodes are registered first, then tasks, then dependencies are
    applied table by table. Dependencies never register nodes implicitly.
    """
    graph = DependencyGraph(definition.nodes, strict=strict)
    for task in definition.tasks:
        graph.add_node(task)
    for dependent, prerequisites in definition.dependencies.items():
        graph.add_dependencies_for_node(dependent, prerequisites)
    return graph


def toml_to_graph(toml_contents: dict[str, Any], *, strict: bool = False) -> DependencyGraph:
    """Validate parsed TOML contents and build a graph from them.

    Raises:
        GraphFileError: If the contents do not match the definition schema.

    """
    try:
        definition = GraphDefinition.model_validate(toml_contents)
    except ValidationError as e:
        msg = f"Invalid graph definition: {e}"
        raise GraphFileError(msg) from e
    return definition_to_graph(definition, strict=strict)


def load_graph_from_toml(input_path: Path | str, *, strict: bool = False) -> DependencyGraph:
    """Load a graph definition file.

    Args:
        input_path: Path to the TOML file.
        strict: Reject duplicate node keys.

    Returns:
        The populated graph.

    Raises:
        GraphFileError: If the file is not valid TOML or does not match the schema.
        UnknownNodeError: If a dependency names an unlisted node.
        SelfReferenceError: If a node lists itself as a dependency.

    """
    input_path = Path(input_path)

    with input_path.open("rb") as f:
        try:
            toml_contents = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {input_path}: {e}"
            raise GraphFileError(msg) from e

    graph = toml_to_graph(toml_contents, strict=strict)
    logger.debug(f"Loaded {graph!r} from {input_path}")
    return graph


def export_order_to_toml(order: list[str], output_path: Path | str) -> None:
    """Write a sorted key sequence as ``order = [...]`` to a TOML file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("wb") as f:
        tomli_w.dump({"order": list(order)}, f)

    logger.debug(f"Exported order of {len(order)} node(s) to {output_path}")
