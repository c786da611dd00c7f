import logging
import tomllib
from collections.abc import Hashable, Sequence
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ._node import Node

logger = logging.getLogger(__name__)


class NodeFileError(Exception):
    """Error reading or validating a node file."""


class NodeEntry(BaseModel):
    """One `[nodes.<id>]` table of a node file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    deps: list[str] = Field(default_factory=list)
    value: Any = None


class NodeFile(BaseModel):
    """Schema of a node file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    nodes: dict[str, NodeEntry] = Field(default_factory=dict)


def toml_to_nodes(toml_contents: dict[str, Any]) -> list[Node[str, Any]]:
    """Convert parsed TOML contents to nodes, keeping table order.

    A node without a `value` key carries its own identifier as payload.

    Raises:
        NodeFileError: If the contents do not match the node file schema.

    """
    try:
        node_file = NodeFile.model_validate(toml_contents)
    except ValidationError as e:
        msg = f"Invalid node file: {e}"
        raise NodeFileError(msg) from e

    return [
        Node(node_id, tuple(entry.deps), node_id if entry.value is None else entry.value)
        for node_id, entry in node_file.nodes.items()
    ]


def load_nodes_from_toml(input_path: Path | str) -> list[Node[str, Any]]:
    """Load nodes from a TOML node file.

    Args:
        input_path: Path to the node file.

    Returns:
        Nodes in the order their tables appear in the file.

    Raises:
        NodeFileError: If the file is missing, is not valid TOML, or does not match the schema.

    """
    input_path = Path(input_path)

    try:
        with input_path.open("rb") as f:
            toml_contents = tomllib.load(f)
    except FileNotFoundError as e:
        msg = f"Node file not found: {input_path}"
        raise NodeFileError(msg) from e
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {input_path}: {e}"
        raise NodeFileError(msg) from e

    nodes = toml_to_nodes(toml_contents)
    logger.debug(f"Loaded {len(nodes)} nodes from {input_path}")
    return nodes


def result_to_dict(target: Hashable, order: Sequence[Hashable], values: Sequence[Any]) -> dict[str, Any]:
    """Build the TOML document for a sort result.

    `None` payloads are written as empty strings since TOML has no null.
    """
    return {
        "target": str(target),
        "order": [str(identifier) for identifier in order],
        "values": ["" if value is None else value for value in values],
    }


def export_to_toml(
    target: Hashable,
    order: Sequence[Hashable],
    values: Sequence[Any],
    output_path: Path | str,
) -> None:
    """Export a sort result to a TOML file.

    Args:
        target: The sorted target.
        order: Identifiers in resolution order.
        values: Payloads in resolution order.
        output_path: Path to the output TOML file.

    """
    toml_data = result_to_dict(target, order, values)

    output_path = Path(output_path)
    with output_path.open("wb") as f:
        tomli_w.dump(toml_data, f)

    logger.debug(f"Exported sort result to {output_path}")
