"""
Command-line interface for hierflow.

Usage:
    hierflow ./flow-structure.json
    hierflow ./flow-structure.json -o ./build/ --format interchange
    hierflow ./hierarchy-flow.json -o ./build/ --format dot
    hierflow ./hierarchy-flow.json -o ./build/ --format snapshot
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from hierflow.core.errors import ImportValidationError
from hierflow.core.ir import FlowGraph
from hierflow.core.interchange import InterchangeCodec
from hierflow.core.levels import level_name
from hierflow.core.serialization import JsonSerializer
from hierflow.backend.graphviz import GraphvizExporter

logger = logging.getLogger("hierflow")

FORMATS = ["levels", "interchange", "children", "snapshot", "dot"]


def load_graph(filepath: Path) -> FlowGraph:
    """
    Load an interchange document or a graph snapshot and resolve its levels.

    Interchange documents are recognised by their ``structures`` key,
    snapshots by ``nodes``.
    """
    try:
        data = json.loads(filepath.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ImportValidationError(f"Invalid JSON in {filepath}: {e}") from e
    except UnicodeDecodeError as e:
        raise ImportValidationError(f"{filepath} is not UTF-8 text: {e}") from e

    if isinstance(data, dict) and "structures" in data:
        graph = InterchangeCodec.from_dict(data)
        graph.name = filepath.stem
    elif isinstance(data, dict) and "nodes" in data:
        graph = JsonSerializer.from_dict(data)
    else:
        raise ImportValidationError(f"{filepath} is neither an interchange document nor a snapshot")

    graph.recalculate_levels()
    return graph


def format_levels(graph: FlowGraph) -> str:
    """Plain-text table of node levels, shallowest first."""
    rows = sorted(graph.nodes.values(), key=lambda n: n.data.level)
    lines = [f"{graph.name}: {len(graph.nodes)} nodes, {len(graph.edges)} edges"]
    for node in rows:
        lines.append(f"  [{node.data.level}] {level_name(node.data.level):<10} {node.data.label} ({node.id})")
    return "\n".join(lines)


def export_graph(graph: FlowGraph, output_path: Path, format: str) -> Path:
    """Export a graph to the specified format."""

    if format == "interchange":
        content = InterchangeCodec.to_json(graph)
        ext = ".structure.json"
    elif format == "children":
        content = InterchangeCodec.to_json(graph, shape="children")
        ext = ".structure.json"
    elif format == "snapshot":
        content = JsonSerializer.to_json(graph)
        ext = ".json"
    elif format == "dot":
        content = GraphvizExporter.to_dot(graph)
        ext = ".dot"
    else:
        raise ValueError(f"Unknown format: {format}. Use: {', '.join(FORMATS[1:])}")

    # Sanitize the graph name for use as filename
    safe_name = graph.name.lower().replace(" ", "_").replace("/", "_")
    safe_name = "".join(c for c in safe_name if c.isalnum() or c in "_-") or "hierarchy"

    output_file = output_path / f"{safe_name}{ext}"
    output_file.write_text(content, encoding="utf-8")

    return output_file


def main(argv: List[str] = None) -> int:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="hierflow",
        description="Resolve hierarchy levels and convert hierarchy flow documents.",
        epilog="Example: hierflow ./flow-structure.json -o ./build/ -f dot"
    )

    parser.add_argument(
        "input",
        type=Path,
        help="Interchange document or graph snapshot (JSON)"
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=Path("."),
        help="Output directory (default: current directory)"
    )

    parser.add_argument(
        "-f", "--format",
        choices=FORMATS,
        default="levels",
        help="Output format (default: levels, printed to stdout)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Validate input file
    if not args.input.exists():
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        return 1

    if not args.input.is_file():
        print(f"Error: Not a file: {args.input}", file=sys.stderr)
        return 1

    try:
        graph = load_graph(args.input)
    except (ImportValidationError, OSError) as e:
        print(f"Error loading file: {e}", file=sys.stderr)
        return 1

    if args.format == "levels":
        print(format_levels(graph))
        return 0

    args.output.mkdir(parents=True, exist_ok=True)

    try:
        output_file = export_graph(graph, args.output, args.format)
    except (ValueError, OSError) as e:
        print(f"Error exporting {graph.name}: {e}", file=sys.stderr)
        return 1

    logger.info("Exported '%s' -> %s", graph.name, output_file)
    print(f"{output_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
