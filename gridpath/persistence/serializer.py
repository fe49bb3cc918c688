"""Helpers for serializing search results to JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Sequence

from ..core.node import Node
from ..search.trace import SearchTrace


def node_to_dict(node: Node) -> Dict[str, Any]:
    return {
        "x": node.x,
        "y": node.y,
        "past_cost": node.past_cost,
        "future_cost": node.future_cost,
    }


def path_to_dict(path: Sequence[Node]) -> Dict[str, Any]:
    """Return ``path`` as JSON-serialisable data."""

    return {
        "found": bool(path),
        "length": len(path),
        "cost": path[-1].past_cost if path else None,
        "nodes": [node_to_dict(n) for n in path],
    }


def result_to_dict(path: Sequence[Node], trace: SearchTrace | None = None) -> Dict[str, Any]:
    data = path_to_dict(path)
    if trace is not None:
        data["stats"] = trace.summary()
        if trace.record_events:
            data["events"] = [
                {k: list(v) if isinstance(v, tuple) else v for k, v in event.items()}
                for event in trace.events
            ]
    return data


def save_result(
    path: Sequence[Node], trace: SearchTrace | None, dest: str | Path
) -> None:
    """Write the search result to ``dest`` as indented JSON."""

    dest = Path(dest)
    if not dest.parent.exists():
        dest.parent.mkdir(parents=True, exist_ok=True)
    with dest.open("w", encoding="utf-8") as fh:
        json.dump(result_to_dict(path, trace), fh, indent=2)


__all__ = ["node_to_dict", "path_to_dict", "result_to_dict", "save_result"]
