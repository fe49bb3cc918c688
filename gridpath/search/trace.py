"""Structured tracing scoped to a single ``find_path`` call."""

from __future__ import annotations

import itertools
import logging
import time
from typing import Any, Dict, List, MutableMapping

from ..core.node import Node
from ..utils.observer import log_event, record_search

_search_ids = itertools.count(1)


class SearchLoggerAdapter(logging.LoggerAdapter):
    """Inject the owning search id into every log record."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["search_id"] = self.extra["search_id"]
        kwargs["extra"] = extra
        return f"[search {self.extra['search_id']}] {msg}", kwargs


class SearchTrace:
    """Counters, timing and optional event log for one search.

    A fresh trace is created by :class:`~gridpath.search.astar.AStarSearch`
    at the start of every call and is available afterwards as
    ``last_trace``.
    """

    def __init__(self, logger: logging.Logger, record_events: bool = False) -> None:
        self.search_id = next(_search_ids)
        self.log = SearchLoggerAdapter(logger, {"search_id": self.search_id})
        self.record_events = record_events
        self.events: List[Dict[str, Any]] = []
        self.expanded = 0
        self.discovered = 0
        self.relaxed = 0
        self.found: bool | None = None
        self.path_length = 0
        self.duration = 0.0
        self._started = time.perf_counter()

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------
    def expand(self, node: Node) -> None:
        self.expanded += 1
        self.log.debug(
            "expanding %s (g=%.3f, h=%.3f)", node.position, node.past_cost, node.future_cost
        )
        self._event("expand", node)

    def discover(self, node: Node, via: Node) -> None:
        self.discovered += 1
        self._event("discover", node, via=via.position)

    def relax(self, node: Node, via: Node, old_cost: float) -> None:
        self.relaxed += 1
        self.log.debug(
            "relaxed %s via %s: %.3f -> %.3f", node.position, via.position, old_cost, node.past_cost
        )
        self._event("relax", node, via=via.position, old_cost=old_cost)

    def neighbours(self, node: Node, adjacent: List[Node]) -> None:
        self.log.debug(
            "adjacent to %s: %s", node.position, [n.position for n in adjacent]
        )

    def finish(self, path: List[Node]) -> None:
        """Close the trace with the returned ``path`` (empty when unreachable)."""

        self.duration = time.perf_counter() - self._started
        self.found = bool(path)
        self.path_length = len(path)
        record_search(self.duration)
        if path:
            self._event("goal", path[-1], length=len(path))
            self.log.info(
                "path found: %d nodes, cost %.3f, %d expanded in %.2f ms",
                len(path),
                path[-1].past_cost,
                self.expanded,
                self.duration * 1000.0,
            )
        else:
            if self.record_events:
                log_event("exhausted", {"expanded": self.expanded}, self.events)
            self.log.info(
                "no path: open set exhausted after %d expansions", self.expanded
            )

    def summary(self) -> Dict[str, Any]:
        return {
            "search_id": self.search_id,
            "found": self.found,
            "path_length": self.path_length,
            "expanded": self.expanded,
            "discovered": self.discovered,
            "relaxed": self.relaxed,
            "duration_ms": round(self.duration * 1000.0, 3),
        }

    def _event(self, kind: str, node: Node, **data: Any) -> None:
        if not self.record_events:
            return
        payload: Dict[str, Any] = {
            "pos": node.position,
            "g": node.past_cost,
            "h": node.future_cost,
        }
        payload.update(data)
        log_event(kind, payload, self.events)


__all__ = ["SearchTrace", "SearchLoggerAdapter"]
