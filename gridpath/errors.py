"""Exception types raised by the path-finding core."""

from __future__ import annotations


class PathfindingError(Exception):
    """Base error for path-finding failures."""


class InvalidCoordinateError(PathfindingError, ValueError):
    """Raised when a start or goal coordinate is rejected by the grid."""

    def __init__(self, x: int, y: int, role: str = "path") -> None:
        self.x = x
        self.y = y
        self.role = role
        super().__init__(f"Invalid {role} coordinates ({x}, {y})")


class UndefinedCapabilityError(PathfindingError):
    """Raised when a node or grid is missing a required property."""


class PathReconstructionError(PathfindingError, RuntimeError):
    """Raised when back-pointers do not lead back to the start node."""


__all__ = [
    "PathfindingError",
    "InvalidCoordinateError",
    "UndefinedCapabilityError",
    "PathReconstructionError",
]
