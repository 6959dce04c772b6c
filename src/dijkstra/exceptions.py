"""
Custom exceptions for the dijkstra module.

Provides a hierarchy of exceptions for clear error handling
and debugging of shortest-path operations.
"""


class DijkstraError(Exception):
    """Base exception for all dijkstra module errors."""

    pass


class PredecessorCycleError(DijkstraError):
    """Raised when walking the predecessor map revisits a vertex."""

    def __init__(self, vertex: object) -> None:
        self.vertex = vertex
        message = f"Predecessor chain loops back to {vertex!r}"
        super().__init__(message)
