from typing import Callable, Dict, Hashable, List, Optional, TypeVar

from .exceptions import PredecessorCycleError

V = TypeVar("V", bound=Hashable)
E = TypeVar("E")


def reconstruct_path(
    predecessors: Dict[V, E],
    source: V,
    target: V,
    tail: Callable[[E], Optional[V]],
) -> List[E]:
    """
    Reconstruct the ordered edge path from a predecessor map.

    Walks backwards from target, following the edge that reached each vertex
    and resolving that edge's origin with `tail`, until a vertex without a
    predecessor is found.

    Returns:
        Edges from source to target in travel order. Empty if target was
        never reached, and also when source == target (no edge is needed).

    Raises:
        PredecessorCycleError: If the predecessor chain is not a tree.
    """
    if target not in predecessors and source != target:
        return []

    path: List[E] = []
    seen = set()
    current: Optional[V] = target

    while current is not None and current in predecessors:
        if current in seen:
            raise PredecessorCycleError(current)
        seen.add(current)

        edge = predecessors[current]
        path.append(edge)
        current = tail(edge)

    path.reverse()
    return path
