"""
Single-criterion Dijkstra over a lazily expanded weighted graph.

The graph is never materialised: outgoing edges are requested per vertex
through callables, so the same routine serves the route graph (one edge
per airport pair) and the flight multigraph (many parallel edges per pair).

Performance notes:
- Binary heap frontier with lazy deletion of stale entries
- Monotonic insertion counter as heap tiebreaker (vertices need no ordering)
- Early exit as soon as the target is settled
- Each vertex is settled at most once, so negative weights are relaxed
  like any other and the search still terminates
"""

import heapq
import itertools
from typing import (
    Callable,
    Dict,
    Hashable,
    Iterable,
    List,
    Optional,
    Set,
    Tuple,
    TypeVar,
)

V = TypeVar("V", bound=Hashable)
E = TypeVar("E")

INFINITY = float("inf")


def cheapest_parallel_edges(
    edges: Iterable[E],
    destination_of: Callable[[E], Hashable],
    weight: Callable[[E], Optional[float]],
) -> List[E]:
    """
    Reduce parallel edges to the cheapest one per destination.

    Edges without a weight are dropped. Among edges sharing a destination
    the first one with the minimum weight wins, and the result keeps the
    order in which each destination was first seen.

    Args:
        edges: Outgoing edges of a single vertex.
        destination_of: Key identifying the edge's head.
        weight: Weight extraction; None marks an unusable edge.

    Returns:
        One edge per reachable destination.

    Example:
        >>> edges = [("A", "B", 120), ("A", "B", 90), ("A", "C", 40)]
        >>> cheapest_parallel_edges(edges, lambda e: e[1], lambda e: e[2])
        [('A', 'B', 90), ('A', 'C', 40)]
    """
    best: Dict[Hashable, Tuple[float, E]] = {}

    for edge in edges:
        w = weight(edge)
        if w is None:
            continue
        key = destination_of(edge)
        current = best.get(key)
        if current is None or w < current[0]:
            best[key] = (w, edge)

    return [edge for _, edge in best.values()]


def shortest_path_tree(
    source: V,
    target: V,
    vertices: Iterable[V],
    out_edges: Callable[[V], Iterable[E]],
    head: Callable[[E], Optional[V]],
    weight: Callable[[E], Optional[float]],
    select_edges: Optional[Callable[[Iterable[E]], Iterable[E]]] = None,
) -> Dict[V, E]:
    """
    Run Dijkstra from source until target is settled or the frontier empties.

    Args:
        source: Start vertex.
        target: Vertex whose settlement ends the search early.
        vertices: Known vertices, all seeded with an infinite distance.
        out_edges: Returns the edges leaving a vertex (may hit a data store).
        head: Resolves an edge's destination vertex; None skips the edge.
        weight: Edge weight; None skips the edge.
        select_edges: Optional reduction applied to a vertex's edges before
            relaxation (e.g. keep the cheapest of several parallel edges).

    Returns:
        Predecessor map from each reached vertex to the edge that reached it
        on the best known path. The source never has a predecessor, and
        the map never contains a cycle.
    """
    distances: Dict[V, float] = {vertex: INFINITY for vertex in vertices}
    distances[source] = 0.0
    predecessors: Dict[V, E] = {}
    settled: Set[V] = set()

    counter = itertools.count()
    frontier: List[Tuple[float, int, V]] = [(0.0, next(counter), source)]

    while frontier:
        dist, _, current = heapq.heappop(frontier)

        # Stale entry: the vertex was already settled through a shorter push
        if current in settled:
            continue
        settled.add(current)

        if current == target:
            break

        edges = out_edges(current)
        if select_edges is not None:
            edges = select_edges(edges)

        for edge in edges:
            neighbor = head(edge)
            if neighbor is None or neighbor in settled:
                continue

            w = weight(edge)
            if w is None:
                continue

            candidate = dist + w
            if candidate < distances.get(neighbor, INFINITY):
                distances[neighbor] = candidate
                predecessors[neighbor] = edge
                heapq.heappush(frontier, (candidate, next(counter), neighbor))

    return predecessors
