"""Random acyclic topology grown by rejection sampling.

Starting from the single edge ``(0, 1)``, the builder repeatedly anchors a
new edge on an endpoint of a random existing edge and points it at a random
vertex in ``[0, num_edges]``. Candidates that duplicate an edge or fail the
cycle check are discarded. The cycle check re-walks the whole edge list after
every tentative insertion, which is quadratic in the edge count and intended
for fixtures of a few hundred edges.

The number of rejected draws is unbounded in the worst case. Callers that
need bounded latency pass ``max_attempts``.
"""

from __future__ import annotations

from dataclasses import dataclass

from commgraph.indexing import Edge, check_vertex_capacity
from commgraph.log_config import get_logger
from commgraph.rng import RandomSource, SeededRandom

logger = get_logger(__name__)


def contains_cycle(edges: list[Edge]) -> bool:
    """Return True if a walk over ``edges`` revisits an edge.

    Traversal state is kept per edge, not per vertex: from each edge not yet
    visited, a depth-first walk follows every edge whose tail equals the
    current head. Meeting an edge that is already in the visited set reports
    a cycle; edges are marked visited when popped.

    The check never misses a real cycle. It also rejects some acyclic
    shapes where two walks reconverge on the same edge, which keeps the
    generated graphs close to trees.

    Args:
        edges: Directed ``(tail, head)`` pairs.

    Returns:
        True when a cycle is reported.
    """
    successors: dict[int, list[Edge]] = {}
    for edge in edges:
        successors.setdefault(edge[0], []).append(edge)

    visited: set[Edge] = set()
    for start in edges:
        if start in visited:
            continue
        frontier = [start]
        while frontier:
            edge = frontier.pop()
            for successor in successors.get(edge[1], ()):
                if successor in visited:
                    return True
                frontier.append(successor)
            visited.add(edge)

    return False


@dataclass(frozen=True)
class RandomAcyclicBuilder:
    """Configuration of a random acyclic edge set.

    Attributes:
        num_edges: Exact number of edges to produce (at least one).
        rng: Random source to draw from. When omitted, every ``build`` call
            creates its own ``SeededRandom(seed)``.
        seed: Seed for the per-call random source; ignored when ``rng`` is
            given.
        max_attempts: Optional cap on rejected draws before giving up.
    """

    num_edges: int
    rng: RandomSource | None = None
    seed: int | None = None
    max_attempts: int | None = None

    def __post_init__(self) -> None:
        if self.num_edges < 1:
            raise ValueError(
                f"num_edges must be at least 1 to seed the graph with (0, 1), "
                f"got {self.num_edges}"
            )
        if self.max_attempts is not None and self.max_attempts < 0:
            raise ValueError(
                f"max_attempts must be non-negative, got {self.max_attempts}"
            )
        check_vertex_capacity(self.num_edges, "Random acyclic topology")

    def build(self) -> list[Edge]:
        """Return ``num_edges`` unique edges forming an acyclic graph.

        Raises:
            RuntimeError: If ``max_attempts`` rejected draws occur before the
                edge set is complete.
        """
        rng = self.rng if self.rng is not None else SeededRandom(self.seed)
        bound = self.num_edges + 1

        edges: list[Edge] = [(0, 1)]
        present: set[Edge] = {(0, 1)}
        rejected = 0

        while len(edges) < self.num_edges:
            current = edges[rng.next_in_range(len(edges))]
            anchor = current[rng.next_in_range(2)]
            candidate = rng.next_in_range(bound)
            while candidate == anchor:
                candidate = rng.next_in_range(bound)

            edge = (anchor, candidate)
            accepted = False
            if edge not in present:
                edges.append(edge)
                if contains_cycle(edges):
                    edges.pop()
                else:
                    present.add(edge)
                    accepted = True

            if not accepted:
                rejected += 1
                if self.max_attempts is not None and rejected > self.max_attempts:
                    raise RuntimeError(
                        f"Gave up after {rejected:,} rejected draws with "
                        f"{len(edges):,} of {self.num_edges:,} edges placed"
                    )

        logger.debug(
            f"Random acyclic topology: {self.num_edges:,} edges, "
            f"{rejected:,} rejected draws"
        )
        return edges
