"""Layered lattice topology with per-boundary communication hubs.

Every vertex of layer ``i`` links to its left, straight and right neighbours
in layer ``i + 1``. The last ``outside`` positions of each layer additionally
route traffic to the next layer through one hub vertex per boundary. Hub IDs
start after the last structural vertex and grow by one per boundary.
"""

from __future__ import annotations

from dataclasses import dataclass

from commgraph.indexing import (
    Edge,
    check_vertex_capacity,
    create_layers,
    neighbor_positions,
    require_non_negative,
)
from commgraph.log_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LayeredTopologyBuilder:
    """Configuration of a layered lattice.

    Attributes:
        inside: Vertices per layer that only take lattice edges.
        outside: Vertices per layer (the last positions) that also talk
            through the boundary hub.
        n_layers: Number of layers.
    """

    inside: int
    outside: int
    n_layers: int

    def __post_init__(self) -> None:
        require_non_negative(
            inside=self.inside, outside=self.outside, n_layers=self.n_layers
        )

    @property
    def nodes_per_layer(self) -> int:
        return self.inside + self.outside

    def build(self) -> list[Edge]:
        """Return the edge list of the lattice.

        Returns:
            Lattice edges in boundary order followed, when ``outside > 0``,
            by the hub edges. Empty when there are fewer than two layers or
            no vertices per layer.
        """
        width = self.nodes_per_layer
        if self.n_layers <= 1 or width == 0:
            logger.debug(
                f"Layered topology {self.inside}+{self.outside}x{self.n_layers} "
                "is degenerate; no edges"
            )
            return []

        hub_count = self.n_layers - 1 if self.outside else 0
        check_vertex_capacity(
            width * self.n_layers + hub_count - 1, "Layered topology"
        )

        layers = create_layers(width, self.n_layers)
        edges: list[Edge] = []

        for upper, lower in zip(layers, layers[1:]):
            for position in range(width):
                vertex = upper[position]
                for neighbor in neighbor_positions(position, width):
                    edges.append((vertex, lower[neighbor]))

        if self.outside == 0:
            logger.info(f"Layered topology: {len(edges):,} edges, no hubs")
            return edges

        hub = width * self.n_layers
        for upper, lower in zip(layers, layers[1:]):
            for vertex_upper, vertex_lower in zip(
                upper[self.inside :], lower[self.inside :]
            ):
                edges.append((vertex_upper, hub))
                edges.append((hub, vertex_lower))
            hub += 1

        logger.info(
            f"Layered topology: {len(edges):,} edges, {hub_count} hub vertices"
        )
        return edges
