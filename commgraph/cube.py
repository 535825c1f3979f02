"""Spatiotemporal 3D grid topology.

A ``width x height x depth`` grid is replicated for every timestep. Each cell
links to every cell of its 27-offset neighbourhood (itself included) in the
following snapshot, clipped at the grid faces. Cells on a face also send
traffic through one hub vertex per snapshot boundary.

Vertex layout: snapshot ``t`` occupies
``[t * cells, (t + 1) * cells)`` with ``cells = width * height * depth``;
hub vertices follow all snapshots, ``cells * timesteps + t`` for the
boundary between ``t`` and ``t + 1``.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass

from commgraph.indexing import (
    Edge,
    cell_id,
    check_vertex_capacity,
    in_grid,
    is_outer_cell,
    iter_cells,
    require_non_negative,
)
from commgraph.log_config import get_logger

logger = get_logger(__name__)

MIN_DIMENSION = 3

NEIGHBOR_OFFSETS: tuple[tuple[int, int, int], ...] = tuple(
    itertools.product((-1, 0, 1), repeat=3)
)


@dataclass(frozen=True)
class CubeTopologyBuilder:
    """Configuration of a grid replicated over timesteps.

    Attributes:
        width: Cells along x.
        height: Cells along y.
        depth: Cells along z.
        timesteps: Number of snapshots.
    """

    width: int
    height: int
    depth: int
    timesteps: int

    def __post_init__(self) -> None:
        require_non_negative(
            width=self.width,
            height=self.height,
            depth=self.depth,
            timesteps=self.timesteps,
        )

    @property
    def cells_per_snapshot(self) -> int:
        return self.width * self.height * self.depth

    def hub_id(self, t: int) -> int:
        """Hub vertex for the boundary between timestep ``t`` and ``t + 1``."""
        return self.cells_per_snapshot * self.timesteps + t

    def cell_id(self, x: int, y: int, z: int, t: int) -> int:
        return cell_id(x, y, z, t, self.width, self.height, self.depth)

    def build(self) -> list[Edge]:
        """Return the deduplicated edge list of the grid over time.

        Returns:
            Edges from every snapshot to the next one, plus hub edges for
            outer cells. Empty when any dimension is below three.
        """
        dims = (self.width, self.height, self.depth)
        if min(dims) < MIN_DIMENSION:
            logger.debug(
                f"Cube {self.width}x{self.height}x{self.depth} is below "
                f"{MIN_DIMENSION} on some axis; no edges"
            )
            return []
        if self.timesteps > 1:
            check_vertex_capacity(self.hub_id(self.timesteps - 2), "Cube topology")

        edges: list[Edge] = []
        for t in range(self.timesteps - 1):
            hub = self.hub_id(t)
            for x, y, z in iter_cells(*dims):
                vertex = self.cell_id(x, y, z, t)
                for dx, dy, dz in NEIGHBOR_OFFSETS:
                    cx, cy, cz = x + dx, y + dy, z + dz
                    if in_grid(cx, cy, cz, *dims):
                        edges.append((vertex, self.cell_id(cx, cy, cz, t + 1)))
                if is_outer_cell(x, y, z, *dims):
                    edges.append((vertex, hub))
                    edges.append((hub, self.cell_id(x, y, z, t + 1)))

        unique = list(dict.fromkeys(edges))
        logger.info(
            f"Cube topology {self.width}x{self.height}x{self.depth} over "
            f"{self.timesteps} timesteps: {len(unique):,} edges "
            f"({len(edges) - len(unique)} duplicates dropped)"
        )
        return unique
