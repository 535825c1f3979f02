"""Vertex indexing shared by the structured topology builders.

Maps layer positions and grid coordinates to dense integer vertex IDs.
All functions are pure; builders call them with their own sizing parameters.

Cube cells are flattened depth-fastest, then width, then height:
``flatten(x, y, z) = y * (width * depth) + x * depth + z`` where ``x`` runs
along width, ``y`` along height and ``z`` along depth.
"""

from __future__ import annotations

from typing import Iterator

# Largest vertex ID that may appear in an emitted edge (unsigned 32-bit).
MAX_VERTEX_ID = 2**32 - 1

Edge = tuple[int, int]


def create_layers(nodes_per_layer: int, n_layers: int) -> list[range]:
    """Return the contiguous ID range of every layer.

    Args:
        nodes_per_layer: Vertices per layer (``inside + outside``).
        n_layers: Number of layers.

    Returns:
        One ``range`` per layer; layer ``i`` covers
        ``[i * nodes_per_layer, (i + 1) * nodes_per_layer)``.
    """
    return [
        range(i * nodes_per_layer, (i + 1) * nodes_per_layer) for i in range(n_layers)
    ]


def neighbor_positions(position: int, size: int) -> list[int]:
    """Positions left of, at, and right of ``position`` that exist in a layer.

    Stepping left from position 0 yields -1, which falls outside ``[0, size)``
    and is dropped like the right neighbour of the last position.
    """
    candidates = (position - 1, position, position + 1)
    return [p for p in candidates if 0 <= p < size]


def flatten_cell(x: int, y: int, z: int, width: int, depth: int) -> int:
    """Offset of cell ``(x, y, z)`` inside one snapshot."""
    return y * (width * depth) + x * depth + z


def cell_id(
    x: int, y: int, z: int, t: int, width: int, height: int, depth: int
) -> int:
    """Vertex ID of cell ``(x, y, z)`` at timestep ``t``."""
    return t * (width * height * depth) + flatten_cell(x, y, z, width, depth)


def iter_cells(width: int, height: int, depth: int) -> Iterator[tuple[int, int, int]]:
    """Yield ``(x, y, z)`` for every cell in ascending flattened order."""
    for y in range(height):
        for x in range(width):
            for z in range(depth):
                yield x, y, z


def in_grid(x: int, y: int, z: int, width: int, height: int, depth: int) -> bool:
    """Return True when every coordinate lies within its axis."""
    return 0 <= x < width and 0 <= y < height and 0 <= z < depth


def is_outer_cell(
    x: int, y: int, z: int, width: int, height: int, depth: int
) -> bool:
    """Return True when the cell lies on any of the six cube faces.

    Face membership is exact: a coordinate equal to 0 or to its
    dimension minus one.
    """
    return (
        x == 0
        or x == width - 1
        or y == 0
        or y == height - 1
        or z == 0
        or z == depth - 1
    )


def check_vertex_capacity(max_vertex: int, what: str) -> None:
    """Raise ValueError when ``max_vertex`` does not fit in 32 bits.

    Args:
        max_vertex: Largest vertex ID the caller is about to emit.
        what: Short description of the topology for the error message.

    Raises:
        ValueError: If ``max_vertex`` exceeds ``MAX_VERTEX_ID``.
    """
    if max_vertex > MAX_VERTEX_ID:
        raise ValueError(
            f"{what} needs vertex ID {max_vertex:,}, above the 32-bit limit "
            f"{MAX_VERTEX_ID:,}"
        )


def require_non_negative(**params: int) -> None:
    """Raise ValueError if any named sizing parameter is negative."""
    for name, value in params.items():
        if value < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")
