"""Tests for vertex indexing helpers."""

import pytest

from commgraph.indexing import (
    MAX_VERTEX_ID,
    cell_id,
    check_vertex_capacity,
    create_layers,
    flatten_cell,
    in_grid,
    is_outer_cell,
    iter_cells,
    neighbor_positions,
)


def test_create_layers():
    actual = [list(layer) for layer in create_layers(7, 3)]
    expected = [
        [0, 1, 2, 3, 4, 5, 6],
        [7, 8, 9, 10, 11, 12, 13],
        [14, 15, 16, 17, 18, 19, 20],
    ]
    assert actual == expected


def test_create_layers_empty():
    assert create_layers(5, 0) == []
    assert [list(layer) for layer in create_layers(0, 2)] == [[], []]


@pytest.mark.parametrize(
    "position,size,expected",
    [
        (0, 3, [0, 1]),
        (1, 3, [0, 1, 2]),
        (2, 3, [1, 2]),
        (0, 1, [0]),
    ],
)
def test_neighbor_positions(position, size, expected):
    assert neighbor_positions(position, size) == expected


def test_iter_cells_matches_flattened_order():
    width, height, depth = 3, 4, 2
    ids = [flatten_cell(x, y, z, width, depth) for x, y, z in iter_cells(width, height, depth)]
    assert ids == list(range(width * height * depth))


def test_cell_id_offsets_by_snapshot():
    assert cell_id(0, 0, 0, 2, 3, 3, 3) == 54
    assert cell_id(2, 2, 2, 0, 3, 3, 3) == 26


def test_in_grid_clips_both_ends():
    assert in_grid(0, 0, 0, 3, 3, 3)
    assert not in_grid(-1, 0, 0, 3, 3, 3)
    assert not in_grid(0, 3, 0, 3, 3, 3)
    assert not in_grid(0, 0, 3, 3, 3, 3)


def test_outer_cell_uses_exact_face_membership():
    assert is_outer_cell(0, 2, 2, 5, 5, 5)
    assert is_outer_cell(2, 4, 2, 5, 5, 5)
    assert is_outer_cell(2, 2, 4, 5, 5, 5)
    assert not is_outer_cell(1, 2, 3, 5, 5, 5)
    assert not is_outer_cell(3, 3, 3, 5, 5, 5)


def test_vertex_capacity():
    check_vertex_capacity(MAX_VERTEX_ID, "test")
    with pytest.raises(ValueError, match="32-bit"):
        check_vertex_capacity(MAX_VERTEX_ID + 1, "test")
