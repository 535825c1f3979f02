"""Synthetic communication topologies for benchmarking.

Builds layered lattices, spatiotemporal grids and random acyclic graphs as
plain directed edge lists over a dense integer vertex space.
"""

from .cube import CubeTopologyBuilder
from .edge_io import read_edge_lines, to_digraph, write_debug, write_edge_lines
from .layered import LayeredTopologyBuilder
from .random_dag import RandomAcyclicBuilder, contains_cycle
from .rng import RandomSource, SeededRandom

__version__ = "0.1.0"

__all__ = [
    "CubeTopologyBuilder",
    "LayeredTopologyBuilder",
    "RandomAcyclicBuilder",
    "RandomSource",
    "SeededRandom",
    "contains_cycle",
    "read_edge_lines",
    "to_digraph",
    "write_debug",
    "write_edge_lines",
]
