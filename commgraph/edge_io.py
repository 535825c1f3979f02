"""Plain-text serialization of edge lists.

Two formats are supported:

- debug: the whole list as one ``repr`` dump, e.g. ``[(0, 1), (0, 2)]``;
- lines: one ``tail -> head`` line per edge.

Destinations are file paths or already open text streams. I/O errors
propagate unchanged.
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterable, Iterator

import networkx as nx

from commgraph.indexing import Edge
from commgraph.log_config import get_logger

logger = get_logger(__name__)

FORMATS = ("lines", "debug")

_LINE_RE = re.compile(r"^\s*(\d+)\s*->\s*(\d+)\s*$")


@contextmanager
def _open_text(target: str | Path | IO[str], mode: str) -> Iterator[IO[str]]:
    """Yield a text stream for a path or pass an open stream through."""
    if isinstance(target, (str, Path)):
        path = Path(target)
        if "w" in mode:
            path.parent.mkdir(parents=True, exist_ok=True)
        with path.open(mode) as f:
            yield f
    else:
        yield target


def format_debug(edges: Iterable[Edge]) -> str:
    """Return the debug dump of ``edges``."""
    return repr([(int(u), int(v)) for u, v in edges])


def format_edge_lines(edges: Iterable[Edge]) -> str:
    """Return ``edges`` as ``tail -> head`` lines."""
    return "".join(f"{u} -> {v}\n" for u, v in edges)


def write_debug(dest: str | Path | IO[str], edges: list[Edge]) -> None:
    """Write the whole edge list as a single debug dump.

    Args:
        dest: Output path or text stream.
        edges: Edges to write.
    """
    with _open_text(dest, "w") as f:
        f.write(format_debug(edges))
    logger.debug(f"Wrote debug dump of {len(edges):,} edges to {dest}")


def write_edge_lines(dest: str | Path | IO[str], edges: list[Edge]) -> None:
    """Write one ``tail -> head`` line per edge.

    Args:
        dest: Output path or text stream.
        edges: Edges to write.
    """
    with _open_text(dest, "w") as f:
        f.write(format_edge_lines(edges))
    logger.debug(f"Wrote {len(edges):,} edge lines to {dest}")


def write_edges(dest: str | Path | IO[str], edges: list[Edge], fmt: str) -> None:
    """Write ``edges`` in the named format (``lines`` or ``debug``).

    Raises:
        ValueError: If ``fmt`` is not a known format.
    """
    if fmt == "lines":
        write_edge_lines(dest, edges)
    elif fmt == "debug":
        write_debug(dest, edges)
    else:
        raise ValueError(f"Unknown edge format '{fmt}'; expected one of {FORMATS}")


def read_edge_lines(src: str | Path | IO[str]) -> list[Edge]:
    """Parse the ``tail -> head`` line format.

    Blank lines and lines starting with ``#`` are skipped.

    Raises:
        ValueError: If a line is not of the form ``<int> -> <int>``.
    """
    edges: list[Edge] = []
    with _open_text(src, "r") as f:
        for lineno, line in enumerate(f, start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            match = _LINE_RE.match(stripped)
            if match is None:
                raise ValueError(f"Line {lineno}: expected 'tail -> head', got {line!r}")
            edges.append((int(match.group(1)), int(match.group(2))))
    return edges


def to_digraph(edges: Iterable[Edge]) -> nx.DiGraph:
    """Return a ``networkx.DiGraph`` holding ``edges``.

    Vertices appear only through their edges; isolated IDs of the dense
    vertex space are not added.
    """
    graph = nx.DiGraph()
    graph.add_edges_from(edges)
    return graph
