"""Entry point for ``python -m commgraph``."""

from commgraph.cli import main

main()
