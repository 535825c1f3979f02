"""Command line interface for topology fixture generation."""

from __future__ import annotations

import argparse
import sys
import time
from contextlib import contextmanager
from pathlib import Path

from commgraph.config import GeneratorConfig
from commgraph.edge_io import FORMATS, write_edges
from commgraph.indexing import Edge
from commgraph.log_config import get_logger

logger = get_logger(__name__)


@contextmanager
def Timer(description: str):
    """Context manager for timing operations with both print and log output.

    Timing lines go to stderr so that edges written to stdout stay clean.

    Args:
        description: Operation description for timing messages.

    Yields:
        None: Context manager yields nothing.
    """
    print(f"🔄 {description}...", file=sys.stderr)
    logger.info(f"Starting {description}")
    start = time.time()
    try:
        yield
        elapsed = time.time() - start
        print(f"✅ {description} (completed in {elapsed:.1f}s)", file=sys.stderr)
        logger.info(f"Completed {description} in {elapsed:.1f}s")
    except Exception as e:
        elapsed = time.time() - start
        print(f"❌ {description} (failed after {elapsed:.1f}s)", file=sys.stderr)
        logger.error(f"Failed {description} after {elapsed:.1f}s: {e}")
        raise


def _load_config(config_path: Path) -> GeneratorConfig:
    """Load and validate configuration.

    Args:
        config_path: Path to YAML configuration file.

    Returns:
        Loaded and validated configuration object.

    Raises:
        SystemExit: If configuration loading or validation fails.
    """
    try:
        config = GeneratorConfig.from_yaml(config_path)
        logger.info(f"Loaded configuration from {config_path}")
        return config
    except FileNotFoundError:
        print(f"❌ Configuration file not found: {config_path}")
        logger.error(f"Configuration file not found: {config_path}")
        sys.exit(2)  # Config problem
    except Exception as e:
        logger.error(f"Failed to load config: {e}")
        print(f"❌ Configuration error: {e}")
        print(f"💡 Check YAML syntax in: {config_path}")
        sys.exit(2)  # Config problem


def _emit(edges: list[Edge], output: str | None, fmt: str) -> None:
    """Write edges to ``output`` or, when it is None, to stdout."""
    if output is None:
        write_edges(sys.stdout, edges, fmt)
        if fmt == "debug":
            sys.stdout.write("\n")
        return
    write_edges(Path(output), edges, fmt)
    print(f"🎉 Wrote {len(edges):,} edges to {output}", file=sys.stderr)


def _run_single(name: str, builder, args: argparse.Namespace) -> None:
    """Build one topology and write it, mapping failures to exit codes."""
    try:
        with Timer(f"Build {name} topology"):
            edges = builder.build()
        _emit(edges, args.output, args.format)
    except OSError as e:
        logger.error(f"Cannot write edges: {e}")
        print(f"❌ Cannot write edges: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(3)
    except Exception as e:
        logger.error(f"Build failed: {e}")
        print("💡 Use -v for detailed error information", file=sys.stderr)
        sys.exit(1)


def _make_builder(factory, *params, **kwargs):
    """Instantiate a builder, exiting with code 3 on invalid parameters."""
    try:
        return factory(*params, **kwargs)
    except ValueError as e:
        logger.error(f"Invalid parameters: {e}")
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(3)


def layered_command(args: argparse.Namespace) -> None:
    """Build a layered lattice topology.

    Args:
        args: Parsed arguments with inside, outside, layers, output, format.
    """
    from commgraph.layered import LayeredTopologyBuilder

    builder = _make_builder(
        LayeredTopologyBuilder, args.inside, args.outside, args.layers
    )
    _run_single("layered", builder, args)


def cube_command(args: argparse.Namespace) -> None:
    """Build a spatiotemporal grid topology.

    Args:
        args: Parsed arguments with grid dimensions, timesteps, output, format.
    """
    from commgraph.cube import CubeTopologyBuilder

    builder = _make_builder(
        CubeTopologyBuilder, args.width, args.height, args.depth, args.timesteps
    )
    _run_single("cube", builder, args)


def random_command(args: argparse.Namespace) -> None:
    """Build a random acyclic topology.

    Args:
        args: Parsed arguments with edges, seed, max_attempts, output, format.
    """
    from commgraph.random_dag import RandomAcyclicBuilder

    builder = _make_builder(
        RandomAcyclicBuilder,
        args.edges,
        seed=args.seed,
        max_attempts=args.max_attempts,
    )
    _run_single("random", builder, args)


def build_command(args: argparse.Namespace) -> None:
    """Build every fixture named in a configuration file.

    Each fixture is written to ``<output.directory>/<name>.txt``.

    Args:
        args: Parsed command line arguments containing the config path.
    """
    config_path = Path(args.config)
    config_obj = _load_config(config_path)
    output_dir = config_obj.output.directory
    if getattr(args, "output", None):
        output_dir = Path(args.output)

    try:
        for name, builder in config_obj.builders().items():
            with Timer(f"Build {name} topology"):
                edges = builder.build()
            target = output_dir / f"{name}.txt"
            write_edges(target, edges, config_obj.output.format)
            print(f"📄 {name}: {len(edges):,} edges -> {target}")
        print("🎉 SUCCESS! All fixtures generated")
    except OSError as e:
        logger.error(f"Cannot write fixture: {e}")
        print(f"❌ Cannot write fixture: {e}")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        print("💡 Check sizing parameters in the configuration")
        sys.exit(3)  # Validation failure
    except Exception as e:
        logger.error(f"Build failed: {e}")
        print("💡 Use -v for detailed error information")
        sys.exit(1)  # Runtime error


def info_command(args: argparse.Namespace) -> None:
    """Show configuration information.

    Args:
        args: Parsed command line arguments containing config file path.
    """
    config_obj = _load_config(Path(args.config))
    print(config_obj.summary())


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file. Defaults to stdout.",
    )
    parser.add_argument(
        "--format",
        choices=FORMATS,
        default="lines",
        help="Edge format: 'tail -> head' lines or a single debug dump",
    )


def main() -> None:
    """Parse command line arguments and execute the appropriate subcommand.

    Configures logging, parses CLI arguments, and dispatches to the correct
    command function.
    """
    parser = argparse.ArgumentParser(
        prog="commgraph",
        description="Generate synthetic directed topologies as edge-list fixtures.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global options
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress console output (logs only)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    layered_parser = subparsers.add_parser(
        "layered", help="Layered lattice with per-boundary hubs"
    )
    layered_parser.add_argument("inside", type=int, help="Inner vertices per layer")
    layered_parser.add_argument(
        "outside", type=int, help="Boundary vertices per layer (routed via hubs)"
    )
    layered_parser.add_argument("layers", type=int, help="Number of layers")
    _add_output_args(layered_parser)
    layered_parser.set_defaults(func=layered_command)

    cube_parser = subparsers.add_parser(
        "cube", help="3D grid replicated over timesteps"
    )
    cube_parser.add_argument("width", type=int)
    cube_parser.add_argument("height", type=int)
    cube_parser.add_argument("depth", type=int)
    cube_parser.add_argument("timesteps", type=int)
    _add_output_args(cube_parser)
    cube_parser.set_defaults(func=cube_command)

    random_parser = subparsers.add_parser("random", help="Random acyclic graph")
    random_parser.add_argument("edges", type=int, help="Number of edges")
    random_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for reproducible output"
    )
    random_parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Give up after this many rejected draws",
    )
    _add_output_args(random_parser)
    random_parser.set_defaults(func=random_command)

    build_parser = subparsers.add_parser(
        "build", help="Build every fixture listed in a configuration file"
    )
    build_parser.add_argument(
        "config",
        nargs="?",
        default="config.yml",
        help="Configuration file path (default: config.yml)",
    )
    build_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output directory. Overrides 'output.directory' from the config.",
    )
    build_parser.set_defaults(func=build_command)

    info_parser = subparsers.add_parser("info", help="Show configuration summary")
    info_parser.add_argument(
        "config",
        nargs="?",
        default="config.yml",
        help="Configuration file path (default: config.yml)",
    )
    info_parser.set_defaults(func=info_command)

    args = parser.parse_args()

    import logging

    from commgraph.log_config import set_global_log_level

    if args.verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    set_global_log_level(log_level)

    # Suppress print output if --quiet is set
    if args.quiet:
        import builtins

        builtins.print = lambda *args, **kwargs: None

    if not hasattr(args, "func") or args.func is None:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
