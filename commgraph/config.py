"""Configuration management for fixture generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from commgraph.cube import CubeTopologyBuilder
from commgraph.edge_io import FORMATS
from commgraph.indexing import Edge
from commgraph.layered import LayeredTopologyBuilder
from commgraph.log_config import get_logger
from commgraph.random_dag import RandomAcyclicBuilder

logger = get_logger(__name__)


@dataclass
class LayeredConfig:
    """Sizing of a layered lattice fixture."""

    inside: int = 0
    outside: int = 0
    layers: int = 0

    def builder(self) -> LayeredTopologyBuilder:
        return LayeredTopologyBuilder(self.inside, self.outside, self.layers)


@dataclass
class CubeConfig:
    """Sizing of a spatiotemporal grid fixture."""

    width: int = 3
    height: int = 3
    depth: int = 3
    timesteps: int = 2

    def builder(self) -> CubeTopologyBuilder:
        return CubeTopologyBuilder(self.width, self.height, self.depth, self.timesteps)


@dataclass
class RandomConfig:
    """Sizing of a random acyclic fixture.

    ``seed`` makes the fixture reproducible; ``max_attempts`` caps the
    number of rejected draws (unbounded when None).
    """

    edges: int = 1
    seed: int | None = None
    max_attempts: int | None = None

    def builder(self) -> RandomAcyclicBuilder:
        return RandomAcyclicBuilder(
            self.edges, seed=self.seed, max_attempts=self.max_attempts
        )


@dataclass
class OutputConfig:
    """Where and how fixtures are written."""

    directory: Path = Path(".")
    format: str = "lines"  # "lines" or "debug"

    def __post_init__(self) -> None:
        self.directory = Path(self.directory)


def _int_fields(
    section: str,
    raw: dict[str, Any],
    names: tuple[str, ...],
    optional: tuple[str, ...] = (),
) -> None:
    """Check that ``names`` present in ``raw`` are non-negative integers.

    Names listed in ``optional`` may also be null.
    """
    for name in names:
        if name not in raw or (name in optional and raw[name] is None):
            continue
        value = raw[name]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"'{section}.{name}' must be an integer, got {value!r}")
        if value < 0:
            raise ValueError(f"'{section}.{name}' must be non-negative, got {value}")


def _section(config_dict: dict[str, Any], name: str) -> dict[str, Any] | None:
    raw = config_dict.get(name)
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"'{name}' configuration section must be a dictionary")
    return raw


def _known_keys(section: str, raw: dict[str, Any], allowed: set[str]) -> None:
    unknown = sorted(set(raw) - allowed)
    if unknown:
        raise ValueError(f"Unknown keys in '{section}': {', '.join(unknown)}")


@dataclass
class GeneratorConfig:
    """Complete fixture generation configuration.

    Each graph section is optional; a config must name at least one of
    ``layered``, ``cube`` or ``random``.
    """

    layered: LayeredConfig | None = None
    cube: CubeConfig | None = None
    random: RandomConfig | None = None
    output: OutputConfig = field(default_factory=OutputConfig)
    _source_path: Path | None = None

    @classmethod
    def from_yaml(cls, config_path: Path) -> GeneratorConfig:
        """Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file.

        Returns:
            Parsed configuration object.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            yaml.YAMLError: If YAML is invalid.
            ValueError: If configuration is invalid.
        """
        logger.info(f"Loading configuration from: {config_path}")

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in configuration: {e}")
            raise

        if not isinstance(raw_config, dict):
            raise ValueError("Configuration file must contain a mapping at top level")

        cfg = cls._from_dict(raw_config)
        cfg._source_path = Path(config_path)
        return cfg

    @classmethod
    def _from_dict(cls, config_dict: dict[str, Any]) -> GeneratorConfig:
        """Create configuration from dictionary.

        Args:
            config_dict: Raw configuration dictionary.

        Returns:
            Parsed configuration object.
        """
        _known_keys("<root>", config_dict, {"layered", "cube", "random", "output"})

        layered = None
        layered_dict = _section(config_dict, "layered")
        if layered_dict is not None:
            _known_keys("layered", layered_dict, {"inside", "outside", "layers"})
            _int_fields("layered", layered_dict, ("inside", "outside", "layers"))
            layered = LayeredConfig(**layered_dict)

        cube = None
        cube_dict = _section(config_dict, "cube")
        if cube_dict is not None:
            _known_keys("cube", cube_dict, {"width", "height", "depth", "timesteps"})
            _int_fields("cube", cube_dict, ("width", "height", "depth", "timesteps"))
            cube = CubeConfig(**cube_dict)

        random_cfg = None
        random_dict = _section(config_dict, "random")
        if random_dict is not None:
            _known_keys("random", random_dict, {"edges", "seed", "max_attempts"})
            _int_fields(
                "random", random_dict, ("edges", "max_attempts"), optional=("max_attempts",)
            )
            seed = random_dict.get("seed")
            if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
                raise ValueError(f"'random.seed' must be an integer, got {seed!r}")
            edges = random_dict.get("edges", 1)
            if edges is None or edges < 1:
                raise ValueError("'random.edges' must be at least 1")
            random_cfg = RandomConfig(**random_dict)

        output = OutputConfig()
        output_dict = _section(config_dict, "output")
        if output_dict is not None:
            _known_keys("output", output_dict, {"directory", "format"})
            fmt = output_dict.get("format", "lines")
            if fmt not in FORMATS:
                raise ValueError(
                    f"'output.format' must be one of {', '.join(FORMATS)}, got {fmt!r}"
                )
            output = OutputConfig(
                directory=Path(output_dict.get("directory", ".")), format=fmt
            )

        if layered is None and cube is None and random_cfg is None:
            raise ValueError(
                "Configuration must define at least one of 'layered', 'cube' "
                "or 'random'"
            )

        return cls(layered=layered, cube=cube, random=random_cfg, output=output)

    def builders(self) -> dict[str, Any]:
        """Return the configured builders keyed by fixture name."""
        result: dict[str, Any] = {}
        if self.layered is not None:
            result["layered"] = self.layered.builder()
        if self.cube is not None:
            result["cube"] = self.cube.builder()
        if self.random is not None:
            result["random"] = self.random.builder()
        return result

    def build_all(self) -> dict[str, list[Edge]]:
        """Build every configured fixture.

        Returns:
            Mapping from fixture name to its edge list.
        """
        fixtures = {}
        for name, builder in self.builders().items():
            logger.info(f"Building {name} fixture")
            fixtures[name] = builder.build()
        return fixtures

    def summary(self) -> str:
        """Generate configuration summary string.

        Returns:
            Human-readable configuration summary.
        """
        lines = [
            "COMMGRAPH FIXTURE CONFIGURATION",
            "=" * 60,
        ]
        if self.layered is not None:
            lines += [
                "",
                "LAYERED LATTICE",
                "-" * 30,
                f"   Inside: {self.layered.inside}",
                f"   Outside: {self.layered.outside}",
                f"   Layers: {self.layered.layers}",
            ]
        if self.cube is not None:
            lines += [
                "",
                "SPATIOTEMPORAL CUBE",
                "-" * 30,
                f"   Grid: {self.cube.width}x{self.cube.height}x{self.cube.depth}",
                f"   Timesteps: {self.cube.timesteps}",
            ]
        if self.random is not None:
            seed = self.random.seed if self.random.seed is not None else "entropy"
            lines += [
                "",
                "RANDOM ACYCLIC",
                "-" * 30,
                f"   Edges: {self.random.edges}",
                f"   Seed: {seed}",
            ]
        lines += [
            "",
            "OUTPUT",
            "-" * 30,
            f"   Directory: {self.output.directory}",
            f"   Format: {self.output.format}",
            "",
            "=" * 60,
        ]
        return "\n".join(lines)
