"""CLI tests focused on argument parsing, dispatch and output."""

from __future__ import annotations

import builtins as py_builtins
import importlib
import logging
from io import StringIO
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

import yaml

from commgraph.edge_io import read_edge_lines


def _invoke_main(argv: list[str], *, stub_subcommand: bool = False):
    """Invoke commgraph.cli.main with patches applied.

    Args:
        argv: Arguments excluding program name.
        stub_subcommand: If True, replaces subcommands with functions that
            only record which one was called.

    Returns:
        Namespace with: code (int), stdout (str), stderr (str),
        called (str|None), level (int|None).
    """
    import commgraph.cli as cli

    importlib.reload(cli)

    names = ["layered", "cube", "random", "build", "info"]
    called: dict[str, bool] = {name: False for name in names}
    level_holder: dict[str, int | None] = {"level": None}

    patchers = [
        patch(
            "commgraph.log_config.set_global_log_level",
            side_effect=lambda lvl: level_holder.__setitem__("level", lvl),
        )
    ]

    if stub_subcommand:
        for name in names:
            patchers.append(
                patch.object(
                    cli,
                    f"{name}_command",
                    side_effect=lambda a, n=name: called.__setitem__(n, True),
                )
            )

    for p in patchers:
        p.start()

    out = SimpleNamespace(code=0, stdout="", stderr="", called=None, level=None)
    saved_print = py_builtins.print
    try:
        with (
            patch("sys.stdout", new_callable=StringIO) as buf,
            patch("sys.stderr", new_callable=StringIO) as err,
            patch("sys.argv", ["commgraph"] + argv),
        ):
            try:
                cli.main()
            except SystemExit as e:
                out.code = int(getattr(e, "code", 0) or 0)
            out.stdout = buf.getvalue()
            out.stderr = err.getvalue()
            out.level = level_holder["level"]
            for name, was_called in called.items():
                if was_called:
                    out.called = name
                    break
    finally:
        # Restore global print in case --quiet modified it
        py_builtins.print = saved_print
        for p in reversed(patchers):
            p.stop()

    return out


def test_no_args_shows_help_and_exits_nonzero():
    res = _invoke_main([])
    assert res.code == 1
    assert "Available commands" in res.stdout


def test_verbose_flag_sets_debug_level_and_dispatches():
    res = _invoke_main(["-v", "cube", "3", "3", "3", "2"], stub_subcommand=True)
    assert res.called == "cube"
    assert res.level == logging.DEBUG


def test_default_log_level_is_info():
    res = _invoke_main(["info", "config.yml"], stub_subcommand=True)
    assert res.called == "info"
    assert res.level == logging.INFO


def test_layered_to_stdout():
    res = _invoke_main(["layered", "3", "0", "2"])
    assert res.code == 0
    assert res.stdout.splitlines() == [
        "0 -> 3",
        "0 -> 4",
        "1 -> 3",
        "1 -> 4",
        "1 -> 5",
        "2 -> 4",
        "2 -> 5",
    ]


def test_layered_debug_format():
    res = _invoke_main(["layered", "1", "0", "3", "--format", "debug"])
    assert res.stdout.strip() == "[(0, 1), (1, 2)]"


def test_cube_to_file(tmp_path: Path):
    target = tmp_path / "cube.txt"
    res = _invoke_main(["cube", "3", "3", "3", "2", "-o", str(target)])
    assert res.code == 0
    assert len(read_edge_lines(target)) == 7**3 + 2 * 26
    assert "Wrote" in res.stderr


def test_random_seeded_output_is_reproducible():
    first = _invoke_main(["random", "15", "--seed", "3"])
    second = _invoke_main(["random", "15", "--seed", "3"])
    assert first.code == 0
    assert first.stdout == second.stdout
    assert len(first.stdout.splitlines()) == 15


def test_random_zero_edges_is_validation_error():
    res = _invoke_main(["random", "0"])
    assert res.code == 3
    assert "num_edges must be at least 1" in res.stderr


def test_negative_size_is_validation_error():
    res = _invoke_main(["layered", "-1", "2", "2"])
    assert res.code == 3


def test_quiet_suppresses_print_output(tmp_path: Path):
    res = _invoke_main(
        ["--quiet", "layered", "2", "1", "2", "-o", str(tmp_path / "l.txt")]
    )
    assert res.code == 0
    assert res.stdout == ""
    assert res.stderr == ""


def test_build_writes_each_fixture(tmp_path: Path, sample_config):
    config_path = tmp_path / "fixtures.yml"
    config_path.write_text(yaml.dump(sample_config))
    out_dir = tmp_path / "out"

    res = _invoke_main(["build", str(config_path), "-o", str(out_dir)])

    assert res.code == 0
    assert "SUCCESS" in res.stdout
    assert sorted(p.name for p in out_dir.iterdir()) == [
        "cube.txt",
        "layered.txt",
        "random.txt",
    ]
    assert len(read_edge_lines(out_dir / "random.txt")) == 20


def test_build_missing_config_exits_with_config_error(tmp_path: Path):
    res = _invoke_main(["build", str(tmp_path / "missing.yml")])
    assert res.code == 2
    assert "Configuration file not found" in res.stdout


def test_info_prints_summary(tmp_path: Path, sample_config):
    config_path = tmp_path / "fixtures.yml"
    config_path.write_text(yaml.dump(sample_config))
    res = _invoke_main(["info", str(config_path)])
    assert res.code == 0
    assert "COMMGRAPH FIXTURE CONFIGURATION" in res.stdout
