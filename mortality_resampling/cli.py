"""CLI entrypoint for the age/mortality analysis.

This module owns argument parsing and subcommand dispatch. Domain logic
lives in the extracted modules:

- ``mortality_resampling.io``        – patient CSV ingestion and artifact paths
- ``mortality_resampling.config``    – configuration dataclasses
- ``mortality_resampling.analysis``  – statistic, resampling and inference
- ``mortality_resampling.viz``       – distribution figures
"""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from mortality_resampling.analysis.describe import describe_dataset
from mortality_resampling.analysis.pipeline import run_analysis, save_analysis
from mortality_resampling.config.constants import (
    AGE_COLUMN,
    ALIVE_DATE_SENTINEL,
    DEATH_DATE_COLUMN,
    DEFAULT_CONFIDENCE_LEVEL,
    DEFAULT_REPS,
    SUBSAMPLE_ROWS,
)
from mortality_resampling.config.types import AnalysisConfig, IngestConfig
from mortality_resampling.io.loader import load_patient_dataset
from mortality_resampling.io.paths import figure_path
from mortality_resampling.viz.render import render_distribution

# ---------------------------------------------------------------------------
# Value coercion helpers
# ---------------------------------------------------------------------------

FileConfig = dict[str, object]


def _as_bool(raw: object, key: str) -> bool:
    # --plot/--no-plot and JSON booleans are the only sources.
    if not isinstance(raw, bool):
        raise ValueError(f"{key} must be true or false, got {raw!r}")
    return raw


def _as_int(raw: object, key: str) -> int:
    """Accept ints and integral floats (JSON ``10000.0``); reject booleans."""
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    raise ValueError(f"{key} must be an integer, got {raw!r}")


def _as_float(raw: object, key: str) -> float:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw)
    raise ValueError(f"{key} must be a number, got {raw!r}")


def _as_str(raw: object, key: str) -> str:
    if isinstance(raw, (str, Path)):
        return str(raw)
    raise ValueError(f"{key} must be a string, got {raw!r}")


def _as_float_tuple(raw: object, key: str) -> tuple[float, ...]:
    if not isinstance(raw, (list, tuple)):
        raise ValueError(f"{key} must be a list of numbers")
    return tuple(_as_float(value, key) for value in raw)


def _pick(cli_val: object, key: str, file_cfg: FileConfig, default: object) -> object:
    """CLI value if given, else the config-file entry, else *default*."""
    return cli_val if cli_val is not None else file_cfg.get(key, default)


def _resolve(
    cli_val: object,
    key: str,
    file_cfg: FileConfig,
    default: object,
    coerce: Callable[[object, str], Any],
    optional: bool = False,
) -> Any:
    raw = _pick(cli_val, key, file_cfg, default)
    if raw is None and optional:
        return None
    return coerce(raw, key)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _add_ingest_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--data", type=Path, default=None, help="Patient CSV file")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--age-column", type=str, default=None)
    parser.add_argument("--death-date-column", type=str, default=None)
    parser.add_argument("--alive-sentinel", type=str, default=None)
    parser.add_argument(
        "--age-sentinel",
        type=float,
        action="append",
        default=None,
        help="Age value treated as missing (repeatable)",
    )
    parser.add_argument(
        "--subsample-rows",
        type=int,
        default=None,
        help=f"Row cap before analysis (default {SUBSAMPLE_ROWS}; 0 keeps all rows)",
    )
    parser.add_argument("--subsample-seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Permutation test and bootstrap interval for age vs. in-hospital mortality"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Run permutation test and bootstrap CI")
    _add_ingest_args(analyze)
    analyze.add_argument("--reps", type=int, default=None)
    analyze.add_argument("--level", type=float, default=None)
    analyze.add_argument("--seed", type=int, default=None)
    analyze.add_argument("--workers", type=int, default=None)
    analyze.add_argument(
        "--deadline", type=float, default=None, help="Per-distribution time budget in seconds"
    )
    analyze.add_argument("--out-dir", type=Path, default=None)
    analyze.add_argument("--plot", action=argparse.BooleanOptionalAction, default=None)

    describe = subparsers.add_parser("describe", help="Print descriptive statistics")
    _add_ingest_args(describe)
    return parser


def _load_file_config(parser: argparse.ArgumentParser, path: Path | None) -> FileConfig:
    if path is None:
        return {}
    try:
        loaded = json.loads(Path(path).read_text())
    except FileNotFoundError:
        parser.error(f"Config file not found: {path}")
    except json.JSONDecodeError as exc:
        parser.error(f"Config file is not valid JSON: {path}: {exc}")
    if not isinstance(loaded, dict):
        parser.error(f"Config file must contain a JSON object: {path}")
    return loaded


def _resolve_ingest_config(args: argparse.Namespace, file_cfg: FileConfig) -> IngestConfig:
    subsample_rows = _resolve(
        args.subsample_rows, "subsample_rows", file_cfg, SUBSAMPLE_ROWS, _as_int, optional=True
    )
    return IngestConfig(
        age_column=_resolve(args.age_column, "age_column", file_cfg, AGE_COLUMN, _as_str),
        death_date_column=_resolve(
            args.death_date_column, "death_date_column", file_cfg, DEATH_DATE_COLUMN, _as_str
        ),
        alive_sentinel=_resolve(
            args.alive_sentinel, "alive_sentinel", file_cfg, ALIVE_DATE_SENTINEL, _as_str
        ),
        age_sentinels=_resolve(args.age_sentinel, "age_sentinels", file_cfg, [], _as_float_tuple),
        subsample_rows=None if subsample_rows == 0 else subsample_rows,
        subsample_seed=_resolve(args.subsample_seed, "subsample_seed", file_cfg, 0, _as_int),
    )


def _resolve_analysis_config(args: argparse.Namespace, file_cfg: FileConfig) -> AnalysisConfig:
    return AnalysisConfig(
        reps=_resolve(args.reps, "reps", file_cfg, DEFAULT_REPS, _as_int),
        level=_resolve(args.level, "level", file_cfg, DEFAULT_CONFIDENCE_LEVEL, _as_float),
        seed=_resolve(args.seed, "seed", file_cfg, None, _as_int, optional=True),
        workers=_resolve(args.workers, "workers", file_cfg, 1, _as_int),
        deadline=_resolve(args.deadline, "deadline", file_cfg, None, _as_float, optional=True),
    )


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint.

    Supports ``--config path/to/config.json`` for reproducible runs. CLI
    arguments override config-file values; config-file values override
    built-in defaults. Invalid settings exit with status 2 before any
    resampling starts.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    file_cfg = _load_file_config(parser, args.config)
    data_raw = _pick(args.data, "data", file_cfg, None)
    if data_raw is None:
        parser.error("--data is required (or set 'data' in the config file)")

    try:
        ingest_config = _resolve_ingest_config(args, file_cfg)
        analysis_config = (
            _resolve_analysis_config(args, file_cfg) if args.command == "analyze" else None
        )
        data_path = Path(_as_str(data_raw, "data"))
        out_dir_raw = _resolve(
            getattr(args, "out_dir", None), "out_dir", file_cfg, None, _as_str, optional=True
        )
        out_dir = None if out_dir_raw is None else Path(out_dir_raw)
        plot = _resolve(getattr(args, "plot", None), "plot", file_cfg, False, _as_bool)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        dataset = load_patient_dataset(data_path, ingest_config)
    except FileNotFoundError:
        parser.error(f"Data file not found: {data_path}")
    except ValueError as exc:
        parser.error(str(exc))

    if analysis_config is None:
        print(json.dumps(describe_dataset(dataset), ensure_ascii=False, indent=2))
        return

    print(f"Loaded {len(dataset)} patients ({dataset.missing_count} with missing age)")
    print(f"Running {analysis_config.reps} permutation and bootstrap replicates...")
    try:
        result = run_analysis(dataset, analysis_config)
    except ValueError as exc:
        parser.error(str(exc))

    summary = result.to_dict()
    if out_dir is not None:
        paths = save_analysis(result, out_dir)
        if plot:
            paths["null_figure"] = render_distribution(
                result.null_distribution,
                result.observed,
                figure_path(out_dir, "null_distribution"),
            )
            paths["bootstrap_figure"] = render_distribution(
                result.bootstrap_distribution,
                result.observed,
                figure_path(out_dir, "bootstrap_distribution"),
                interval=result.interval,
            )
        summary["artifacts"] = {name: str(path) for name, path in paths.items()}
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
