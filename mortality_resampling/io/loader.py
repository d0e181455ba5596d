"""Patient CSV ingestion.

Reads the Covid-19 patient table with :mod:`pyarrow.csv`, keeps the age and
date-of-death columns, and reduces each row to an (age, died/survived) pair.
A ``DATE_DIED`` equal to the alive sentinel (or empty) marks a survivor; any
other value marks an in-hospital death. Age sentinels, non-finite and unparseable ages
become missing measurements.
"""

from __future__ import annotations

import math
from pathlib import Path

import numpy as np
import pyarrow as pa
import pyarrow.compute as pc
import pyarrow.csv as pacsv

from mortality_resampling.config.constants import DIED_LABEL, SURVIVED_LABEL
from mortality_resampling.config.types import IngestConfig
from mortality_resampling.domain.dataset import Dataset


def read_patient_table(path: Path, config: IngestConfig) -> pa.Table:
    """Read the two required columns as strings."""
    if not path.is_file():
        raise FileNotFoundError(f"patient CSV not found: {path}")
    columns = [config.age_column, config.death_date_column]
    with pacsv.open_csv(str(path)) as reader:
        available = set(reader.schema.names)
    for required_col in columns:
        if required_col not in available:
            raise ValueError(f"patient CSV missing required column: {required_col}")
    convert_options = pacsv.ConvertOptions(
        include_columns=columns,
        column_types={name: pa.string() for name in columns},
        strings_can_be_null=True,
    )
    return pacsv.read_csv(str(path), convert_options=convert_options)


def _parse_ages(column: pa.ChunkedArray, sentinels: tuple[float, ...]) -> np.ndarray:
    ages = np.full(len(column), np.nan, dtype=np.float64)
    for i, raw in enumerate(column.to_pylist()):
        if raw is None:
            continue
        try:
            value = float(raw)
        except ValueError:
            continue
        if not math.isfinite(value) or value in sentinels:
            continue
        ages[i] = value
    return ages


def _death_labels(column: pa.ChunkedArray, alive_sentinel: str) -> list[str]:
    trimmed = pc.utf8_trim_whitespace(column)
    alive = pc.fill_null(
        pc.or_(pc.equal(trimmed, alive_sentinel), pc.equal(trimmed, "")), True
    )
    return [SURVIVED_LABEL if flag else DIED_LABEL for flag in alive.to_pylist()]


def subsample_table(table: pa.Table, max_rows: int | None, seed: int) -> pa.Table:
    """Keep at most *max_rows* rows, drawn without replacement, original order kept."""
    if max_rows is None or table.num_rows <= max_rows:
        return table
    rng = np.random.default_rng(seed)
    keep = np.sort(rng.choice(table.num_rows, size=max_rows, replace=False))
    return table.take(pa.array(keep))


def load_patient_dataset(path: Path, config: IngestConfig | None = None) -> Dataset:
    """Load the patient CSV at *path* into an (age, died/survived) :class:`Dataset`."""
    config = config or IngestConfig()
    table = subsample_table(
        read_patient_table(Path(path), config), config.subsample_rows, config.subsample_seed
    )
    if table.num_rows == 0:
        raise ValueError(f"patient CSV has no rows: {path}")
    ages = _parse_ages(table.column(config.age_column), config.age_sentinels)
    labels = _death_labels(table.column(config.death_date_column), config.alive_sentinel)
    return Dataset.from_arrays(ages, labels)
