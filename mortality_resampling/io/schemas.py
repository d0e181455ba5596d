"""Parquet schema definitions for analysis artifacts."""

from __future__ import annotations

import pyarrow as pa

SUMMARY_SCHEMA_VERSION = 1

DISTRIBUTION_SCHEMA = pa.schema(
    [
        ("replicate", pa.int64()),
        ("mode", pa.string()),
        ("statistic", pa.string()),
        ("value", pa.float64()),
    ]
)
