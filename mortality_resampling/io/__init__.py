"""I/O layer: patient CSV ingestion, artifact schemas and output paths."""

from mortality_resampling.io.loader import load_patient_dataset, read_patient_table
from mortality_resampling.io.schemas import DISTRIBUTION_SCHEMA, SUMMARY_SCHEMA_VERSION

__all__ = [
    "DISTRIBUTION_SCHEMA",
    "SUMMARY_SCHEMA_VERSION",
    "load_patient_dataset",
    "read_patient_table",
]
