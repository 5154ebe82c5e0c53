from .ingest import read_toxics_raw, read_parameter_classes, read_site_locations
from .cleaning import drop_exact_duplicates, prune_columns
from .identifiers import synthesize_identifiers
from .exclusions import Exclusion, DEFAULT_EXCLUSIONS, filter_exceptions
from .units import normalize_units, UNIT_EXPONENTS
from .metadata import rename_columns, build_metadata_table
from .pipeline import clean_toxics, run_pipeline

__all__ = [
    "read_toxics_raw",
    "read_parameter_classes",
    "read_site_locations",
    "drop_exact_duplicates",
    "prune_columns",
    "synthesize_identifiers",
    "Exclusion",
    "DEFAULT_EXCLUSIONS",
    "filter_exceptions",
    "normalize_units",
    "UNIT_EXPONENTS",
    "rename_columns",
    "build_metadata_table",
    "clean_toxics",
    "run_pipeline",
]
