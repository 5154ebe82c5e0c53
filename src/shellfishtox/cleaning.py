from __future__ import annotations
import logging

import pandas as pd

from .errors import SchemaMismatchError

logger = logging.getLogger(__name__)

# constant across the whole dataset, or restating the site/sample fields
UNINFORMATIVE_COLUMNS = [
    "SAMPLE_POINT_TYPE",
    "SAMPLE_LOCATION",
    "SAMPLE_TYPE",
    "SAMPLE_COLLECTION_METHOD",
    "SAMPLE QC TYPE",
    "PARAMETER FILTERED",
    "TREATMENT",
    "METER_CALIBRATED",
    "RESULT_TYPE",
    "HORIZONTAL_DATUM",
    "LOCATION_METHOD",
]

# informative, but outside this analysis (locations come from the site table)
UNUSED_COLUMNS = [
    "SAMPLED_BY",
    "SAMPLE_COMMENT",
    "LAB SAMPLE ID",
    "ANALYSIS_LAB_SAMPLE_ID",
    "ANALYSIS_DATE",
    "DILUTION_FACTOR",
    "RESULT_COMMENT",
    "LATITUDE",
    "LONGITUDE",
]


def drop_exact_duplicates(df: pd.DataFrame) -> pd.DataFrame:
    """
    Remove rows that are identical in every column.

    Args:
        df: Input DataFrame

    Returns:
        DataFrame with one copy of each distinct row, index reset
    """
    out = df.drop_duplicates().reset_index(drop=True)
    logger.info("Exact duplicates: %d -> %d rows", len(df), len(out))
    return out


def require_columns(df: pd.DataFrame, cols: list[str], what: str = "input") -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise SchemaMismatchError(f"{what} is missing expected columns: {missing}")


def prune_columns(
    df: pd.DataFrame,
    uninformative: list[str] = UNINFORMATIVE_COLUMNS,
    unused: list[str] = UNUSED_COLUMNS,
) -> pd.DataFrame:
    """
    Drop the fixed lists of uninformative and unused columns.

    Raises:
        SchemaMismatchError: If any listed column is absent, since the
            layout has drifted from what the later steps expect
    """
    cols = list(uninformative) + list(unused)
    require_columns(df, cols, what="toxics table")
    return df.drop(columns=cols)
