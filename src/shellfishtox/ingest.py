from __future__ import annotations
import logging
from pathlib import Path

import pandas as pd

from .config import RAW_TOXICS_XLSX, RAW_SHEET_NAME
from .errors import SchemaMismatchError

logger = logging.getLogger(__name__)

NUMERIC, TEXT, DATE = "numeric", "text", "date"

# Positional layout of the toxics sheet. Declared up front so that a >100k
# row workbook is not type-guessed column by column.
RAW_SCHEMA: list[tuple[str, str]] = [
    ("SITE SEQ", NUMERIC),
    ("EGAD_SITE_NAME", TEXT),
    ("CURRENT_SAMPLE_POINT_NAME", TEXT),
    ("SAMPLE_POINT_TYPE", TEXT),
    ("SAMPLE_LOCATION", TEXT),
    ("SAMPLE_TYPE", TEXT),
    ("SAMPLE_COLLECTION_METHOD", TEXT),
    ("SAMPLE_ID", TEXT),
    ("SAMPLE QC TYPE", TEXT),
    ("SAMPLE_DATE", DATE),
    ("SAMPLED_BY", TEXT),
    ("SAMPLE_COMMENT", TEXT),
    ("LAB SAMPLE ID", TEXT),
    ("ANALYSIS_LAB", TEXT),
    ("ANALYSIS_LAB_SAMPLE_ID", TEXT),
    ("ANALYSIS_DATE", DATE),
    ("PREP_METHOD", TEXT),
    ("TEST", TEXT),
    ("CAS_NO", TEXT),
    ("PARAMETER", TEXT),
    ("PARAMETER_QUALIFIER", TEXT),
    ("PARAMETER FILTERED", TEXT),
    ("CONCENTRATION", NUMERIC),
    ("UNITS_VALUE", TEXT),
    ("LAB_QUALIFIER", TEXT),
    ("VALIDATION_QUALIFIER", TEXT),
    ("QUALIFIER_DESCRIPTION", TEXT),
    ("RL", NUMERIC),
    ("MDL", NUMERIC),
    ("DETECTION_LIMIT_TYPE", TEXT),
    ("WEIGHT_BASIS", TEXT),
    ("DILUTION_FACTOR", NUMERIC),
    ("TREATMENT", TEXT),
    ("METER_CALIBRATED", TEXT),
    ("RESULT_TYPE", TEXT),
    ("RESULT_COMMENT", TEXT),
    ("LATITUDE", NUMERIC),
    ("LONGITUDE", NUMERIC),
    ("HORIZONTAL_DATUM", TEXT),
    ("LOCATION_METHOD", TEXT),
]

# site table columns that are never used downstream
SITE_LOCATION_SKIP = ["Site Description", "Survey Notes", "Datum"]


def cast_by_kind(df: pd.DataFrame, schema: list[tuple[str, str]]) -> pd.DataFrame:
    """
    Cast each column according to its declared kind.

    Args:
        df: Frame whose columns already carry the schema names
        schema: Ordered (name, kind) pairs

    Returns:
        DataFrame with numeric columns as float, text as pandas ``string``
        and dates as ``datetime64``.
    """
    df = df.copy()
    for col, kind in schema:
        if kind == NUMERIC:
            df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)
        elif kind == DATE:
            df[col] = pd.to_datetime(df[col], errors="coerce")
        elif kind == TEXT:
            df[col] = df[col].astype("string")
        else:
            raise ValueError(f"Unknown column kind {kind!r} for {col!r}")
    return df


def apply_schema(df: pd.DataFrame, schema: list[tuple[str, str]] = RAW_SCHEMA) -> pd.DataFrame:
    """Rename columns positionally to the schema and cast them; the width must match."""
    if df.shape[1] != len(schema):
        raise SchemaMismatchError(
            f"Expected {len(schema)} columns, found {df.shape[1]}: {list(df.columns)[:10]}..."
        )
    df = df.copy()
    df.columns = [name for name, _ in schema]
    return cast_by_kind(df, schema)


def read_toxics_raw(
    path: str | Path | None = None,
    sheet_name: str | None = None,
    schema: list[tuple[str, str]] = RAW_SCHEMA,
) -> pd.DataFrame:
    path = Path(path or RAW_TOXICS_XLSX)
    sheet_name = sheet_name or RAW_SHEET_NAME
    if not path.exists():
        raise FileNotFoundError(f"Toxics workbook not found: {path}")
    # everything comes in as object; kinds are applied explicitly afterwards
    try:
        df = pd.read_excel(path, sheet_name=sheet_name, engine="openpyxl", dtype=object)
    except ValueError as e:
        raise SchemaMismatchError(f"Sheet {sheet_name!r} not readable in {path}: {e}") from e
    logger.info("Read %d rows x %d columns from %s [%s]", df.shape[0], df.shape[1], path, sheet_name)
    return apply_schema(df, schema)


def read_parameter_classes(path: str | Path) -> pd.DataFrame:
    """Parameter -> chemical class lookup (two columns: PARAMETER, Class)."""
    df = pd.read_excel(path, engine="openpyxl")
    missing = [c for c in ("PARAMETER", "Class") if c not in df.columns]
    if missing:
        raise SchemaMismatchError(f"Parameter class table lacks columns {missing}")
    df = df[["PARAMETER", "Class"]].dropna(subset=["PARAMETER"]).copy()
    df["PARAMETER"] = df["PARAMETER"].astype(str).str.strip()
    return df.drop_duplicates(subset="PARAMETER")


def read_site_locations(path: str | Path, skip: list[str] = SITE_LOCATION_SKIP) -> pd.DataFrame:
    header = pd.read_csv(path, nrows=0).columns
    usecols = [c for c in header if c not in skip]
    return pd.read_csv(path, usecols=usecols)
