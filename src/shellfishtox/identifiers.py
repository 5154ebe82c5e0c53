"""
Site and sample identifiers derived from the raw toxics fields.

EGAD_SITE_NAME packs a long site name and a short site code into one field,
e.g. ``"MIDDLE BAY (MBB) - CBMBBH"``. Sample ids are reused across years, and
occasionally within a year, so a sample code also carries the year and the
rank of the sampling date among all sampling dates of that year.
"""
from __future__ import annotations
import logging

import pandas as pd

from .cleaning import require_columns

logger = logging.getLogger(__name__)

SITE_SEPARATOR = " - "


def split_site_name(df: pd.DataFrame, col: str = "EGAD_SITE_NAME") -> pd.DataFrame:
    """
    Add SITE_CODE (text after the last separator) and SITE_NAME (text before
    the first separator). Without a separator the code is null and the name
    is the whole field.
    """
    require_columns(df, [col])
    df = df.copy()
    s = df[col].astype("string")
    df["SITE_CODE"] = s.str.extract(r"^.* - (.*)$", expand=False).astype("string")
    name = s.str.extract(r"^(.*?) - ", expand=False).astype("string")
    df["SITE_NAME"] = name.fillna(s)
    unsplit = int((df["SITE_CODE"].isna() & s.notna()).sum())
    if unsplit:
        logger.warning("%d rows have no %r in %s; site code left empty", unsplit, SITE_SEPARATOR, col)
    return df


def add_year(df: pd.DataFrame, date_col: str = "SAMPLE_DATE") -> pd.DataFrame:
    require_columns(df, [date_col])
    df = df.copy()
    df["YEAR"] = pd.to_datetime(df[date_col]).dt.year.astype("Int64")
    return df


def date_tags(df: pd.DataFrame, date_col: str = "SAMPLE_DATE") -> pd.Series:
    """Dense rank (1, 2, ...) of each row's sample date among the distinct sample dates of its year."""
    dates = pd.to_datetime(df[date_col])
    return (
        dates.groupby(df["YEAR"])
        .rank(method="dense")
        .astype("Int64")
    )


def add_sample_code(df: pd.DataFrame, id_col: str = "SAMPLE_ID", date_col: str = "SAMPLE_DATE") -> pd.DataFrame:
    """
    Replace spaces in the sample id with underscores and add CODE as
    ``<sample_id>_<year>_<tag>``. Rows sharing id, year and date share a code.
    """
    require_columns(df, [id_col, date_col, "YEAR"])
    df = df.copy()
    df[id_col] = df[id_col].astype("string").str.replace(" ", "_", regex=False)
    tag = date_tags(df, date_col)
    df["CODE"] = (
        df[id_col]
        + "_" + df["YEAR"].astype("string")
        + "_" + tag.astype("string")
    )
    return df


def synthesize_identifiers(df: pd.DataFrame) -> pd.DataFrame:
    df = split_site_name(df)
    df = add_year(df)
    return add_sample_code(df)
