"""
Lookups joined onto the cleaned toxics table: chemical class per parameter,
site locations, and Fish Tissue Action Levels (FTAL).
"""
from __future__ import annotations
from pathlib import Path

import pandas as pd

from .errors import SchemaMismatchError


def attach_parameter_classes(df: pd.DataFrame, classes: pd.DataFrame) -> pd.DataFrame:
    """Left join a ``class`` column on parameter; unknown parameters get a null class."""
    lookup = classes.rename(columns={"PARAMETER": "parameter", "Class": "class"})
    lookup = lookup[["parameter", "class"]].drop_duplicates(subset="parameter").copy()
    lookup["parameter"] = lookup["parameter"].astype("string")
    return df.merge(lookup, on="parameter", how="left", validate="many_to_one")


def attach_site_locations(df: pd.DataFrame, sites: pd.DataFrame, site_col: str = "SiteCode") -> pd.DataFrame:
    """Left join site attributes on the short site code."""
    if site_col not in sites.columns:
        raise SchemaMismatchError(f"Site table has no {site_col!r} column")
    lookup = sites.rename(columns={site_col: "site_code"}).drop_duplicates(subset="site_code").copy()
    lookup["site_code"] = lookup["site_code"].astype("string")
    overlap = [c for c in lookup.columns if c in df.columns and c != "site_code"]
    lookup = lookup.drop(columns=overlap)
    return df.merge(lookup, on="site_code", how="left", validate="many_to_one")


def read_thresholds(path: str | Path) -> dict[str, float]:
    """FTAL per parameter, in ug/g wet weight, from a CSV with columns parameter, ftal_ugg."""
    t = pd.read_csv(path)
    missing = [c for c in ("parameter", "ftal_ugg") if c not in t.columns]
    if missing:
        raise SchemaMismatchError(f"Threshold table lacks columns {missing}")
    t = t.dropna(subset=["parameter", "ftal_ugg"])
    return {str(p).strip().upper(): float(v) for p, v in zip(t["parameter"], t["ftal_ugg"])}


def flag_exceedances(df: pd.DataFrame, thresholds: dict[str, float]) -> pd.DataFrame:
    """
    Add ``ftal_ugg`` and a nullable boolean ``exceeds_ftal``.

    Only wet-weight rows with a converted concentration and a threshold are
    compared; everything else is <NA>, so rows with unconvertible units never
    count as passing or failing.
    """
    df = df.copy()
    upper = {k.upper(): v for k, v in thresholds.items()}
    df["ftal_ugg"] = df["parameter"].astype("string").str.upper().map(upper).astype(float)
    wet = df["weight_basis"].astype("string").str.upper().eq("WET").fillna(False).astype(bool)
    comparable = wet & df["conc_ugg"].notna() & df["ftal_ugg"].notna()
    flag = pd.Series(pd.NA, index=df.index, dtype="boolean")
    flag[comparable] = (df.loc[comparable, "conc_ugg"] > df.loc[comparable, "ftal_ugg"]).to_numpy()
    df["exceeds_ftal"] = flag
    return df
