"""
Known data-quality exceptions in the toxics table.

Records that are wrong for reasons only visible from outside the data
(a repeated lab run, a result reported on an inappropriate weight basis) are
listed here as data, each with a reason, instead of being buried in filter
expressions. ``apply_exclusions`` returns the dropped rows with their reason
so every removal can be audited.

Two generic near-duplicate collapses run between the first-stage and
last-stage literal exclusions:

- MOISTURE and LIPIDS describe the tissue sample, not the analysis, and are
  re-reported with each test run. Copies that differ only in the test
  context are collapsed.
- A result reported by two labs, otherwise identical, is kept once.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Literal

import numpy as np
import pandas as pd

from .cleaning import require_columns

logger = logging.getLogger(__name__)

CONTEXT_FREE_PARAMETERS = ("MOISTURE", "LIPIDS")
CONTEXT_COLUMNS = ("TEST", "PREP_METHOD")
LAB_COLUMN = "ANALYSIS_LAB"
REASON_COLUMN = "EXCLUSION_REASON"


@dataclass(frozen=True)
class Exclusion:
    """
    One known-bad record set.

    Rows are dropped when CODE equals ``code`` and the analyte criteria
    match (``how="all"``: every non-empty criterion holds; ``how="any"``:
    at least one does). A non-empty ``weight_bases`` must hold in both cases.

    ``stage="first"`` entries run before the near-duplicate collapses,
    ``stage="last"`` entries after them.
    """
    code: str
    reason: str
    parameters: tuple[str, ...] = ()
    tests: tuple[str, ...] = ()
    parameter_contains: tuple[str, ...] = ()
    weight_bases: tuple[str, ...] = ()
    how: Literal["all", "any"] = "all"
    stage: Literal["first", "last"] = "first"

    def __post_init__(self):
        if self.how not in ("all", "any"):
            raise ValueError(f"Exclusion for {self.code}: how must be 'all' or 'any', got {self.how!r}")
        if self.stage not in ("first", "last"):
            raise ValueError(f"Exclusion for {self.code}: stage must be 'first' or 'last', got {self.stage!r}")

    def mask(self, df: pd.DataFrame) -> pd.Series:
        code = df["CODE"].astype("string")
        param = df["PARAMETER"].astype("string").str.upper()
        test = df["TEST"].astype("string").str.upper()

        criteria = []
        if self.parameters:
            criteria.append(param.isin([p.upper() for p in self.parameters]))
        if self.tests:
            criteria.append(test.isin([t.upper() for t in self.tests]))
        for fragment in self.parameter_contains:
            criteria.append(param.str.contains(fragment.upper(), regex=False))

        m = (code == self.code).fillna(False)
        if criteria:
            crit = pd.concat([c.fillna(False).astype(bool) for c in criteria], axis=1)
            m &= crit.all(axis=1) if self.how == "all" else crit.any(axis=1)
        if self.weight_bases:
            basis = df["WEIGHT_BASIS"].astype("string").str.upper()
            m &= basis.isin([b.upper() for b in self.weight_bases]).fillna(False)
        return m.astype(bool)


DEFAULT_EXCLUSIONS: list[Exclusion] = [
    Exclusion(
        code="CBMBBH_REP_1_2007_1",
        parameters=("MERCURY",),
        tests=("SW6010B",),
        reason="Mercury re-reported by ICP on a sample already run by cold vapor AA",
    ),
    Exclusion(
        code="CBSPBH_REP_2_2003_1",
        tests=("E1668A",),
        parameters=("PCBS",),
        parameter_contains=("PCB",),
        weight_bases=("LIP", "DRY"),
        how="any",
        stage="last",
        reason="PCB results for this sample reported on lipid and dry basis only duplicate the wet-weight values",
    ),
]


def _split_cell(value) -> tuple[str, ...]:
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return ()
    return tuple(v.strip() for v in str(value).split(";") if v.strip())


def read_exclusions(path: str | Path) -> list[Exclusion]:
    """
    Load an exclusion list from CSV with columns code, reason and optionally
    parameters, tests, parameter_contains, weight_bases (``;``-separated),
    how and stage. Blank how/stage cells take the defaults.
    """
    table = pd.read_csv(path, dtype=str)
    missing = [c for c in ("code", "reason") if c not in table.columns]
    if missing:
        raise ValueError(f"Exclusion list {path} lacks columns {missing}")
    out = []
    for i, row in enumerate(table.to_dict(orient="records"), start=2):
        code = _split_cell(row["code"])
        if len(code) != 1:
            raise ValueError(f"Exclusion list {path}, line {i}: one sample code required, got {row['code']!r}")
        how = _split_cell(row.get("how"))
        stage = _split_cell(row.get("stage"))
        out.append(Exclusion(
            code=code[0],
            reason=row["reason"],
            parameters=_split_cell(row.get("parameters")),
            tests=_split_cell(row.get("tests")),
            parameter_contains=_split_cell(row.get("parameter_contains")),
            weight_bases=_split_cell(row.get("weight_bases")),
            how=how[0].lower() if how else "all",
            stage=stage[0].lower() if stage else "first",
        ))
    return out


def apply_exclusions(
    df: pd.DataFrame, exclusions: Iterable[Exclusion] = DEFAULT_EXCLUSIONS
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """
    Drop rows matched by any exclusion.

    Returns:
        (kept, dropped); ``dropped`` has an EXCLUSION_REASON column. An
        exclusion that matches nothing is logged as a warning, since the
        listed record has probably changed upstream.
    """
    require_columns(df, ["CODE", "PARAMETER", "TEST", "WEIGHT_BASIS"])
    reasons = pd.Series(pd.NA, index=df.index, dtype="string")
    for ex in exclusions:
        m = ex.mask(df)
        n = int(m.sum())
        if n == 0:
            logger.warning("Exclusion for %s matched no rows (%s)", ex.code, ex.reason)
            continue
        logger.info("Exclusion for %s dropped %d rows", ex.code, n)
        reasons = reasons.mask(m & reasons.isna(), ex.reason)

    hit = reasons.notna()
    dropped = df[hit].copy()
    dropped[REASON_COLUMN] = reasons[hit]
    return df[~hit], dropped


def collapse_context_free_parameters(
    df: pd.DataFrame,
    parameters: Iterable[str] = CONTEXT_FREE_PARAMETERS,
    context_columns: Iterable[str] = CONTEXT_COLUMNS,
) -> pd.DataFrame:
    """
    Deduplicate rows of the given parameters while ignoring the test context.

    Rows of those parameters share a grouping key of 0, every other row gets
    its own position as key, so only the context-free rows can collide.
    """
    context_columns = [c for c in context_columns if c in df.columns]
    parameters = list(parameters)
    require_columns(df, ["PARAMETER"])
    param = df["PARAMETER"].astype("string").str.upper()
    hit = param.isin([p.upper() for p in parameters]).fillna(False).astype(bool)
    key = np.where(hit, 0, np.arange(1, len(df) + 1))
    subset = [c for c in df.columns if c not in context_columns]
    keyed = df.assign(_collapse_key=key)
    dup = keyed.duplicated(subset=subset + ["_collapse_key"])
    logger.info("Collapsed %d repeated %s rows", int(dup.sum()), "/".join(parameters))
    return df[~dup.to_numpy()]


def collapse_lab_duplicates(df: pd.DataFrame, lab_column: str = LAB_COLUMN) -> pd.DataFrame:
    """Keep one of any rows that differ only in the reporting lab."""
    require_columns(df, [lab_column])
    subset = [c for c in df.columns if c != lab_column]
    dup = df.duplicated(subset=subset)
    logger.info("Collapsed %d rows differing only in %s", int(dup.sum()), lab_column)
    return df[~dup]


def filter_exceptions(
    df: pd.DataFrame, exclusions: Iterable[Exclusion] = DEFAULT_EXCLUSIONS
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """
    First-stage exclusions, the MOISTURE/LIPIDS collapse, the lab collapse,
    then last-stage exclusions. Order matters: a collapse keeps the first
    copy, which a last-stage exclusion may then remove.
    """
    exclusions = list(exclusions)
    n = len(df)
    kept, dropped_first = apply_exclusions(df, [ex for ex in exclusions if ex.stage == "first"])
    kept = collapse_context_free_parameters(kept)
    kept = collapse_lab_duplicates(kept)
    kept, dropped_last = apply_exclusions(kept, [ex for ex in exclusions if ex.stage == "last"])
    kept = kept.reset_index(drop=True)
    parts = [d for d in (dropped_first, dropped_last) if len(d)]
    dropped = pd.concat(parts) if parts else dropped_first
    logger.info("Exception filter: %d -> %d rows", n, len(kept))
    return kept, dropped
