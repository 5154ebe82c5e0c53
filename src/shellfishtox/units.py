"""
Rebase concentrations to ug/g and ng/g.

Each unit label maps to the power of ten that turns a value in that unit into
grams per gram, so ``value * 10**(6 + e)`` is ug/g and ``value * 10**(9 + e)``
is ng/g.
"""
from __future__ import annotations
import logging

import numpy as np
import pandas as pd

from .cleaning import require_columns
from .errors import UnmappedUnitError

logger = logging.getLogger(__name__)

UNIT_EXPONENTS: dict[str, int] = {
    "G/G": 0,
    "MG/G": -3,
    "UG/G": -6,
    "NG/G": -9,
    "PG/G": -12,
    "G/KG": -3,
    "MG/KG": -6,
    "UG/KG": -9,
    "NG/KG": -12,
    "PG/KG": -15,
}

# labels that are not mass fractions of tissue; left unconverted on purpose
NON_MASS_UNITS = frozenset({"%", "PERCENT", "SU"})

CONVERTED_COLUMNS = ["conc_ugg", "conc_ngg", "rl_ugg", "rl_ngg"]


def _label(units: pd.Series) -> pd.Series:
    return units.astype("string").str.strip().str.upper()


def unit_exponents(units: pd.Series, table: dict[str, int] = UNIT_EXPONENTS) -> pd.Series:
    """Exponent for each label as float; NaN where the label is not in the table."""
    upper = {k.upper(): v for k, v in table.items()}
    return _label(units).map(upper).astype(float)


def unmapped_units(df: pd.DataFrame, units_col: str = "UNITS_VALUE", table: dict[str, int] = UNIT_EXPONENTS) -> pd.Series:
    """Row counts per unit label that has no exponent and is not a known non-mass unit."""
    labels = _label(df[units_col])
    upper = {k.upper() for k in table}
    gap = labels.notna() & ~labels.isin(upper) & ~labels.isin(NON_MASS_UNITS)
    return df.loc[gap.fillna(False).astype(bool), units_col].value_counts()


def normalize_units(
    df: pd.DataFrame,
    units_col: str = "UNITS_VALUE",
    conc_col: str = "CONCENTRATION",
    rl_col: str = "RL",
    table: dict[str, int] = UNIT_EXPONENTS,
    strict: bool = False,
) -> pd.DataFrame:
    """
    Add conc_ugg, conc_ngg, rl_ugg and rl_ngg.

    Rows whose unit label is not in ``table`` get nulls in all four columns
    and are otherwise untouched. Unexpected labels are counted and logged;
    with ``strict=True`` they raise instead.

    Raises:
        UnmappedUnitError: strict mode and at least one unexpected label
    """
    require_columns(df, [units_col, conc_col, rl_col])
    gaps = unmapped_units(df, units_col, table)
    if len(gaps):
        if strict:
            raise UnmappedUnitError(gaps.to_dict())
        logger.warning(
            "No conversion for %d rows; units: %s",
            int(gaps.sum()), ", ".join(f"{u} ({n})" for u, n in gaps.items()),
        )

    df = df.copy()
    e = unit_exponents(df[units_col], table).to_numpy()
    conc = pd.to_numeric(df[conc_col], errors="coerce").astype(float).to_numpy()
    rl = pd.to_numeric(df[rl_col], errors="coerce").astype(float).to_numpy()
    to_ugg = np.power(10.0, 6 + e)
    to_ngg = np.power(10.0, 9 + e)
    df["conc_ugg"] = conc * to_ugg
    df["conc_ngg"] = conc * to_ngg
    df["rl_ugg"] = rl * to_ugg
    df["rl_ngg"] = rl * to_ngg
    return df
