from __future__ import annotations
from typing import Optional

import pandas as pd


def plot_parameter_by_year(
    df: pd.DataFrame,
    parameter: str,
    ax=None,
    ftal_ugg: Optional[float] = None,
    basis: str = "WET",
):
    """
    Scatter ``conc_ugg`` against year for one parameter, one series per site.
    Rows without a converted concentration are left out. Draws the FTAL as a
    horizontal line when given. Returns the axes.
    """
    import matplotlib.pyplot as plt

    sel = df[
        df["parameter"].astype("string").str.upper().eq(parameter.upper()).fillna(False)
        & df["weight_basis"].astype("string").str.upper().eq(basis.upper()).fillna(False)
        & df["conc_ugg"].notna()
    ]
    if ax is None:
        _, ax = plt.subplots(figsize=(7, 4))
    for site, g in sel.groupby("site_code", dropna=False):
        ax.scatter(g["year"].astype(float), g["conc_ugg"], s=14, alpha=0.8,
                   label="unknown" if pd.isna(site) else str(site))
    if ftal_ugg is not None:
        ax.axhline(ftal_ugg, color="red", linestyle="--", linewidth=1, label="FTAL")
    ax.set_xlabel("Year")
    ax.set_ylabel(f"{parameter} (ug/g {basis.lower()})")
    ax.set_title(parameter)
    if len(sel) or ftal_ugg is not None:
        ax.legend(fontsize=7, frameon=False)
    return ax
