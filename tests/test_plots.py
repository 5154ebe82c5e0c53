import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from shellfishtox.plots import plot_parameter_by_year


def test_plot_parameter_by_year_one_series_per_site():
    df = pd.DataFrame({
        "parameter": pd.Series(["MERCURY"] * 3 + ["LEAD"], dtype="string"),
        "weight_basis": pd.Series(["WET"] * 4, dtype="string"),
        "site_code": pd.Series(["A", "B", "B", "A"], dtype="string"),
        "year": pd.Series([2003, 2007, 2009, 2003], dtype="Int64"),
        "conc_ugg": [0.1, 0.2, np.nan, 0.4],
    })
    ax = plot_parameter_by_year(df, "mercury", ftal_ugg=0.2)
    assert len(ax.collections) == 2
    assert len(ax.lines) == 1
    plt.close(ax.figure)
