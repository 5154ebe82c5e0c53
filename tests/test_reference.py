import numpy as np
import pandas as pd

from shellfishtox.reference import attach_parameter_classes, attach_site_locations, flag_exceedances, read_thresholds


def _clean(**cols):
    base = {
        "parameter": ["MERCURY", "MERCURY", "MERCURY", "LEAD"],
        "weight_basis": ["WET", "WET", "DRY", "WET"],
        "conc_ugg": [0.5, np.nan, 0.5, 0.1],
        "site_code": ["CBMBBH", "CBMBBH", "CBFROR", "CBFROR"],
    }
    base.update(cols)
    df = pd.DataFrame(base)
    for c in ("parameter", "weight_basis", "site_code"):
        df[c] = df[c].astype("string")
    return df


def test_flag_exceedances_skips_nulls_and_other_bases():
    out = flag_exceedances(_clean(), {"mercury": 0.2})
    assert out.loc[0, "exceeds_ftal"] == True
    assert pd.isna(out.loc[1, "exceeds_ftal"])
    assert pd.isna(out.loc[2, "exceeds_ftal"])
    assert pd.isna(out.loc[3, "exceeds_ftal"])
    assert out.loc[0, "ftal_ugg"] == 0.2


def test_read_thresholds(tmp_path):
    path = tmp_path / "ftal.csv"
    pd.DataFrame({"parameter": ["Mercury", "PCBs", None], "ftal_ugg": [0.2, 0.011, 1.0]}).to_csv(path, index=False)
    assert read_thresholds(path) == {"MERCURY": 0.2, "PCBS": 0.011}


def test_attach_parameter_classes():
    classes = pd.DataFrame({"PARAMETER": ["MERCURY"], "Class": ["Metal"]})
    out = attach_parameter_classes(_clean(), classes)
    assert len(out) == 4
    assert list(out["class"].isna()) == [False, False, False, True]


def test_attach_site_locations():
    sites = pd.DataFrame({"SiteCode": ["CBMBBH"], "Latitude": [43.7], "Longitude": [-70.1]})
    out = attach_site_locations(_clean(), sites)
    assert out.loc[0, "Latitude"] == 43.7
    assert out["Latitude"].isna().sum() == 2
