import pandas as pd
import pytest

from shellfishtox.errors import SchemaMismatchError
from shellfishtox.ingest import RAW_SCHEMA, read_parameter_classes, read_site_locations, read_toxics_raw

def _write_workbook(path, df, sheet="Mussels Data"):
    with pd.ExcelWriter(path, engine="openpyxl") as xl:
        df.to_excel(xl, sheet_name=sheet, index=False)
        pd.DataFrame({"note": ["cover sheet"]}).to_excel(xl, sheet_name="Notes", index=False)

def test_read_toxics_raw_applies_kinds(tmp_path, raw_factory):
    path = tmp_path / "toxics.xlsx"
    _write_workbook(path, raw_factory({}, {"CONCENTRATION": "12.5", "SAMPLE_COMMENT": "dup"}))
    df = read_toxics_raw(path)
    assert list(df.columns) == [name for name, _ in RAW_SCHEMA]
    assert len(df) == 2
    assert df["CONCENTRATION"].dtype == float
    assert df.loc[1, "CONCENTRATION"] == 12.5
    assert pd.api.types.is_datetime64_any_dtype(df["SAMPLE_DATE"])
    assert isinstance(df["PARAMETER"].dtype, pd.StringDtype)

def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_toxics_raw(tmp_path / "nope.xlsx")

def test_missing_sheet(tmp_path, raw_factory):
    path = tmp_path / "toxics.xlsx"
    _write_workbook(path, raw_factory({}), sheet="Other")
    with pytest.raises(SchemaMismatchError):
        read_toxics_raw(path)

def test_wrong_width(tmp_path, raw_factory):
    path = tmp_path / "toxics.xlsx"
    _write_workbook(path, raw_factory({}).iloc[:, :-1])
    with pytest.raises(SchemaMismatchError, match="Expected 40 columns"):
        read_toxics_raw(path)

def test_read_parameter_classes(tmp_path):
    path = tmp_path / "classes.xlsx"
    pd.DataFrame({
        "PARAMETER": ["MERCURY ", "PCB-118", "PCB-118", None],
        "Class": ["Metal", "PCB", "PCB", "?"],
        "Notes": [None, None, None, None],
    }).to_excel(path, index=False)
    out = read_parameter_classes(path)
    assert list(out.columns) == ["PARAMETER", "Class"]
    assert list(out["PARAMETER"]) == ["MERCURY", "PCB-118"]

def test_read_site_locations_skips_columns(tmp_path):
    path = tmp_path / "sites.csv"
    pd.DataFrame({
        "SiteCode": ["CBMBBH"],
        "Site Description": ["long text"],
        "Latitude": [43.7],
        "Longitude": [-70.1],
        "Datum": ["NAD83"],
    }).to_csv(path, index=False)
    out = read_site_locations(path)
    assert list(out.columns) == ["SiteCode", "Latitude", "Longitude"]
