import pandas as pd
import pytest

from shellfishtox.ingest import RAW_SCHEMA, cast_by_kind

DEFAULTS = {
    "SITE SEQ": 70672,
    "EGAD_SITE_NAME": "MIDDLE BAY (MBB) - CBMBBH",
    "CURRENT_SAMPLE_POINT_NAME": "REP 1",
    "SAMPLE_POINT_TYPE": "MARINE",
    "SAMPLE_LOCATION": "WADING",
    "SAMPLE_TYPE": "PHYSICAL",
    "SAMPLE_COLLECTION_METHOD": "HAND",
    "SAMPLE_ID": "CBMBBH REP 1",
    "SAMPLE QC TYPE": "ORIGINAL",
    "SAMPLE_DATE": "2007-10-01",
    "SAMPLED_BY": "DEP",
    "SAMPLE_COMMENT": None,
    "LAB SAMPLE ID": "L1",
    "ANALYSIS_LAB": "AXYS ANALYTICAL SERVICES",
    "ANALYSIS_LAB_SAMPLE_ID": "A1",
    "ANALYSIS_DATE": "2007-12-01",
    "PREP_METHOD": "SW3050B",
    "TEST": "SW6020",
    "CAS_NO": "7439-92-1",
    "PARAMETER": "LEAD",
    "PARAMETER_QUALIFIER": None,
    "PARAMETER FILTERED": "UNFILTERED",
    "CONCENTRATION": 0.5,
    "UNITS_VALUE": "MG/KG",
    "LAB_QUALIFIER": None,
    "VALIDATION_QUALIFIER": None,
    "QUALIFIER_DESCRIPTION": None,
    "RL": 0.05,
    "MDL": 0.01,
    "DETECTION_LIMIT_TYPE": "RL",
    "WEIGHT_BASIS": "WET",
    "DILUTION_FACTOR": 1,
    "TREATMENT": "NONE",
    "METER_CALIBRATED": None,
    "RESULT_TYPE": "TARGET/REGULAR RESULT",
    "RESULT_COMMENT": None,
    "LATITUDE": 43.7,
    "LONGITUDE": -70.1,
    "HORIZONTAL_DATUM": "NAD83",
    "LOCATION_METHOD": "GPS",
}


def make_raw(*rows: dict) -> pd.DataFrame:
    """Typed raw toxics frame; each row overrides DEFAULTS."""
    records = [{**DEFAULTS, **r} for r in rows]
    df = pd.DataFrame(records, columns=[name for name, _ in RAW_SCHEMA])
    return cast_by_kind(df, RAW_SCHEMA)


@pytest.fixture
def raw_factory():
    return make_raw
