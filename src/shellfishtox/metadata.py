from __future__ import annotations

import pandas as pd

from .errors import MetadataMismatchError
from .units import CONVERTED_COLUMNS

# raw or derived name -> published name; also fixes the published column order
RENAME_MAP: dict[str, str] = {
    "CODE": "code",
    "SITE SEQ": "site_seq",
    "SITE_CODE": "site_code",
    "SITE_NAME": "site_name",
    "EGAD_SITE_NAME": "site",
    "CURRENT_SAMPLE_POINT_NAME": "sample_point",
    "SAMPLE_ID": "sample_id",
    "SAMPLE_DATE": "sample_date",
    "YEAR": "year",
    "ANALYSIS_LAB": "lab",
    "PREP_METHOD": "prep_method",
    "TEST": "method",
    "CAS_NO": "cas_no",
    "PARAMETER": "parameter",
    "PARAMETER_QUALIFIER": "parameter_qualifier",
    "CONCENTRATION": "concentration",
    "UNITS_VALUE": "units",
    "RL": "rl",
    "MDL": "mdl",
    "DETECTION_LIMIT_TYPE": "dl_type",
    "WEIGHT_BASIS": "weight_basis",
    "LAB_QUALIFIER": "lab_qualifier",
    "VALIDATION_QUALIFIER": "qualifier",
    "QUALIFIER_DESCRIPTION": "qual_description",
}

COLUMN_DESCRIPTIONS: dict[str, str] = {
    "code": "Unique sample code: sample id, year and date rank within that year",
    "site_seq": "EGAD sequence number for the sampling site",
    "site_code": "Short site code, the last part of the EGAD site name",
    "site_name": "Descriptive site name, the first part of the EGAD site name",
    "site": "Full EGAD site name as reported",
    "sample_point": "Sample point name within the site",
    "sample_id": "Sample id as reported, spaces replaced by underscores",
    "sample_date": "Date the shellfish were collected",
    "year": "Calendar year of collection",
    "lab": "Laboratory that ran the analysis",
    "prep_method": "Sample preparation method",
    "method": "Analytical test method",
    "cas_no": "CAS registry number of the parameter",
    "parameter": "Chemical or physical parameter measured",
    "parameter_qualifier": "Qualifier on the parameter name",
    "concentration": "Reported value, in the reported units",
    "units": "Units of the reported value and limits",
    "rl": "Reporting limit, in the reported units",
    "mdl": "Method detection limit, in the reported units",
    "dl_type": "Type of detection limit reported",
    "weight_basis": "Basis of the concentration: WET, DRY or LIP (lipid)",
    "lab_qualifier": "Data qualifier assigned by the lab",
    "qualifier": "Data qualifier assigned during validation",
    "qual_description": "Text description of the validation qualifier",
    "conc_ugg": "Concentration in ug/g; empty when units do not convert",
    "conc_ngg": "Concentration in ng/g; empty when units do not convert",
    "rl_ugg": "Reporting limit in ug/g; empty when units do not convert",
    "rl_ngg": "Reporting limit in ng/g; empty when units do not convert",
}


def rename_columns(df: pd.DataFrame, mapping: dict[str, str] = RENAME_MAP) -> pd.DataFrame:
    """Rename to the published schema and put columns in its order; unknown columns go last."""
    out = df.rename(columns=mapping)
    order = [c for c in list(mapping.values()) + CONVERTED_COLUMNS if c in out.columns]
    rest = [c for c in out.columns if c not in order]
    return out[order + rest]


def build_metadata_table(df: pd.DataFrame, descriptions: dict[str, str] = COLUMN_DESCRIPTIONS) -> pd.DataFrame:
    """
    One (Column, Description) row per column of ``df``, in ``df``'s order.

    Raises:
        MetadataMismatchError: If a column has no description or a
            description names a column that is not in ``df``
    """
    cols = [str(c) for c in df.columns]
    undocumented = [c for c in cols if c not in descriptions]
    stale = [c for c in descriptions if c not in cols]
    if undocumented or stale:
        raise MetadataMismatchError(undocumented, stale)
    return pd.DataFrame({"Column": cols, "Description": [descriptions[c] for c in cols]})
