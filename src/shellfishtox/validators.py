from __future__ import annotations
import pandas as pd
import pandera as pa
from pandera import Column, DataFrameSchema, Check


def _one_sample_per_code(df: pd.DataFrame) -> bool:
    keyed = df.dropna(subset=["code"])
    per_code = keyed.groupby("code")[["sample_id", "year", "sample_date"]].nunique(dropna=False)
    return bool((per_code <= 1).all().all())


_nonneg = Check.ge(0, ignore_na=True)

schema_clean = DataFrameSchema(
    {
        "code": Column("string", nullable=False),
        "sample_id": Column("string", nullable=False),
        "sample_date": Column(pa.DateTime, nullable=False, coerce=True),
        "year": Column("Int64", nullable=False),
        "parameter": Column("string", nullable=False),
        "concentration": Column(float, nullable=True),
        "units": Column("string", nullable=True),
        "weight_basis": Column("string", nullable=True),
        "conc_ugg": Column(float, _nonneg, nullable=True),
        "conc_ngg": Column(float, _nonneg, nullable=True),
        "rl_ugg": Column(float, _nonneg, nullable=True),
        "rl_ngg": Column(float, _nonneg, nullable=True),
    },
    checks=[Check(_one_sample_per_code, element_wise=False, error="code maps to more than one sample")],
    strict=False,
)


def assert_clean(df: pd.DataFrame) -> pd.DataFrame:
    return schema_clean.validate(df, lazy=True)
