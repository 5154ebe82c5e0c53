from __future__ import annotations
import logging
from typing import Iterable

import pandas as pd

from .config import PipelineConfig, INTERIM_PARQUET
from .ingest import read_toxics_raw
from .cleaning import drop_exact_duplicates, prune_columns
from .identifiers import synthesize_identifiers
from .exclusions import DEFAULT_EXCLUSIONS, Exclusion, filter_exceptions, read_exclusions
from .units import normalize_units
from .metadata import rename_columns, build_metadata_table
from .validators import assert_clean
from .data_io import save_interim, write_outputs

logger = logging.getLogger(__name__)


def configure_logging(level: int | str = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def clean_toxics(
    raw: pd.DataFrame,
    exclusions: Iterable[Exclusion] = DEFAULT_EXCLUSIONS,
    strict_units: bool = False,
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """
    Run every cleaning step on a loaded toxics table.

    Returns:
        (clean, dropped): the renamed, unit-converted table and the rows
        removed by the exclusion list, with their reasons
    """
    df = drop_exact_duplicates(raw)
    df = prune_columns(df)
    df = synthesize_identifiers(df)
    df, dropped = filter_exceptions(df, exclusions)
    df = normalize_units(df, strict=strict_units)
    return rename_columns(df), rename_columns(dropped)


def run_pipeline(config: PipelineConfig | None = None) -> pd.DataFrame:
    config = config or PipelineConfig()
    exclusions = (
        read_exclusions(config.exclusions_csv) if config.exclusions_csv else DEFAULT_EXCLUSIONS
    )

    raw = read_toxics_raw(config.toxics_xlsx, config.sheet_name)
    clean, dropped = clean_toxics(raw, exclusions, strict_units=config.strict_units)
    clean = assert_clean(clean)
    metadata = build_metadata_table(clean)

    if config.write_interim:
        save_interim(clean, INTERIM_PARQUET, config.interim_dir)
    write_outputs(
        clean, metadata,
        config.clean_csv, config.metadata_csv,
        dropped=dropped, dropped_path=config.excluded_csv,
    )
    logger.info("Pipeline finished: %d rows, %d excluded", len(clean), len(dropped))
    return clean
