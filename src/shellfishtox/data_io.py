from __future__ import annotations
import logging
from pathlib import Path
import pandas as pd
from .config import INTERIM

logger = logging.getLogger(__name__)


def save_interim(df: pd.DataFrame, name: str, folder: str | Path | None = None) -> Path:
    """
    Save a DataFrame to the interim data directory as a Parquet file.

    Args:
        df: The DataFrame to save
        name: The filename (without path) for the saved file
        folder: Directory to write into (default: config.INTERIM)

    Returns:
        Path: The full path to the saved file
    """
    folder = Path(folder or INTERIM)
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / name
    df.to_parquet(path, index=False)
    return path


def load_interim(name: str, folder: str | Path | None = None) -> pd.DataFrame:
    return pd.read_parquet(Path(folder or INTERIM) / name)


def write_csv(df: pd.DataFrame, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False, date_format="%Y-%m-%d")
    logger.info("Wrote %d rows to %s", len(df), path)
    return path


def write_outputs(
    clean: pd.DataFrame,
    metadata: pd.DataFrame,
    data_path: str | Path,
    metadata_path: str | Path,
    dropped: pd.DataFrame | None = None,
    dropped_path: str | Path | None = None,
) -> list[Path]:
    """Write the cleaned table, its column descriptions and, if given, the excluded records."""
    written = [write_csv(clean, data_path), write_csv(metadata, metadata_path)]
    if dropped is not None and dropped_path is not None:
        written.append(write_csv(dropped, dropped_path))
    return written
