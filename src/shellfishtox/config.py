from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
DATA = ROOT / "data"
RAW = DATA / "raw"
INTERIM = DATA / "interim"
PROC = DATA / "processed"

# raw inputs (adjust to yours)
RAW_TOXICS_XLSX = RAW / "CascoBay_shellfish_toxics.xlsx"
RAW_SHEET_NAME = "Mussels Data"
PARAMETER_CLASSES_XLSX = RAW / "parameter_classes.xlsx"
SITE_LOCATIONS_CSV = RAW / "sample_sites.csv"
THRESHOLDS_CSV = RAW / "ftal_thresholds.csv"

# outputs
CLEAN_CSV = "shellfish_toxics_clean.csv"
METADATA_CSV = "shellfish_toxics_metadata.csv"
EXCLUDED_CSV = "shellfish_toxics_excluded.csv"
INTERIM_PARQUET = "toxics_clean.parquet"


@dataclass
class PipelineConfig:
    """Explicit input/output locations for one pipeline run."""
    toxics_xlsx: Path = RAW_TOXICS_XLSX
    sheet_name: str = RAW_SHEET_NAME
    parameter_classes_xlsx: Path = PARAMETER_CLASSES_XLSX
    site_locations_csv: Path = SITE_LOCATIONS_CSV
    thresholds_csv: Path = THRESHOLDS_CSV
    output_dir: Path = PROC
    interim_dir: Path = INTERIM
    exclusions_csv: Path | None = None
    strict_units: bool = False
    write_interim: bool = False

    @classmethod
    def from_root(cls, root: str | Path, **overrides) -> "PipelineConfig":
        root = Path(root)
        data = root / "data"
        kwargs = dict(
            toxics_xlsx=data / "raw" / RAW_TOXICS_XLSX.name,
            parameter_classes_xlsx=data / "raw" / PARAMETER_CLASSES_XLSX.name,
            site_locations_csv=data / "raw" / SITE_LOCATIONS_CSV.name,
            thresholds_csv=data / "raw" / THRESHOLDS_CSV.name,
            output_dir=data / "processed",
            interim_dir=data / "interim",
        )
        kwargs.update(overrides)
        return cls(**kwargs)

    @property
    def clean_csv(self) -> Path:
        return Path(self.output_dir) / CLEAN_CSV

    @property
    def metadata_csv(self) -> Path:
        return Path(self.output_dir) / METADATA_CSV

    @property
    def excluded_csv(self) -> Path:
        return Path(self.output_dir) / EXCLUDED_CSV
