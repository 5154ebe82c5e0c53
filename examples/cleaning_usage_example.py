"""
Usage example for the shellfish toxics cleaning pipeline.

Runs the cleaning steps on the raw workbook, then joins the reference
tables and plots mercury by year against its action level.
"""

import sys
from pathlib import Path

# Add the src directory to path
sys.path.append('../src')
from shellfishtox.config import PipelineConfig
from shellfishtox.ingest import read_parameter_classes, read_site_locations
from shellfishtox.pipeline import configure_logging, run_pipeline
from shellfishtox.reference import attach_parameter_classes, attach_site_locations, flag_exceedances, read_thresholds
from shellfishtox.plots import plot_parameter_by_year


def usage_example(root="..", parameter="MERCURY"):
    configure_logging()
    cfg = PipelineConfig.from_root(root, write_interim=True)
    if not Path(cfg.toxics_xlsx).exists():
        print(f"Error: raw workbook not found at {cfg.toxics_xlsx}")
        return

    print("1. Cleaning raw toxics data...")
    clean = run_pipeline(cfg)
    print(f"   {len(clean)} rows written to {cfg.clean_csv}")

    print("2. Joining reference tables...")
    if Path(cfg.parameter_classes_xlsx).exists():
        clean = attach_parameter_classes(clean, read_parameter_classes(cfg.parameter_classes_xlsx))
    if Path(cfg.site_locations_csv).exists():
        clean = attach_site_locations(clean, read_site_locations(cfg.site_locations_csv))

    thresholds = {}
    if Path(cfg.thresholds_csv).exists():
        thresholds = read_thresholds(cfg.thresholds_csv)
        clean = flag_exceedances(clean, thresholds)
        print(f"   {int(clean['exceeds_ftal'].sum())} results above their FTAL")

    print(f"3. Plotting {parameter}...")
    import matplotlib.pyplot as plt
    ax = plot_parameter_by_year(clean, parameter, ftal_ugg=thresholds.get(parameter))
    ax.figure.savefig(Path(cfg.output_dir) / f"{parameter.lower()}_by_year.png", dpi=150)
    plt.close(ax.figure)


if __name__ == "__main__":
    usage_example()
