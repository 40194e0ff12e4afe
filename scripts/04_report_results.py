from __future__ import annotations

import argparse
import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Optional

_mpl_cache_dir = Path(tempfile.gettempdir()) / "matplotlib"
_mpl_cache_dir.mkdir(parents=True, exist_ok=True)
os.environ.setdefault("MPLCONFIGDIR", str(_mpl_cache_dir))

import pandas as pd
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.config import (  # noqa: E402
    AMOUNT_UNITS,
    FOREST_TYPES,
    OUTPUTS_DIR,
    RASTER_TIMESTEP,
    STACK_PACKAGES,
    TABLES_DIR,
)
from src.reporting.figures import plot_raster, plot_state_class_trajectories, save_figure  # noqa: E402
from src.reporting.summary import summarize_stratum_state  # noqa: E402
from src.spatial.rasters import read_raster  # noqa: E402
from src.utils.logging import run_metadata, write_json  # noqa: E402


def _default_raster(collect_json: Path) -> Optional[Path]:
    if not collect_json.exists():
        return None
    record = json.loads(collect_json.read_text(encoding="utf-8"))
    rasters = record.get("rasters") or []
    return Path(rasters[0]) if rasters else None


def main() -> None:
    parser = argparse.ArgumentParser(description="Summarise ST-Sim outputs over realizations and draw the workshop figures.")
    parser.add_argument("--input", type=Path, default=TABLES_DIR / "output_stratum_state.parquet", help="From 03_collect_results.py.")
    parser.add_argument("--raster", type=Path, default=None, help="State class raster to map (default: first exported realization).")
    parser.add_argument("--timestep", type=int, default=RASTER_TIMESTEP, help="Timestep of the mapped raster (title only).")
    parser.add_argument("--outdir", type=Path, default=OUTPUTS_DIR, help="Output directory (default: outputs/).")
    parser.add_argument(
        "--collect-json",
        type=Path,
        default=None,
        help="Record written by 03_collect_results.py (default: <outdir>/logs/collect_results.json).",
    )
    args = parser.parse_args()

    if not args.input.exists():
        raise SystemExit(f"Output table not found: {args.input}. Run scripts/03_collect_results.py first.")

    tables_dir = args.outdir / "tables"
    figures_dir = args.outdir / "figures"
    logs_dir = args.outdir / "logs"
    tables_dir.mkdir(parents=True, exist_ok=True)
    figures_dir.mkdir(parents=True, exist_ok=True)

    stratum_state = pd.read_parquet(args.input)
    summary = summarize_stratum_state(stratum_state)
    summary_csv = tables_dir / "stratum_state_summary.csv"
    summary.to_csv(summary_csv, index=False)

    fig = plot_state_class_trajectories(summary, ylabel=f"Area ({AMOUNT_UNITS})")
    trajectories_png = figures_dir / "state_class_trajectories.png"
    save_figure(fig, trajectories_png)
    plt.close(fig)

    raster = args.raster or _default_raster(args.collect_json or logs_dir / "collect_results.json")
    raster_png = None
    if raster is not None:
        data, _profile = read_raster(raster)
        class_names = {i + 1: name for i, name in enumerate(FOREST_TYPES)}
        fig = plot_raster(data, title=f"State class, timestep {args.timestep} (first realization)", categories=class_names)
        raster_png = figures_dir / f"state_class_ts{args.timestep}.png"
        save_figure(fig, raster_png)
        plt.close(fig)
    else:
        print("No state class raster given or exported; skipping the map.")

    write_json(
        logs_dir / "report_results.json",
        run_metadata(
            STACK_PACKAGES,
            input=str(args.input),
            scenarios=sorted(summary["Scenario"].unique().tolist()),
            realizations=int(summary["NRealizations"].max()),
            summary_csv=str(summary_csv),
            figures=[str(trajectories_png)] + ([str(raster_png)] if raster_png else []),
            raster=str(raster) if raster else None,
        ),
    )

    print(f"Wrote {summary_csv}")
    print(f"Wrote {trajectories_png}")
    if raster_png:
        print(f"Wrote {raster_png}")


if __name__ == "__main__":
    main()
