from __future__ import annotations

import argparse
import os
import sys
import tempfile
from pathlib import Path

_mpl_cache_dir = Path(tempfile.gettempdir()) / "matplotlib"
_mpl_cache_dir.mkdir(parents=True, exist_ok=True)
os.environ.setdefault("MPLCONFIGDIR", str(_mpl_cache_dir))

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.config import (  # noqa: E402
    FOREST_TYPES,
    LIBRARY_FILE,
    OUTPUTS_DIR,
    PROJECT_NAME,
    RAW_DIR,
    SCENARIO_HARVEST,
    SCENARIO_NO_HARVEST,
    STACK_PACKAGES,
    SYNCROSIM_PACKAGE,
)
from src.reporting.figures import plot_raster, save_figure  # noqa: E402
from src.spatial.rasters import INITIAL_CONDITION_FILES, read_raster  # noqa: E402
from src.stsim.definitions import configure_project  # noqa: E402
from src.stsim.scenarios import build_scenarios  # noqa: E402
from src.syncrosim.datasheets import compare_datasheet, list_datasheets  # noqa: E402
from src.syncrosim.session import create_library, open_project, open_session  # noqa: E402
from src.utils.logging import run_metadata, write_json  # noqa: E402


def _plot_initial_conditions(rasters: dict, figures_dir: Path) -> list:
    written = []
    class_names = {i + 1: name for i, name in enumerate(FOREST_TYPES)}
    for key, path in rasters.items():
        data, _profile = read_raster(path)
        categories = class_names if key == "StateClassFileName" else None
        fig = plot_raster(data, title=path.name, categories=categories)
        out = figures_dir / f"{path.stem}.png"
        save_figure(fig, out)
        plt.close(fig)
        written.append(str(out))
    return written


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the ST-Sim library, its definitions and the two workshop scenarios.")
    parser.add_argument("--library", type=Path, default=LIBRARY_FILE, help="Library file to create.")
    parser.add_argument("--location", type=Path, default=None, help="SyncroSim install folder (default install when omitted).")
    parser.add_argument("--raw-dir", type=Path, default=RAW_DIR, help="Folder holding the initial-condition rasters.")
    parser.add_argument("--outdir", type=Path, default=OUTPUTS_DIR, help="Output directory (default: outputs/).")
    args = parser.parse_args()

    rasters = {key: (args.raw_dir / fname).resolve() for key, fname in INITIAL_CONDITION_FILES.items()}
    missing = [str(p) for p in rasters.values() if not p.exists()]
    if missing:
        raise SystemExit(f"Missing input rasters: {missing}. Run scripts/00_validate_environment.py first.")

    tables_dir = args.outdir / "tables"
    figures_dir = args.outdir / "figures"
    logs_dir = args.outdir / "logs"
    tables_dir.mkdir(parents=True, exist_ok=True)

    session = open_session(args.location)
    library = create_library(args.library, session, package=SYNCROSIM_PACKAGE, overwrite=True)
    project = open_project(library, PROJECT_NAME)
    print(f"Opened library {args.library} (project '{PROJECT_NAME}')")

    list_datasheets(project).to_csv(tables_dir / "datasheets_project.csv", index=False)

    project_sheets = configure_project(project)
    print(f"Saved {len(project_sheets)} project datasheets")

    figures = _plot_initial_conditions(rasters, figures_dir)

    scenarios = build_scenarios(project, rasters)
    no_harvest = scenarios[SCENARIO_NO_HARVEST]
    harvest = scenarios[SCENARIO_HARVEST]

    list_datasheets(no_harvest, scope="scenario").to_csv(tables_dir / "datasheets_scenario_scope.csv", index=False)

    targets = compare_datasheet([harvest, no_harvest], "stsim_TransitionTarget")
    targets.to_csv(tables_dir / "transition_targets.csv", index=False)
    print(targets.to_string(index=False))

    meta = run_metadata(
        STACK_PACKAGES,
        library=str(args.library),
        project=PROJECT_NAME,
        project_datasheets=project_sheets,
        scenarios={name: int(s.sid) for name, s in scenarios.items()},
        input_rasters={k: str(v) for k, v in rasters.items()},
        figures=figures,
    )
    write_json(logs_dir / "build_library.json", meta)

    print(f"Wrote {tables_dir / 'transition_targets.csv'}")
    print(f"Wrote {logs_dir / 'build_library.json'}")


if __name__ == "__main__":
    main()
