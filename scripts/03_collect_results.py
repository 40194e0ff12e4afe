from __future__ import annotations

import argparse
import json
import shutil
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.config import (  # noqa: E402
    LIBRARY_FILE,
    LOGS_DIR,
    RASTER_TIMESTEP,
    RASTERS_DIR,
    SCENARIO_HARVEST,
    STACK_PACKAGES,
    TABLES_DIR,
)
from src.stsim.results import collect_stratum_state, spatial_state_paths  # noqa: E402
from src.syncrosim.session import open_library, open_session  # noqa: E402
from src.utils.logging import run_metadata, write_json  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(description="Export ST-Sim result tables and state class rasters from the library.")
    parser.add_argument("--library", type=Path, default=LIBRARY_FILE)
    parser.add_argument("--location", type=Path, default=None, help="SyncroSim install folder (default install when omitted).")
    parser.add_argument("--run-json", type=Path, default=LOGS_DIR / "run_results.json", help="Written by 02_run_scenarios.py.")
    parser.add_argument("--timestep", type=int, default=RASTER_TIMESTEP, help="Timestep of the exported rasters.")
    parser.add_argument("--raster-scenario", default=SCENARIO_HARVEST, help="Parent scenario whose rasters are exported.")
    parser.add_argument("--out-parquet", type=Path, default=TABLES_DIR / "output_stratum_state.parquet")
    parser.add_argument("--raster-dir", type=Path, default=RASTERS_DIR)
    parser.add_argument("--out-json", type=Path, default=LOGS_DIR / "collect_results.json")
    args = parser.parse_args()

    if not args.run_json.exists():
        raise SystemExit(f"Run record not found: {args.run_json}. Run scripts/02_run_scenarios.py first.")
    run_record = json.loads(args.run_json.read_text(encoding="utf-8"))
    parent_names = {int(r["ScenarioID"]): r["ParentName"] for r in run_record["results"]}
    if args.raster_scenario not in run_record["result_ids"]:
        raise SystemExit(f"No result for scenario '{args.raster_scenario}' in {args.run_json}")

    session = open_session(args.location)
    library = open_library(args.library, session)
    results = {sid: library.scenarios(sid=sid) for sid in parent_names}

    stratum_state = collect_stratum_state(results.values(), parent_names)
    args.out_parquet.parent.mkdir(parents=True, exist_ok=True)
    stratum_state.to_parquet(args.out_parquet, index=False)

    raster_result = results[int(run_record["result_ids"][args.raster_scenario])]
    args.raster_dir.mkdir(parents=True, exist_ok=True)
    copied = []
    for src_path in spatial_state_paths(raster_result, args.timestep):
        dst = args.raster_dir / src_path.name
        shutil.copy2(src_path, dst)
        copied.append(str(dst))

    write_json(
        args.out_json,
        run_metadata(
            STACK_PACKAGES,
            library=str(args.library),
            result_scenarios=parent_names,
            stratum_state_rows=int(len(stratum_state)),
            stratum_state_parquet=str(args.out_parquet),
            raster_scenario=args.raster_scenario,
            raster_timestep=args.timestep,
            rasters=copied,
        ),
    )

    print(f"Wrote {args.out_parquet}")
    print(f"Wrote {len(copied)} rasters to {args.raster_dir}")
    print(f"Wrote {args.out_json}")


if __name__ == "__main__":
    main()
