import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import argparse  # noqa: E402

from src.config import (  # noqa: E402
    JOBS,
    LIBRARY_FILE,
    LOGS_DIR,
    PROJECT_NAME,
    SCENARIO_HARVEST,
    SCENARIO_NO_HARVEST,
    STACK_PACKAGES,
)
from src.stsim.run import result_id_for, run_scenarios  # noqa: E402
from src.syncrosim.session import open_library, open_project, open_scenario, open_session  # noqa: E402
from src.utils.logging import run_metadata, write_json  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the Harvest and No Harvest scenarios in SyncroSim.")
    parser.add_argument("--library", type=Path, default=LIBRARY_FILE, help="Library built by 01_build_library.py.")
    parser.add_argument("--location", type=Path, default=None, help="SyncroSim install folder (default install when omitted).")
    parser.add_argument("--jobs", type=int, default=JOBS, help=f"Parallel jobs for the realizations (default: {JOBS}).")
    parser.add_argument("--out-json", type=Path, default=LOGS_DIR / "run_results.json")
    args = parser.parse_args()

    if args.jobs <= 0:
        raise SystemExit("--jobs must be a positive integer.")
    if not args.library.exists():
        raise SystemExit(f"Library not found: {args.library}. Run scripts/01_build_library.py first.")

    session = open_session(args.location)
    project = open_project(open_library(args.library, session), PROJECT_NAME)
    parents = [open_scenario(project, SCENARIO_HARVEST), open_scenario(project, SCENARIO_NO_HARVEST)]

    print(f"Running {[p.name for p in parents]} with {args.jobs} jobs")
    results, _objects = run_scenarios(parents, jobs=args.jobs)

    result_ids = {p.name: result_id_for(results, p) for p in parents}
    payload = run_metadata(
        STACK_PACKAGES,
        library=str(args.library),
        jobs=args.jobs,
        results=results.to_dict(orient="records"),
        result_ids=result_ids,
    )
    write_json(args.out_json, payload)

    for name, sid in result_ids.items():
        print(f"{name}: result scenario {sid}")
    print(f"Wrote {args.out_json}")


if __name__ == "__main__":
    main()
