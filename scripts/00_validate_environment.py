import argparse
import sys

from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.config import (  # noqa: E402
    LOGS_DIR,
    RAW_DIR,
    SAMPLE_RASTER_CELL_SIZE,
    SAMPLE_RASTER_CRS,
    SAMPLE_RASTER_SEED,
    SAMPLE_RASTER_SHAPE,
    STACK_PACKAGES,
    SYNCROSIM_PACKAGE,
)
from src.spatial.rasters import INITIAL_CONDITION_FILES, describe_raster, write_initial_conditions  # noqa: E402
from src.utils.logging import run_metadata, write_json  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(description="Check SyncroSim, the ST-Sim package and the workshop input rasters.")
    parser.add_argument("--location", type=Path, default=None, help="SyncroSim install folder (default install when omitted).")
    parser.add_argument("--install-missing", action="store_true", help=f"Install the {SYNCROSIM_PACKAGE} package if absent.")
    parser.add_argument("--raw-dir", type=Path, default=RAW_DIR, help="Folder holding the initial-condition rasters.")
    parser.add_argument(
        "--write-sample-rasters",
        action="store_true",
        help="Write stand-in initial-condition rasters when the workshop .tif files are missing.",
    )
    parser.add_argument("--skip-syncrosim", action="store_true", help="Only check the input rasters.")
    parser.add_argument("--out-json", type=Path, default=LOGS_DIR / "environment_check.json")
    args = parser.parse_args()

    rasters = {key: args.raw_dir / fname for key, fname in INITIAL_CONDITION_FILES.items()}
    missing = [str(p) for p in rasters.values() if not p.exists()]

    if missing and args.write_sample_rasters:
        write_initial_conditions(
            args.raw_dir,
            shape=SAMPLE_RASTER_SHAPE,
            seed=SAMPLE_RASTER_SEED,
            cell_size=SAMPLE_RASTER_CELL_SIZE,
            crs=SAMPLE_RASTER_CRS,
        )
        print(f"Wrote sample initial-condition rasters to {args.raw_dir}")
        missing = [str(p) for p in rasters.values() if not p.exists()]

    info = run_metadata(
        STACK_PACKAGES,
        input_rasters={k: str(v) for k, v in rasters.items()},
        missing_rasters=missing,
        raster_summaries={} if missing else {k: describe_raster(v) for k, v in rasters.items()},
    )

    if not args.skip_syncrosim:
        from src.syncrosim.session import ensure_package, installed_packages, open_session

        session = open_session(args.location)
        installed_now = ensure_package(session, SYNCROSIM_PACKAGE) if args.install_missing else False
        installed = installed_packages(session)
        info["syncrosim_packages"] = installed
        info["stsim_installed"] = SYNCROSIM_PACKAGE in installed
        info["stsim_installed_now"] = installed_now

    write_json(args.out_json, info)
    print(f"Wrote {args.out_json}")

    if missing:
        raise SystemExit(f"Missing input rasters: {missing}. Re-run with --write-sample-rasters for a stand-in set.")
    if not args.skip_syncrosim and not info["stsim_installed"]:
        raise SystemExit(f"SyncroSim package '{SYNCROSIM_PACKAGE}' is not installed. Re-run with --install-missing.")


if __name__ == "__main__":
    main()
