import json
import subprocess
import sys
from pathlib import Path

import pandas as pd

from src.spatial.rasters import write_initial_conditions


def _synthetic_stratum_state() -> pd.DataFrame:
    rows = []
    for scenario, harvest in [("Harvest", 1.0), ("No Harvest", 0.0)]:
        for it in range(1, 4):
            for ts in range(0, 4):
                rows.append({"ScenarioID": 9, "ParentName": scenario, "Iteration": it, "Timestep": ts, "StateClassID": "Coniferous", "Amount": 1000.0 - 20 * ts * harvest + it})
                rows.append({"ScenarioID": 9, "ParentName": scenario, "Iteration": it, "Timestep": ts, "StateClassID": "Deciduous", "Amount": 800.0 + 20 * ts * harvest - it})
                rows.append({"ScenarioID": 9, "ParentName": scenario, "Iteration": it, "Timestep": ts, "StateClassID": "Mixed", "Amount": 700.0})
    return pd.DataFrame(rows)


def test_report_results_smoke(tmp_path: Path):
    repo_root = Path(__file__).resolve().parents[1]

    in_parquet = tmp_path / "output_stratum_state.parquet"
    _synthetic_stratum_state().to_parquet(in_parquet, index=False)
    raster = write_initial_conditions(tmp_path / "raw", shape=(12, 12), seed=1)["StateClassFileName"]
    outdir = tmp_path / "outputs"

    cmd = [
        sys.executable,
        str(repo_root / "scripts" / "04_report_results.py"),
        "--input",
        str(in_parquet),
        "--raster",
        str(raster),
        "--outdir",
        str(outdir),
    ]
    subprocess.run(cmd, cwd=repo_root, check=True)

    summary = pd.read_csv(outdir / "tables" / "stratum_state_summary.csv")
    assert len(summary) == 2 * 3 * 4
    assert set(summary["NRealizations"]) == {3}
    mixed = summary.loc[summary["StateClassID"] == "Mixed", "MeanAmount"]
    assert (mixed == 700.0).all()

    harvest_con = summary.loc[(summary["Scenario"] == "Harvest") & (summary["StateClassID"] == "Coniferous")]
    assert harvest_con.sort_values("Timestep")["MeanAmount"].tolist() == [1002.0, 982.0, 962.0, 942.0]

    assert (outdir / "figures" / "state_class_trajectories.png").exists()
    assert (outdir / "figures" / "state_class_ts5.png").exists()

    meta = json.loads((outdir / "logs" / "report_results.json").read_text(encoding="utf-8"))
    assert meta["scenarios"] == ["Harvest", "No Harvest"]
    assert meta["realizations"] == 3


def test_report_results_maps_raster_from_outdir_record(tmp_path: Path):
    repo_root = Path(__file__).resolve().parents[1]

    in_parquet = tmp_path / "output_stratum_state.parquet"
    _synthetic_stratum_state().to_parquet(in_parquet, index=False)
    raster = write_initial_conditions(tmp_path / "raw", shape=(6, 6), seed=2)["StateClassFileName"]
    outdir = tmp_path / "outputs"
    (outdir / "logs").mkdir(parents=True)
    (outdir / "logs" / "collect_results.json").write_text(json.dumps({"rasters": [str(raster)]}), encoding="utf-8")

    cmd = [
        sys.executable,
        str(repo_root / "scripts" / "04_report_results.py"),
        "--input",
        str(in_parquet),
        "--outdir",
        str(outdir),
    ]
    subprocess.run(cmd, cwd=repo_root, check=True)

    assert (outdir / "figures" / "state_class_ts5.png").exists()
    meta = json.loads((outdir / "logs" / "report_results.json").read_text(encoding="utf-8"))
    assert meta["raster"] == str(raster)


def test_validate_environment_writes_sample_rasters(tmp_path: Path):
    repo_root = Path(__file__).resolve().parents[1]
    raw_dir = tmp_path / "raw"
    out_json = tmp_path / "environment_check.json"

    cmd = [
        sys.executable,
        str(repo_root / "scripts" / "00_validate_environment.py"),
        "--skip-syncrosim",
        "--write-sample-rasters",
        "--raw-dir",
        str(raw_dir),
        "--out-json",
        str(out_json),
    ]
    subprocess.run(cmd, cwd=repo_root, check=True)

    for name in ["initial-stratum.tif", "initial-sclass.tif", "initial-age.tif"]:
        assert (raw_dir / name).exists()

    payload = json.loads(out_json.read_text(encoding="utf-8"))
    assert payload["missing_rasters"] == []
    assert payload["raster_summaries"]["StateClassFileName"]["width"] == 50
    assert "stsim_installed" not in payload
