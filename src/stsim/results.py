from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pandas as pd

from src.data.validate import assert_required_columns
from src.syncrosim.datasheets import load_datasheet

STRATUM_STATE_SHEET = "stsim_OutputStratumState"
SPATIAL_STATE_SHEET = "stsim_OutputSpatialState"
STRATUM_STATE_COLUMNS = ["Iteration", "Timestep", "StateClassID", "Amount"]


def collect_stratum_state(results: Iterable, parent_names: dict) -> pd.DataFrame:
    """Output stratum state of several result scenarios in one table.

    ``parent_names`` maps a result scenario id to the name of the scenario it
    was run from; rows are tagged with ScenarioID and ParentName.
    """

    frames = []
    for result in results:
        result_id = int(result.sid)
        if result_id not in parent_names:
            raise ValueError(f"Unknown parent scenario for result scenario {result_id}")
        df = load_datasheet(result, STRATUM_STATE_SHEET).copy()
        assert_required_columns(df, STRATUM_STATE_COLUMNS)
        df.insert(0, "ParentName", parent_names[result_id])
        df.insert(0, "ScenarioID", result_id)
        frames.append(df)

    if not frames:
        raise ValueError("No result scenarios given.")
    return pd.concat(frames, ignore_index=True)


def spatial_state_paths(result, timestep: int) -> List[Path]:
    """State class raster files of one timestep, one per realization, by iteration."""

    sheet = load_datasheet(result, SPATIAL_STATE_SHEET, full_paths=True)
    assert_required_columns(sheet, ["Iteration", "Timestep", "Filename"])

    at_timestep = sheet.loc[sheet["Timestep"] == timestep].sort_values("Iteration", kind="mergesort")
    if at_timestep.empty:
        available = sorted(sheet["Timestep"].dropna().unique().tolist())
        raise ValueError(f"No state class rasters at timestep {timestep}; available timesteps: {available}")
    return [Path(p) for p in at_timestep["Filename"].tolist()]
