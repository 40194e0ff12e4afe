from __future__ import annotations

from typing import Dict, Iterable, Tuple

import pandas as pd


def run_scenarios(scenarios: Iterable, jobs: int = 7) -> Tuple[pd.DataFrame, Dict[int, object]]:
    """Run each scenario in SyncroSim and collect the result scenarios.

    Realizations are spread over ``jobs`` parallel jobs by SyncroSim itself.
    Returns a table with one row per result scenario (ScenarioID, ParentID,
    ParentName, ResultName) and the result scenario objects keyed by id.
    """

    if jobs < 1:
        raise ValueError(f"jobs must be a positive integer, got {jobs}")

    rows = []
    results: Dict[int, object] = {}
    for scenario in scenarios:
        result = scenario.run(jobs=jobs)
        result_id = int(result.sid)
        results[result_id] = result
        rows.append(
            {
                "ScenarioID": result_id,
                "ParentID": int(result.parent_id),
                "ParentName": scenario.name,
                "ResultName": result.name,
            }
        )
    return pd.DataFrame(rows, columns=["ScenarioID", "ParentID", "ParentName", "ResultName"]), results


def result_id_for(results: pd.DataFrame, parent) -> int:
    """Result scenario id produced by ``parent`` (a scenario object or its id)."""

    parent_id = int(getattr(parent, "sid", parent))
    matches = results.loc[results["ParentID"] == parent_id, "ScenarioID"].tolist()
    if not matches:
        raise ValueError(f"No result scenario for parent scenario {parent_id}")
    if len(matches) > 1:
        raise ValueError(f"Several result scenarios for parent scenario {parent_id}: {matches}")
    return int(matches[0])
