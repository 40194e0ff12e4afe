from __future__ import annotations

from typing import Tuple

import numpy as np
import pandas as pd
from statsmodels.stats.weightstats import DescrStatsW

from src.data.validate import assert_required_columns

SUMMARY_COLUMNS = [
    "Scenario",
    "Timestep",
    "StateClassID",
    "MeanAmount",
    "SdAmount",
    "NRealizations",
    "CI95Low",
    "CI95High",
]


def _mean_ci(values: np.ndarray, alpha: float = 0.05) -> Tuple[float, float]:
    """t-interval on the mean across realizations; NaN with fewer than two."""

    if values.size < 2:
        return np.nan, np.nan
    if np.all(values == values[0]):
        return float(values[0]), float(values[0])
    ds = DescrStatsW(values.astype(float))
    low, high = ds.tconfint_mean(alpha=alpha)
    return float(low), float(high)


def realization_totals(df: pd.DataFrame, scenario_col: str = "ParentName") -> pd.DataFrame:
    """Amount per scenario, realization, timestep and state class.

    Rows of one realization that share a state class (age or stratum
    breakdowns) are added together. A state class with no rows in a
    realization/timestep that has output counts as zero there.
    """

    keys = [scenario_col, "Iteration", "Timestep"]
    assert_required_columns(df, keys + ["StateClassID", "Amount"])
    if df.empty:
        raise ValueError("Output stratum state table is empty.")

    totals = df.groupby(keys + ["StateClassID"], sort=True)["Amount"].sum()
    wide = totals.unstack("StateClassID", fill_value=0.0)
    return wide.reset_index().melt(id_vars=keys, var_name="StateClassID", value_name="Amount")


def summarize_stratum_state(df: pd.DataFrame, scenario_col: str = "ParentName", alpha: float = 0.05) -> pd.DataFrame:
    """Mean area of each state class over realizations, per scenario and timestep."""

    long = realization_totals(df, scenario_col=scenario_col)

    rows = []
    for (scenario, timestep, state_class), g in long.groupby([scenario_col, "Timestep", "StateClassID"], sort=True):
        values = g["Amount"].to_numpy(dtype=float)
        ci_low, ci_high = _mean_ci(values, alpha=alpha)
        rows.append(
            {
                "Scenario": scenario,
                "Timestep": timestep,
                "StateClassID": state_class,
                "MeanAmount": float(values.mean()),
                "SdAmount": float(values.std(ddof=1)) if values.size > 1 else np.nan,
                "NRealizations": int(values.size),
                "CI95Low": ci_low,
                "CI95High": ci_high,
            }
        )

    out = pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
    return out.sort_values(["Scenario", "StateClassID", "Timestep"], kind="mergesort").reset_index(drop=True)
