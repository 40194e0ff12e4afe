from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable, Optional, Union

import pandas as pd

from src.data.validate import assert_known_columns

Rows = Union[str, Mapping, Iterable[Mapping], pd.DataFrame]


def list_datasheets(ssim_object, scope: Optional[str] = None) -> pd.DataFrame:
    """Summary of the datasheets visible from a library, project or scenario.

    With ``scope`` set ("library", "project" or "scenario") only the sheets of
    that scope are kept.
    """

    summary = ssim_object.datasheets()
    if scope is None:
        return summary

    scope_cols = [c for c in summary.columns if str(c).lower() == "scope"]
    if not scope_cols:
        raise ValueError(f"Datasheet summary has no scope column: {list(summary.columns)}")
    col = scope_cols[0]
    mask = summary[col].astype(str).str.lower() == scope.lower()
    return summary.loc[mask].reset_index(drop=True)


def empty_datasheet(ssim_object, name: str) -> pd.DataFrame:
    return ssim_object.datasheets(name=name, optional=True, empty=True)


def _rows_to_frame(rows: Rows, columns: list) -> pd.DataFrame:
    if isinstance(rows, pd.DataFrame):
        return rows.copy()
    if isinstance(rows, str):
        if columns and "Name" not in columns:
            raise ValueError(f"A bare value can only be added to a sheet with a Name column; columns are {columns}")
        return pd.DataFrame([{"Name": rows}])
    if isinstance(rows, Mapping):
        return pd.DataFrame([dict(rows)])
    return pd.DataFrame([dict(r) for r in rows])


def add_rows(frame: pd.DataFrame, rows: Rows) -> pd.DataFrame:
    """Append records to a datasheet frame.

    Columns a record leaves out stay missing. Columns the sheet does not have
    are rejected, unless the frame carries no schema at all.
    """

    columns = frame.columns.astype(str).tolist()
    new = _rows_to_frame(rows, columns)
    if columns:
        assert_known_columns(new, columns)
    else:
        columns = new.columns.astype(str).tolist()

    new = new.reindex(columns=columns)
    if frame.empty:
        return new.reset_index(drop=True)
    return pd.concat([frame, new], ignore_index=True)


def save_datasheet(ssim_object, name: str, data: Union[pd.DataFrame, Mapping]) -> pd.DataFrame:
    if isinstance(data, Mapping):
        data = pd.DataFrame([dict(data)])
    if not isinstance(data, pd.DataFrame):
        raise ValueError(f"Datasheet {name} must be a DataFrame or a mapping, got {type(data).__name__}")
    if data.shape[1] == 0:
        raise ValueError(f"Datasheet {name} has no columns.")

    ssim_object.save_datasheet(name=name, data=data)
    return data


def load_datasheet(ssim_object, name: str, full_paths: bool = False) -> pd.DataFrame:
    if full_paths:
        return ssim_object.datasheets(name=name, show_full_paths=True)
    return ssim_object.datasheets(name=name)


def compare_datasheet(scenarios: Iterable, name: str) -> pd.DataFrame:
    """Stack one datasheet across scenarios, tagged with the scenario id and name."""

    frames = []
    for scenario in scenarios:
        df = scenario.datasheets(name=name).copy()
        df.insert(0, "ScenarioName", scenario.name)
        df.insert(0, "ScenarioID", int(scenario.sid))
        frames.append(df)
    if not frames:
        raise ValueError("No scenarios given to compare.")
    return pd.concat(frames, ignore_index=True)
