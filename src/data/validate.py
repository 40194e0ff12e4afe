from typing import Iterable

import pandas as pd


def assert_required_columns(df, required: Iterable[str]) -> None:
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def assert_known_columns(df, allowed: Iterable[str], name: str = "datasheet") -> None:
    allowed = list(allowed)
    unknown = [c for c in df.columns if c not in allowed]
    if unknown:
        raise ValueError(f"Unknown columns for {name}: {unknown}; expected a subset of {allowed}")


def assert_values_in(series: pd.Series, allowed: Iterable, column: str) -> None:
    allowed = set(allowed)
    unexpected = sorted({str(v) for v in series.dropna().unique().tolist() if v not in allowed})
    if unexpected:
        raise ValueError(f"Unexpected values in {column}: {unexpected}; expected one of {sorted(map(str, allowed))}")


def assert_probabilities(series: pd.Series, column: str = "Probability") -> None:
    values = pd.to_numeric(series, errors="coerce")
    if values.isna().any():
        raise ValueError(f"{column} must be numeric and non-missing.")
    out_of_range = values.loc[(values < 0) | (values > 1)].tolist()
    if out_of_range:
        raise ValueError(f"{column} values must lie in [0, 1]; observed: {out_of_range}")
