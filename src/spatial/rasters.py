from __future__ import annotations

from pathlib import Path
from typing import Dict, Tuple

import numpy as np
import rasterio
from rasterio.transform import from_origin

NODATA = -9999

INITIAL_CONDITION_FILES = {
    "StratumFileName": "initial-stratum.tif",
    "StateClassFileName": "initial-sclass.tif",
    "AgeFileName": "initial-age.tif",
}


def read_raster(path: Path) -> Tuple[np.ma.MaskedArray, dict]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Raster not found: {path}")
    with rasterio.open(path) as src:
        data = src.read(1, masked=True)
        profile = src.profile.copy()
    return data, profile


def describe_raster(path: Path) -> dict:
    data, profile = read_raster(path)
    valid = data.compressed()
    return {
        "path": str(path),
        "width": int(profile["width"]),
        "height": int(profile["height"]),
        "crs": str(profile["crs"]) if profile.get("crs") else None,
        "resolution": [abs(float(profile["transform"].a)), abs(float(profile["transform"].e))],
        "nodata": profile.get("nodata"),
        "n_valid": int(valid.size),
        "min": float(valid.min()) if valid.size else None,
        "max": float(valid.max()) if valid.size else None,
    }


def _write_band(path: Path, data: np.ndarray, cell_size: float, crs: str) -> None:
    height, width = data.shape
    profile = {
        "driver": "GTiff",
        "height": height,
        "width": width,
        "count": 1,
        "dtype": "int32",
        "crs": crs,
        "transform": from_origin(0.0, height * cell_size, cell_size, cell_size),
        "nodata": NODATA,
    }
    with rasterio.open(path, "w", **profile) as dst:
        dst.write(data.astype("int32"), 1)


def write_initial_conditions(
    outdir: Path,
    shape: Tuple[int, int] = (50, 50),
    seed: int = 2024,
    n_state_classes: int = 3,
    max_age: int = 100,
    cell_size: float = 100.0,
    crs: str = "EPSG:32617",
) -> Dict[str, Path]:
    """Write a reproducible stand-in set of initial-condition rasters.

    One stratum covering the grid, state classes 1..n_state_classes and ages
    0..max_age drawn per cell. Returns paths keyed by the
    InitialConditionsSpatial column they belong to.
    """

    if shape[0] <= 0 or shape[1] <= 0:
        raise ValueError(f"Raster shape must be positive, got {shape}")

    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    rng = np.random.default_rng(seed)

    layers = {
        "StratumFileName": np.ones(shape, dtype=np.int32),
        "StateClassFileName": rng.integers(1, n_state_classes + 1, size=shape, dtype=np.int32),
        "AgeFileName": rng.integers(0, max_age + 1, size=shape, dtype=np.int32),
    }

    paths: Dict[str, Path] = {}
    for key, data in layers.items():
        path = outdir / INITIAL_CONDITION_FILES[key]
        _write_band(path, data, cell_size, crs)
        paths[key] = path
    return paths
