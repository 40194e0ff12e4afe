"""Connections to SyncroSim: session, library, project and scenario handles.

Everything here is a thin call into ``pysyncrosim``; the objects returned are
the binding's own Library/Project/Scenario instances.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pysyncrosim as ps


def open_session(location: Optional[Path] = None):
    """Connect to SyncroSim (default install folder when location is None)."""

    return ps.Session(location=str(location) if location is not None else None)


def installed_packages(session) -> List[str]:
    packages = session.packages(installed=True)
    name_cols = [c for c in packages.columns if str(c).lower() == "name"]
    if not name_cols:
        raise ValueError(f"Package listing has no name column: {list(packages.columns)}")
    return packages[name_cols[0]].astype(str).tolist()


def ensure_package(session, name: str = "stsim") -> bool:
    """Install a SyncroSim package when it is missing. Returns True if an install ran."""

    if name in installed_packages(session):
        return False
    session.add_packages(name)
    return True


def create_library(path: Path, session, package: str = "stsim", overwrite: bool = True):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return ps.library(name=str(path), session=session, package=package, overwrite=overwrite)


def open_library(path: Path, session):
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"SyncroSim library not found: {path}")
    return ps.library(name=str(path), session=session)


def open_project(library, name: str = "Definitions"):
    return library.projects(name=name)


def open_scenario(project, name: str):
    return project.scenarios(name=name)


def copy_scenario(source, name: str):
    """New scenario holding a copy of every datasheet of ``source``."""

    return source.copy(name=name)
