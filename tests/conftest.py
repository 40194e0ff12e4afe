import itertools
import sys
from pathlib import Path

import pandas as pd
import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


class FakeScenario:
    """In-memory stand-in for a pysyncrosim Scenario."""

    def __init__(self, sid, name, ids, parent_id=None):
        self.sid = sid
        self.name = name
        self.parent_id = parent_id
        self._ids = ids
        self.saved = {}
        self.outputs = {}
        self.run_calls = []

    def save_datasheet(self, name, data):
        self.saved[name] = data.copy()

    def datasheets(self, name=None, optional=False, empty=False, show_full_paths=False, summary=True):
        if name is None:
            return pd.DataFrame(
                {
                    "Name": ["stsim_RunControl", "stsim_Transition", "stsim_StateClass"],
                    "Scope": ["Scenario", "Scenario", "Project"],
                }
            )
        if name in self.outputs:
            return self.outputs[name].copy()
        if name in self.saved:
            return self.saved[name].copy()
        return pd.DataFrame()

    def copy(self, name):
        clone = FakeScenario(next(self._ids), name, self._ids)
        clone.saved = {k: v.copy() for k, v in self.saved.items()}
        return clone

    def run(self, jobs=1):
        self.run_calls.append(jobs)
        return FakeScenario(next(self._ids), f"{self.name} ([{self.sid}] @ run)", self._ids, parent_id=self.sid)


class FakeProject:
    """In-memory stand-in for a pysyncrosim Project."""

    def __init__(self):
        self._ids = itertools.count(1)
        self.saved = {}
        self.save_order = []
        self._scenarios = {}

    def save_datasheet(self, name, data):
        self.saved[name] = data.copy()
        self.save_order.append(name)

    def datasheets(self, name=None, optional=False, empty=False, show_full_paths=False, summary=True):
        if name is None:
            return pd.DataFrame({"Name": ["stsim_Terminology", "stsim_StateClass"], "Scope": ["Project", "Project"]})
        if name == "stsim_Terminology" and name not in self.saved:
            return pd.DataFrame(
                [{"AmountLabel": "Amount", "AmountUnits": "Acres", "StateLabelX": "State Label X", "StateLabelY": "State Label Y"}]
            )
        return self.saved.get(name, pd.DataFrame()).copy()

    def scenarios(self, name):
        if name not in self._scenarios:
            self._scenarios[name] = FakeScenario(next(self._ids), name, self._ids)
        return self._scenarios[name]


@pytest.fixture
def project():
    return FakeProject()


@pytest.fixture
def sample_rasters(tmp_path):
    from src.spatial.rasters import write_initial_conditions

    return write_initial_conditions(tmp_path / "raw", shape=(8, 6), seed=7)
