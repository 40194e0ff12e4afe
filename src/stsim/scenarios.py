from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Tuple

import pandas as pd

from src.config import (
    DETERMINISTIC_TRANSITIONS,
    FOREST_TYPES,
    HARVEST_GROUP,
    HARVEST_TARGET_BASELINE,
    HARVEST_TARGET_HARVEST,
    IS_SPATIAL,
    MAXIMUM_ITERATION,
    MAXIMUM_TIMESTEP,
    MINIMUM_TIMESTEP,
    OUTPUT_TIMESTEPS,
    PROBABILISTIC_TRANSITIONS,
    SCENARIO_HARVEST,
    SCENARIO_NO_HARVEST,
    TRANSITION_TYPES,
)
from src.data.validate import assert_probabilities, assert_values_in
from src.syncrosim.datasheets import add_rows, save_datasheet
from src.syncrosim.session import copy_scenario, open_scenario

DETERMINISTIC_COLUMNS = ["StateClassIDSource", "StateClassIDDest", "AgeMin", "Location"]
TRANSITION_COLUMNS = ["StateClassIDSource", "StateClassIDDest", "TransitionTypeID", "Probability", "AgeMin"]
INITIAL_CONDITION_KEYS = ["StratumFileName", "StateClassFileName", "AgeFileName"]


def run_control_sheet(
    max_iteration: int = MAXIMUM_ITERATION,
    min_timestep: int = MINIMUM_TIMESTEP,
    max_timestep: int = MAXIMUM_TIMESTEP,
    is_spatial: bool = IS_SPATIAL,
) -> pd.DataFrame:
    if max_iteration < 1:
        raise ValueError(f"MaximumIteration must be >= 1, got {max_iteration}")
    if max_timestep < min_timestep:
        raise ValueError(f"MaximumTimestep ({max_timestep}) is before MinimumTimestep ({min_timestep})")
    return pd.DataFrame(
        [
            {
                "MaximumIteration": max_iteration,
                "MinimumTimestep": min_timestep,
                "MaximumTimestep": max_timestep,
                "IsSpatial": is_spatial,
            }
        ]
    )


def deterministic_transition_sheet(transitions=DETERMINISTIC_TRANSITIONS) -> pd.DataFrame:
    sheet = pd.DataFrame(columns=DETERMINISTIC_COLUMNS)
    for source, dest, age_min, location in transitions:
        row = {"StateClassIDSource": source, "StateClassIDDest": dest, "Location": location}
        if age_min is not None:
            row["AgeMin"] = age_min
        sheet = add_rows(sheet, row)

    assert_values_in(sheet["StateClassIDSource"], FOREST_TYPES, "StateClassIDSource")
    assert_values_in(sheet["StateClassIDDest"], FOREST_TYPES, "StateClassIDDest")
    return sheet


def transition_sheet(transitions=PROBABILISTIC_TRANSITIONS) -> pd.DataFrame:
    sheet = pd.DataFrame(columns=TRANSITION_COLUMNS)
    for source, dest, transition_type, probability, age_min in transitions:
        row = {
            "StateClassIDSource": source,
            "StateClassIDDest": dest,
            "TransitionTypeID": transition_type,
            "Probability": probability,
        }
        if age_min is not None:
            row["AgeMin"] = age_min
        sheet = add_rows(sheet, row)

    assert_values_in(sheet["StateClassIDSource"], FOREST_TYPES, "StateClassIDSource")
    assert_values_in(sheet["StateClassIDDest"], FOREST_TYPES, "StateClassIDDest")
    assert_values_in(sheet["TransitionTypeID"], TRANSITION_TYPES, "TransitionTypeID")
    assert_probabilities(sheet["Probability"])
    return sheet


def initial_conditions_spatial_sheet(rasters: Mapping[str, Path]) -> pd.DataFrame:
    """Absolute paths of the stratum, state class and age rasters."""

    missing_keys = [k for k in INITIAL_CONDITION_KEYS if k not in rasters]
    if missing_keys:
        raise ValueError(f"Missing initial condition rasters: {missing_keys}")

    row = {}
    for key in INITIAL_CONDITION_KEYS:
        path = Path(rasters[key]).resolve()
        if not path.exists():
            raise FileNotFoundError(f"{key} raster not found: {path}")
        row[key] = str(path)
    return pd.DataFrame([row])


def transition_target_sheet(amount: float, group: str = HARVEST_GROUP) -> pd.DataFrame:
    if amount < 0:
        raise ValueError(f"Transition target amount must be non-negative, got {amount}")
    return pd.DataFrame([{"TransitionGroupID": group, "Amount": amount}])


def output_options_spatial_sheet(timesteps: int = OUTPUT_TIMESTEPS) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "RasterOutputSC": True,
                "RasterOutputSCTimesteps": timesteps,
                "RasterOutputTR": True,
                "RasterOutputTRTimesteps": timesteps,
                "RasterOutputAge": True,
                "RasterOutputAgeTimesteps": timesteps,
            }
        ]
    )


def output_options_sheet(timesteps: int = OUTPUT_TIMESTEPS) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "SummaryOutputSC": True,
                "SummaryOutputSCTimesteps": timesteps,
                "SummaryOutputTR": True,
                "SummaryOutputTRTimesteps": timesteps,
            }
        ]
    )


def scenario_sheets(rasters: Mapping[str, Path], harvest_amount: float = HARVEST_TARGET_BASELINE) -> List[Tuple[str, pd.DataFrame]]:
    return [
        ("stsim_RunControl", run_control_sheet()),
        ("stsim_DeterministicTransition", deterministic_transition_sheet()),
        ("stsim_Transition", transition_sheet()),
        ("stsim_InitialConditionsSpatial", initial_conditions_spatial_sheet(rasters)),
        ("stsim_TransitionTarget", transition_target_sheet(harvest_amount)),
        ("stsim_OutputOptionsSpatial", output_options_spatial_sheet()),
        ("stsim_OutputOptions", output_options_sheet()),
    ]


def configure_scenario(scenario, rasters: Mapping[str, Path], harvest_amount: float = HARVEST_TARGET_BASELINE) -> List[str]:
    # Build every sheet before writing any, so a bad input leaves the scenario untouched.
    sheets = scenario_sheets(rasters, harvest_amount)
    for name, data in sheets:
        save_datasheet(scenario, name, data)
    return [name for name, _ in sheets]


def set_harvest_target(scenario, amount: float) -> pd.DataFrame:
    return save_datasheet(scenario, "stsim_TransitionTarget", transition_target_sheet(amount))


def build_scenarios(project, rasters: Mapping[str, Path]) -> Dict[str, object]:
    """Create the baseline scenario and its harvest copy.

    The harvest scenario is a copy of the baseline with only the harvest
    transition target changed.
    """

    no_harvest = open_scenario(project, SCENARIO_NO_HARVEST)
    configure_scenario(no_harvest, rasters, harvest_amount=HARVEST_TARGET_BASELINE)

    harvest = copy_scenario(no_harvest, SCENARIO_HARVEST)
    set_harvest_target(harvest, HARVEST_TARGET_HARVEST)

    return {SCENARIO_NO_HARVEST: no_harvest, SCENARIO_HARVEST: harvest}
