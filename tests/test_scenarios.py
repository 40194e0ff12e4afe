import pandas as pd
import pytest

from src.stsim.scenarios import (
    build_scenarios,
    configure_scenario,
    deterministic_transition_sheet,
    initial_conditions_spatial_sheet,
    run_control_sheet,
    transition_sheet,
    transition_target_sheet,
)


def test_run_control_defaults():
    rc = run_control_sheet().iloc[0]
    assert rc["MaximumIteration"] == 7
    assert rc["MinimumTimestep"] == 0
    assert rc["MaximumTimestep"] == 10
    assert bool(rc["IsSpatial"]) is True

    with pytest.raises(ValueError):
        run_control_sheet(min_timestep=5, max_timestep=2)


def test_probabilistic_transitions():
    pt = transition_sheet()
    assert len(pt) == 6
    harvest = pt.loc[pt["TransitionTypeID"] == "Harvest"].iloc[0]
    assert harvest["StateClassIDSource"] == "Coniferous"
    assert harvest["Probability"] == 1.0
    assert harvest["AgeMin"] == 40

    fire = pt.loc[(pt["TransitionTypeID"] == "Fire") & (pt["StateClassIDSource"] == "Mixed")].iloc[0]
    assert fire["Probability"] == pytest.approx(0.005)
    assert pd.isna(fire["AgeMin"])


def test_probabilistic_transitions_are_checked():
    with pytest.raises(ValueError, match=r"\[0, 1\]"):
        transition_sheet([("Coniferous", "Deciduous", "Fire", 1.5, None)])
    with pytest.raises(ValueError, match="StateClassIDDest"):
        transition_sheet([("Coniferous", "Grassland", "Fire", 0.1, None)])
    with pytest.raises(ValueError, match="TransitionTypeID"):
        transition_sheet([("Coniferous", "Deciduous", "Windthrow", 0.1, None)])


def test_deterministic_transitions_locations():
    dt = deterministic_transition_sheet()
    assert dt["Location"].tolist() == ["C1", "A1", "B1"]
    assert (dt["StateClassIDSource"] == dt["StateClassIDDest"]).all()
    assert pd.isna(dt.loc[1, "AgeMin"])


def test_initial_conditions_need_existing_files(sample_rasters, tmp_path):
    sheet = initial_conditions_spatial_sheet(sample_rasters)
    assert sheet.columns.tolist() == ["StratumFileName", "StateClassFileName", "AgeFileName"]
    assert sheet.iloc[0]["AgeFileName"].endswith("initial-age.tif")

    broken = dict(sample_rasters, AgeFileName=tmp_path / "nope.tif")
    with pytest.raises(FileNotFoundError):
        initial_conditions_spatial_sheet(broken)
    with pytest.raises(ValueError, match="Missing initial condition rasters"):
        initial_conditions_spatial_sheet({"StratumFileName": sample_rasters["StratumFileName"]})


def test_negative_target_rejected():
    with pytest.raises(ValueError):
        transition_target_sheet(-1)


def test_configure_scenario_writes_nothing_on_bad_input(project, tmp_path):
    scenario = project.scenarios("No Harvest")
    with pytest.raises(FileNotFoundError):
        configure_scenario(scenario, {k: tmp_path / k for k in ["StratumFileName", "StateClassFileName", "AgeFileName"]})
    assert scenario.saved == {}


def test_build_scenarios_copies_baseline(project, sample_rasters):
    scenarios = build_scenarios(project, sample_rasters)
    no_harvest = scenarios["No Harvest"]
    harvest = scenarios["Harvest"]

    assert set(no_harvest.saved) == {
        "stsim_RunControl",
        "stsim_DeterministicTransition",
        "stsim_Transition",
        "stsim_InitialConditionsSpatial",
        "stsim_TransitionTarget",
        "stsim_OutputOptionsSpatial",
        "stsim_OutputOptions",
    }
    assert set(harvest.saved) == set(no_harvest.saved)
    assert no_harvest.saved["stsim_TransitionTarget"].iloc[0]["Amount"] == 0
    assert harvest.saved["stsim_TransitionTarget"].iloc[0]["Amount"] == 20
    pd.testing.assert_frame_equal(harvest.saved["stsim_Transition"], no_harvest.saved["stsim_Transition"])
