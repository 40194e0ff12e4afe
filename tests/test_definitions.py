from src.stsim.definitions import (
    age_type_sheet,
    configure_project,
    state_class_sheet,
    stratum_sheet,
    terminology_sheet,
    transition_type_group_sheet,
    transition_type_sheet,
)


def test_state_classes_reference_labels():
    sc = state_class_sheet()
    assert sc["Name"].tolist() == ["Coniferous", "Deciduous", "Mixed"]
    assert sc["StateLabelXID"].tolist() == sc["Name"].tolist()
    assert set(sc["StateLabelYID"]) == {"All"}
    assert sc["ID"].tolist() == [1, 2, 3]


def test_transition_types_and_groups():
    tt = transition_type_sheet()
    assert tt.set_index("Name")["ID"].to_dict() == {"Fire": 1, "Harvest": 2, "Succession": 3}

    links = transition_type_group_sheet()
    assert (links["TransitionTypeID"] == links["TransitionGroupID"]).all()
    assert len(links) == 3


def test_terminology_keeps_other_columns(project):
    current = project.datasheets(name="stsim_Terminology")
    term = terminology_sheet(current)
    row = term.iloc[0]
    assert row["AmountUnits"] == "hectares"
    assert row["StateLabelX"] == "Forest Type"
    assert row["StateLabelY"] == "State Label Y"

    fresh = terminology_sheet(None)
    assert len(fresh) == 1
    assert fresh.iloc[0]["AmountUnits"] == "hectares"


def test_small_sheets():
    assert stratum_sheet()["Name"].tolist() == ["Entire Forest"]
    assert age_type_sheet().iloc[0].to_dict() == {"Frequency": 1, "MaximumAge": 101}


def test_configure_project_saves_in_dependency_order(project):
    saved = configure_project(project)
    assert saved == project.save_order
    order = project.save_order
    assert order.index("stsim_StateLabelX") < order.index("stsim_StateClass")
    assert order.index("stsim_TransitionType") < order.index("stsim_TransitionTypeGroup")
    assert order.index("stsim_TransitionGroup") < order.index("stsim_TransitionTypeGroup")
    assert project.saved["stsim_AgeGroup"]["MaximumAge"].tolist() == [20, 40, 60, 80, 100]
    assert project.saved["stsim_Stratum"]["Name"].tolist() == ["Entire Forest"]
    assert project.saved["stsim_Terminology"].iloc[0]["AmountUnits"] == "hectares"
