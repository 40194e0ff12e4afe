from __future__ import annotations

from typing import List, Optional

import pandas as pd

from src.config import (
    AGE_FREQUENCY,
    AGE_GROUPS,
    AGE_MAX,
    AMOUNT_UNITS,
    FOREST_TYPES,
    STATE_LABEL_X,
    STATE_LABELS_Y,
    STRATA,
    TRANSITION_TYPES,
)
from src.syncrosim.datasheets import add_rows, empty_datasheet, load_datasheet, save_datasheet


def terminology_sheet(current: Optional[pd.DataFrame] = None) -> pd.DataFrame:
    """Apply the workshop units and state label on top of the project's Terminology sheet."""

    terminology = current.copy() if current is not None else pd.DataFrame()
    if terminology.empty:
        terminology = pd.DataFrame(index=[0], columns=terminology.columns)
    terminology["AmountUnits"] = AMOUNT_UNITS
    terminology["StateLabelX"] = STATE_LABEL_X
    return terminology


def stratum_sheet(template: Optional[pd.DataFrame] = None) -> pd.DataFrame:
    stratum = template if template is not None else pd.DataFrame(columns=["Name"])
    for name in STRATA:
        stratum = add_rows(stratum, name)
    return stratum


def state_label_x_sheet() -> pd.DataFrame:
    return pd.DataFrame({"Name": FOREST_TYPES})


def state_label_y_sheet() -> pd.DataFrame:
    return pd.DataFrame({"Name": STATE_LABELS_Y})


def state_class_sheet() -> pd.DataFrame:
    state_classes = pd.DataFrame({"Name": FOREST_TYPES})
    state_classes["StateLabelXID"] = state_classes["Name"]
    state_classes["StateLabelYID"] = STATE_LABELS_Y[0]
    state_classes["ID"] = list(range(1, len(FOREST_TYPES) + 1))
    return state_classes


def transition_type_sheet() -> pd.DataFrame:
    return pd.DataFrame({"Name": TRANSITION_TYPES, "ID": list(range(1, len(TRANSITION_TYPES) + 1))})


def transition_group_sheet() -> pd.DataFrame:
    return pd.DataFrame({"Name": TRANSITION_TYPES})


def transition_type_group_sheet() -> pd.DataFrame:
    # One group per transition type, sharing its name.
    types = transition_type_sheet()["Name"]
    groups = transition_group_sheet()["Name"]
    return pd.DataFrame({"TransitionTypeID": types.tolist(), "TransitionGroupID": groups.tolist()})


def age_type_sheet() -> pd.DataFrame:
    return pd.DataFrame([{"Frequency": AGE_FREQUENCY, "MaximumAge": AGE_MAX}])


def age_group_sheet() -> pd.DataFrame:
    return pd.DataFrame({"MaximumAge": AGE_GROUPS})


def configure_project(project) -> List[str]:
    """Write every project-scoped definition, in dependency order.

    State classes reference the labels, transition-group links reference the
    types and groups, so those go first.
    """

    sheets = [
        ("stsim_Terminology", terminology_sheet(load_datasheet(project, "stsim_Terminology"))),
        ("stsim_Stratum", stratum_sheet(empty_datasheet(project, "stsim_Stratum"))),
        ("stsim_StateLabelX", state_label_x_sheet()),
        ("stsim_StateLabelY", state_label_y_sheet()),
        ("stsim_StateClass", state_class_sheet()),
        ("stsim_TransitionType", transition_type_sheet()),
        ("stsim_TransitionGroup", transition_group_sheet()),
        ("stsim_TransitionTypeGroup", transition_type_group_sheet()),
        ("stsim_AgeType", age_type_sheet()),
        ("stsim_AgeGroup", age_group_sheet()),
    ]

    saved = []
    for name, data in sheets:
        save_datasheet(project, name, data)
        saved.append(name)
    return saved
