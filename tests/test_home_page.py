"""Tests for the Streamlit field builder page."""

from __future__ import annotations

import importlib
from pathlib import Path
import sys

import pandas as pd
from streamlit.testing.v1 import AppTest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

HOME_PATH = REPO_ROOT / "Home.py"


def _load_home():
    return importlib.import_module("Home")


def _app() -> AppTest:
    at = AppTest.from_file(str(HOME_PATH), default_timeout=30)
    at.run()
    return at


def test_selection_changes_reports_flipped_rows() -> None:
    home = _load_home()
    session = home.EditorSession()
    session.toggle_choice_selection("Asia")
    state = session.state

    edited = pd.DataFrame(
        {
            "Select": [False, True, False, False, False],
            "Choice": list(state.visible_choices),
        }
    )

    assert home._selection_changes(state, edited) == ["Asia", "Australia"]


def test_selection_changes_ignores_unknown_rows() -> None:
    home = _load_home()
    state = home.EditorSession().state

    rows = [{"Select": True, "Choice": "Atlantis"}, "junk", {"Select": False, "Choice": "Asia"}]

    assert home._selection_changes(state, rows) == []
    assert home._selection_changes(state, None) == []


def test_page_renders_seed_state() -> None:
    at = _app()

    assert not at.exception
    session = at.session_state[_load_home().SESSION_STATE_KEY]
    assert session.state.choices == ("Asia", "Australia", "Europe", "Americas", "Africa")


def test_save_without_input_shows_errors() -> None:
    at = _app()

    at.button(key="field_builder_save_0").click().run()

    assert not at.exception
    rendered = " ".join(element.value for element in at.markdown)
    assert "Label is required." in rendered
    assert "Default Value is required." in rendered
    assert "Order is required." in rendered


def test_add_choice_from_page() -> None:
    at = _app()

    at.text_input(key="field_builder_new_choice_0").input("Oceania")
    at.button(key="field_builder_add_choice_0").click().run()

    assert not at.exception
    session = at.session_state[_load_home().SESSION_STATE_KEY]
    assert session.state.choices[-1] == "Oceania"
    assert session.state.pending_choice_text == ""


def _session(at: AppTest):
    return at.session_state[_load_home().SESSION_STATE_KEY]


def _rerender(at: AppTest) -> int:
    """Advance the widget revision so every widget picks up session edits."""

    home = _load_home()
    revision = at.session_state[home.REVISION_STATE_KEY] + 1
    at.session_state[home.REVISION_STATE_KEY] = revision
    at.run()
    return revision


def test_valid_save_shows_success_message() -> None:
    at = _app()
    session = _session(at)
    session.edit_scalar_field("label", "Sales region")
    session.edit_scalar_field("default_value", "Europe")
    session.edit_scalar_field("order", "Manual")

    at.button(key="field_builder_save_0").click().run()

    assert not at.exception
    assert [element.value for element in at.success] == [_load_home().SAVE_SUCCESS_MESSAGE]
    assert _session(at).last_committed.label == "Sales region"


def test_chip_button_deselects_and_remove_selected_drops_choices() -> None:
    at = _app()
    session = _session(at)
    session.toggle_choice_selection("Asia")
    session.toggle_choice_selection("Europe")
    revision = _rerender(at)

    at.button(key=f"field_builder_chip_0_{revision}").click().run()

    assert not at.exception
    assert _session(at).state.selected_choices == ("Europe",)

    at.button(key=f"field_builder_remove_selected_{revision + 1}").click().run()

    assert not at.exception
    state = _session(at).state
    assert state.choices == ("Asia", "Australia", "Americas", "Africa")
    assert state.selected_choices == ()


def test_move_controls_reorder_manual_choices() -> None:
    at = _app()
    session = _session(at)
    session.edit_scalar_field("order", "Manual")
    session.toggle_picker(is_open=True)
    revision = _rerender(at)

    at.selectbox(key=f"field_builder_move_source_{revision}").select_index(0)
    at.selectbox(key=f"field_builder_move_target_{revision}").select_index(2)
    at.button(key=f"field_builder_move_apply_{revision}").click().run()

    assert not at.exception
    assert _session(at).state.choices == ("Australia", "Europe", "Asia", "Americas", "Africa")


def test_move_controls_hidden_under_alphabetical_order() -> None:
    at = _app()
    session = _session(at)
    session.edit_scalar_field("order", "Alphabetical")
    session.toggle_picker(is_open=True)
    revision = _rerender(at)

    keys = {element.key for element in at.selectbox}
    assert f"field_builder_move_source_{revision}" not in keys
    assert f"field_builder_order_{revision}" in keys


def test_streamlit_app_entrypoint_renders_home() -> None:
    at = AppTest.from_file(str(REPO_ROOT / "streamlit_app.py"), default_timeout=30)
    at.run()

    assert not at.exception
    assert at.button(key="field_builder_save_0").label == "Save changes"
