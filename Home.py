"""Streamlit page for building a single list-valued field definition."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict, List

import pandas as pd
import streamlit as st
from streamlit.errors import StreamlitAPIException

from field_builder.config import SETTINGS_SECTION, configure_logging, load_settings
from field_builder.field_definition import (
    CHOICES_FIELD,
    DEFAULT_VALUE_FIELD,
    LABEL_FIELD,
    ORDER_FIELD,
    REQUIRED_FIELD,
)
from field_builder.ordering import NO_RESULTS_MESSAGE, ORDER_POLICY_LABELS, OrderPolicy
from field_builder.schema_defaults import (
    CHOICES_PICKER_LABEL,
    DEFAULT_PAGE_ICON,
    DEFAULT_PAGE_SUBTITLE,
    DEFAULT_PAGE_TITLE,
    DEFAULT_VALUE_PLACEHOLDER,
    LABEL_PLACEHOLDER,
    NEW_CHOICE_PLACEHOLDER,
    ORDER_PLACEHOLDER,
    REQUIRED_CHECKBOX_LABEL,
    SAVE_SUCCESS_MESSAGE,
    SEARCH_PLACEHOLDER,
)
from field_builder.session import EditorSession, EditorState
from field_builder.ui_theme import (
    apply_app_theme,
    chips_markup,
    field_error,
    page_header,
    section_card,
)

SESSION_STATE_KEY = "field_builder_session"
REVISION_STATE_KEY = "field_builder_revision"
ORDER_OPTIONS = ["", OrderPolicy.ALPHABETICAL.value, OrderPolicy.MANUAL.value]


def _secrets_dict(name: str) -> Dict[str, Any]:
    """Return a mapping stored under ``name`` in Streamlit secrets."""

    try:
        value = st.secrets.get(name, {})  # type: ignore[arg-type]
    except (FileNotFoundError, StreamlitAPIException):
        return {}
    if isinstance(value, Mapping):
        return dict(value)
    return {}


def get_session() -> EditorSession:
    """Return the editor session stored in Streamlit's session state."""

    session = st.session_state.get(SESSION_STATE_KEY)
    if not isinstance(session, EditorSession):
        settings = load_settings(_secrets_dict(SETTINGS_SECTION))
        configure_logging(settings.log_level)
        session = EditorSession(settings)
        st.session_state[SESSION_STATE_KEY] = session
        st.session_state[REVISION_STATE_KEY] = 0
    return session


def _widget_key(name: str) -> str:
    """Return a widget key that changes whenever the session is rewritten."""

    return f"field_builder_{name}_{st.session_state.get(REVISION_STATE_KEY, 0)}"


def _bump_revision() -> None:
    st.session_state[REVISION_STATE_KEY] = st.session_state.get(REVISION_STATE_KEY, 0) + 1


def _rerun_app() -> None:
    """Trigger a Streamlit rerun using the available API."""

    if hasattr(st, "rerun"):
        st.rerun()
    elif hasattr(st, "experimental_rerun"):
        st.experimental_rerun()


def _run_command(command: Callable[..., Any], *args: Any) -> None:
    """Widget callback: run ``command`` and refresh widgets from the session."""

    command(*args)
    _bump_revision()


def _on_scalar_change(name: str, widget_key: str) -> None:
    session = get_session()
    session.pointer_outside_picker()
    session.edit_scalar_field(name, st.session_state.get(widget_key))
    _bump_revision()


def _on_add_choice(widget_key: str) -> None:
    session = get_session()
    session.add_choice(st.session_state.get(widget_key, ""))
    _bump_revision()


def _on_search_change(widget_key: str) -> None:
    get_session().set_search_query(st.session_state.get(widget_key, ""))


def _on_move(source_key: str, target_key: str) -> None:
    session = get_session()
    source = st.session_state.get(source_key)
    target = st.session_state.get(target_key)
    if source is None or target is None:
        return
    session.begin_drag(int(source))
    session.drop_at(int(target))
    _bump_revision()


def _picker_frame(state: EditorState) -> pd.DataFrame:
    """Return the picker table for the visible choices."""

    return pd.DataFrame(
        {
            "Select": [choice in state.selected_choices for choice in state.visible_choices],
            "Choice": list(state.visible_choices),
        }
    )


def _selection_changes(state: EditorState, edited: Any) -> List[str]:
    """Return visible choices whose checkbox differs from the session."""

    if hasattr(edited, "to_dict"):
        rows = edited.to_dict(orient="records")  # type: ignore[call-arg]
    elif isinstance(edited, list):
        rows = edited
    else:
        rows = []

    changed: List[str] = []
    for row in rows:
        if not isinstance(row, dict):
            continue
        choice = row.get("Choice")
        if not isinstance(choice, str) or choice not in state.choices:
            continue
        if bool(row.get("Select")) != (choice in state.selected_choices):
            changed.append(choice)
    return changed


def render_scalar_fields(session: EditorSession, state: EditorState) -> None:
    """Render label, requiredness and default value inputs."""

    errors = state.error_messages()

    label_key = _widget_key("label")
    st.text_input(
        "Label",
        value=state.label,
        key=label_key,
        placeholder=LABEL_PLACEHOLDER,
        on_change=_on_scalar_change,
        args=(LABEL_FIELD, label_key),
    )
    field_error(errors.get(LABEL_FIELD))

    required_key = _widget_key("required")
    st.caption("Type: Multi-select")
    st.checkbox(
        REQUIRED_CHECKBOX_LABEL,
        value=state.is_multi_value_required,
        key=required_key,
        on_change=_on_scalar_change,
        args=(REQUIRED_FIELD, required_key),
    )

    default_options = ["", *state.choices]
    default_key = _widget_key("default_value")
    st.selectbox(
        "Default Value",
        options=default_options,
        index=default_options.index(state.default_value)
        if state.default_value in default_options
        else 0,
        key=default_key,
        format_func=lambda value: value or DEFAULT_VALUE_PLACEHOLDER,
        on_change=_on_scalar_change,
        args=(DEFAULT_VALUE_FIELD, default_key),
    )
    field_error(errors.get(DEFAULT_VALUE_FIELD))


def render_choice_picker(session: EditorSession, state: EditorState) -> None:
    """Render the searchable, selectable and reorderable choice list."""

    toggle_label = f"{'▾' if state.is_picker_open else '▸'} {CHOICES_PICKER_LABEL}"
    st.button(
        toggle_label,
        key=_widget_key("picker_toggle"),
        on_click=_run_command,
        args=(session.toggle_picker,),
    )

    if state.is_picker_open:
        search_key = _widget_key("search")
        st.text_input(
            "Search",
            value=state.search_query,
            key=search_key,
            placeholder=SEARCH_PLACEHOLDER,
            label_visibility="collapsed",
            on_change=_on_search_change,
            args=(search_key,),
        )
        state = session.state
        if state.has_no_results:
            st.markdown(f"<p class='app-muted'>{NO_RESULTS_MESSAGE}</p>", unsafe_allow_html=True)
        else:
            signature = abs(hash((state.visible_choices, state.selected_choices)))
            edited = st.data_editor(
                _picker_frame(state),
                hide_index=True,
                width="stretch",
                num_rows="fixed",
                key=_widget_key(f"picker_{signature}"),
                column_config={
                    "Select": st.column_config.CheckboxColumn("Select"),
                    "Choice": st.column_config.TextColumn("Choice", disabled=True),
                },
            )
            changed = _selection_changes(state, edited)
            if changed:
                for choice in changed:
                    session.toggle_choice_selection(choice)
                _bump_revision()
                _rerun_app()

        if state.is_drag_enabled and len(state.visible_choices) > 1:
            render_reorder_controls(state)

        st.button(
            "Done",
            key=_widget_key("picker_done"),
            on_click=_run_command,
            args=(session.pointer_outside_picker,),
        )

    errors = state.error_messages()
    field_error(errors.get(CHOICES_FIELD))

    if state.selected_choices:
        st.markdown(chips_markup(state.selected_choices), unsafe_allow_html=True)
        chip_columns = st.columns(min(len(state.selected_choices), 4))
        for index, choice in enumerate(state.selected_choices):
            chip_columns[index % len(chip_columns)].button(
                f"✕ {choice}",
                key=_widget_key(f"chip_{index}"),
                on_click=_run_command,
                args=(session.toggle_choice_selection, choice),
            )
        st.button(
            "Remove selected choices",
            key=_widget_key("remove_selected"),
            on_click=_run_command,
            args=(session.remove_selected_choices,),
        )


def render_reorder_controls(state: EditorState) -> None:
    """Render move controls that stand in for dragging a choice."""

    positions = list(range(len(state.visible_choices)))
    source_key = _widget_key("move_source")
    target_key = _widget_key("move_target")
    source_col, target_col, action_col = st.columns([2, 2, 1])
    source_col.selectbox(
        "Move",
        options=positions,
        key=source_key,
        format_func=lambda index: state.visible_choices[index],
    )
    target_col.selectbox(
        "To position",
        options=positions,
        key=target_key,
        format_func=lambda index: f"{index + 1}. {state.visible_choices[index]}",
    )
    action_col.button(
        "Move",
        key=_widget_key("move_apply"),
        on_click=_on_move,
        args=(source_key, target_key),
    )


def render_new_choice(session: EditorSession, state: EditorState) -> None:
    """Render the pending-choice entry with its own error message."""

    new_choice_key = _widget_key("new_choice")
    st.text_input(
        "New choice",
        value=state.pending_choice_text,
        key=new_choice_key,
        placeholder=NEW_CHOICE_PLACEHOLDER,
    )
    add_col, cancel_col, _ = st.columns([1, 1, 3])
    add_col.button(
        "Add choice",
        key=_widget_key("add_choice"),
        on_click=_on_add_choice,
        args=(new_choice_key,),
    )
    cancel_col.button(
        "Cancel",
        key=_widget_key("cancel_choice"),
        on_click=_run_command,
        args=(session.cancel_pending_choice,),
    )
    field_error(state.pending_choice_message)


def render_order(state: EditorState) -> None:
    """Render the display order selector."""

    order_key = _widget_key("order")
    current = state.order_policy.value if state.order_policy is not None else ""
    st.selectbox(
        "Order",
        options=ORDER_OPTIONS,
        index=ORDER_OPTIONS.index(current),
        key=order_key,
        format_func=lambda value: ORDER_POLICY_LABELS[OrderPolicy(value)]
        if value
        else ORDER_PLACEHOLDER,
        on_change=_on_scalar_change,
        args=(ORDER_FIELD, order_key),
    )
    field_error(state.error_messages().get(ORDER_FIELD))


def render_actions(session: EditorSession, state: EditorState) -> None:
    save_col, cancel_col, _ = st.columns([1, 1, 3])
    save_col.button(
        "Save changes",
        type="primary",
        key=_widget_key("save"),
        on_click=_run_command,
        args=(session.save,),
    )
    cancel_col.button(
        "Cancel",
        key=_widget_key("discard"),
        on_click=_run_command,
        args=(session.discard,),
    )
    if state.is_saved:
        st.success(SAVE_SUCCESS_MESSAGE)


def main() -> None:
    """Render the field builder."""

    apply_app_theme(page_title=DEFAULT_PAGE_TITLE, page_icon=DEFAULT_PAGE_ICON)
    page_header(DEFAULT_PAGE_TITLE, DEFAULT_PAGE_SUBTITLE, icon=DEFAULT_PAGE_ICON)

    session = get_session()

    with section_card("Field"):
        render_scalar_fields(session, session.state)

    with section_card("Choices", "Pick the choices offered by this field."):
        render_choice_picker(session, session.state)
        render_new_choice(session, session.state)

    with section_card("Display"):
        render_order(session.state)

    render_actions(session, session.state)


if __name__ == "__main__":
    main()
