"""
Streamlit UI for Arduino Installer.

Pick a firmware file, a board and a serial port, then flash.

NOTE: This module requires the optional 'ui' extra to be installed:
    pip install -e ".[ui]"
"""

import logging
from pathlib import Path

import streamlit as st

from arduino_installer.boards import list_boards
from arduino_installer.core.messages import messages_from_state
from arduino_installer.core.workflow import (
    Flash,
    Rescan,
    SelectBoard,
    SelectFile,
    SelectPort,
    apply_intent,
)
from arduino_installer.ui.components import (
    get_workflow_state,
    init_workflow_state,
    render_flash_output,
    render_message_list,
)

logger = logging.getLogger(__name__)

FIRMWARE_HINT = "Compiled firmware, usually an .elf file"


# ============================================================================
# INTENT CALLBACKS
# ============================================================================

def _on_file_changed() -> None:
    path = st.session_state.firmware_path.strip()
    if path:
        apply_intent(get_workflow_state(), SelectFile(path))


def _on_board_changed() -> None:
    apply_intent(get_workflow_state(), SelectBoard(st.session_state.board_select))


def _on_port_changed() -> None:
    port = st.session_state.port_select
    if port is not None:
        apply_intent(get_workflow_state(), SelectPort(port))


def _on_rescan() -> None:
    apply_intent(get_workflow_state(), Rescan())


def main():
    """Streamlit app main."""
    st.set_page_config(
        page_title="Arduino Installer",
        page_icon="🔧",
        layout="centered",
    )

    state = init_workflow_state()

    st.title("Arduino Installer gui")

    st.text_input(
        "File",
        value=str(state.selected_file) if state.selected_file else "",
        key="firmware_path",
        placeholder="/path/to/firmware.elf",
        help=FIRMWARE_HINT,
        on_change=_on_file_changed,
    )

    boards = list_boards()
    st.selectbox(
        "Select board",
        options=boards,
        index=boards.index(state.selected_board),
        format_func=lambda b: b.display_name,
        key="board_select",
        on_change=_on_board_changed,
    )

    col1, col2 = st.columns([3, 1])
    with col1:
        ports = state.ports
        index = ports.index(state.selected_port) if state.selected_port in ports else None
        st.selectbox(
            "Available Ports",
            options=ports,
            index=index,
            format_func=lambda p: p.label(),
            placeholder="No port selected",
            key="port_select",
            on_change=_on_port_changed,
        )
    with col2:
        st.write("")
        st.button("Rescan", on_click=_on_rescan, use_container_width=True)

    if st.button("Flash device!", type="primary", use_container_width=True):
        with st.spinner("Flashing device. Please wait..."):
            apply_intent(state, Flash())

    render_message_list(messages_from_state(state))
    render_flash_output(state)


def launch() -> None:
    """Launch the Streamlit app without requiring a manual CLI command."""
    from streamlit.web import bootstrap

    app_path = str(Path(__file__).resolve())
    bootstrap.run(app_path, False, [], {})


if __name__ == "__main__":
    main()
