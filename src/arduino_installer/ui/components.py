"""
Reusable Streamlit UI components for Arduino Installer.

Provides consistent UI elements:
- Session state holding the single WorkflowState
- Status/error display
- Command and avrdude output panel
"""

from typing import List

import streamlit as st

from arduino_installer.core.messages import MessageLevel, StatusMessage
from arduino_installer.core.workflow import WorkflowState, rescan


# =============================================================================
# Session State Management
# =============================================================================

def init_workflow_state() -> WorkflowState:
    """Create the session's WorkflowState on first run and scan once."""
    if "workflow" not in st.session_state:
        state = WorkflowState()
        rescan(state)
        st.session_state.workflow = state
    return st.session_state.workflow


def get_workflow_state() -> WorkflowState:
    """Return the session's WorkflowState."""
    return init_workflow_state()


# =============================================================================
# Message List Component
# =============================================================================

def render_message_list(messages: List[StatusMessage]) -> None:
    """
    Render status messages, errors first.

    Args:
        messages: List of StatusMessage objects to display
    """
    order = {MessageLevel.ERROR: 0, MessageLevel.WARN: 1, MessageLevel.INFO: 2}
    for message in sorted(messages, key=lambda m: order[m.level]):
        _render_single_message(message)


def _render_single_message(message: StatusMessage) -> None:
    """Render a single message item."""
    if message.level == MessageLevel.ERROR:
        container = st.error
    elif message.level == MessageLevel.WARN:
        container = st.warning
    else:
        container = st.success

    with st.container():
        container(f"**{message.title}**")

        if message.detail or message.remediation:
            with st.expander(f"Details ({message.code.value})", expanded=False):
                if message.detail:
                    st.markdown(message.detail)
                if message.remediation:
                    st.markdown(f"**Suggested action:** {message.remediation}")


# =============================================================================
# Output Panel Component
# =============================================================================

def render_flash_output(state: WorkflowState, title: str = "📟 avrdude") -> None:
    """
    Render the last command and its output, if a flash was attempted.

    Args:
        state: Current workflow state
        title: Section title
    """
    if state.last_command is None and state.last_output is None:
        return

    st.markdown(f"#### {title}")
    if state.last_command:
        st.code(state.last_command, language="bash")
    if state.last_output:
        st.code(state.last_output, language="text")
