"""
UI module for Arduino Installer.

Provides reusable Streamlit components and utilities.
"""

from .components import (
    init_workflow_state,
    get_workflow_state,
    render_message_list,
    render_flash_output,
)

__all__ = [
    "init_workflow_state",
    "get_workflow_state",
    "render_message_list",
    "render_flash_output",
]
