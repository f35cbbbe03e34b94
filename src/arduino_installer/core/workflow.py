"""
Flashing workflow state and transitions.

A WorkflowState is owned by exactly one caller (the CLI command or the
Streamlit session). Every user intent goes through a handler here, which
mutates that state in place:

    state = WorkflowState()
    rescan(state)
    select_port(state, state.ports[0])
    select_file(state, "/tmp/firmware.elf")
    flash(state)
    print(state.last_command, state.last_output)

flash() blocks until avrdude exits. Shells that must stay responsive use
FlashWorker, which runs avrdude on a background thread and hands the
result back to the owner through a queue.
"""

import logging
import queue
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Union

from arduino_installer.boards import BoardIdentifier, resolve
from .command import AVRDUDE, FlashCommand, build_command
from .errors import PortDiscoveryError
from .executor import Runner, execute
from .ports import PortDescriptor, scan_ports
from .results import FlashOutcome

logger = logging.getLogger(__name__)

NO_FILE_SELECTED = "no file selected"
NO_PORT_SELECTED = "no port selected"

Scanner = Callable[[], List[PortDescriptor]]


@dataclass
class WorkflowState:
    """
    Session state of the installer.

    Attributes:
        selected_file: Firmware image to flash
        selected_board: Board to flash, defaults to BoardIdentifier.default()
        selected_port: Port chosen by the user; may be stale after a rescan
        ports: Ports found by the last scan
        discovery_error: Set when the last scan failed
        general_error: Set when a flash was requested without a selection
        last_command: Rendering of the last command run
        last_output: Rendering of the last outcome
        last_outcome: Structured form of the last outcome
    """
    selected_file: Optional[Path] = None
    selected_board: BoardIdentifier = field(default_factory=BoardIdentifier.default)
    selected_port: Optional[PortDescriptor] = None
    ports: List[PortDescriptor] = field(default_factory=list)
    discovery_error: Optional[str] = None
    general_error: Optional[str] = None
    last_command: Optional[str] = None
    last_output: Optional[str] = None
    last_outcome: Optional[FlashOutcome] = None


# ============================================================================
# INTENTS
# ============================================================================

@dataclass(frozen=True)
class SelectFile:
    path: Union[str, Path]


@dataclass(frozen=True)
class SelectBoard:
    board: Union[str, BoardIdentifier]


@dataclass(frozen=True)
class SelectPort:
    port: PortDescriptor


@dataclass(frozen=True)
class Rescan:
    pass


@dataclass(frozen=True)
class Flash:
    pass


Intent = Union[SelectFile, SelectBoard, SelectPort, Rescan, Flash]


# ============================================================================
# HANDLERS
# ============================================================================

def select_file(state: WorkflowState, path: Union[str, Path]) -> None:
    """Set the firmware file. The file contents are never inspected."""
    state.selected_file = Path(path)


def select_board(state: WorkflowState, board: Union[str, BoardIdentifier]) -> None:
    """
    Set the board to flash.

    Raises:
        UnknownBoardError: If board is text that names no supported board;
            the state is left unchanged.
    """
    state.selected_board = BoardIdentifier.parse(board)


def select_port(state: WorkflowState, port: PortDescriptor) -> None:
    """Set the port. Membership in the last scan is not enforced."""
    state.selected_port = port


def rescan(state: WorkflowState, scanner: Optional[Scanner] = None) -> None:
    """
    Replace the port list with a fresh scan.

    On failure the port list is cleared and the discovery error is set.
    The selected port is kept either way.
    """
    scanner = scanner or scan_ports
    try:
        ports = scanner()
    except PortDiscoveryError as exc:
        state.ports = []
        state.discovery_error = f"ERROR: {exc}"
        return
    state.ports = list(ports)
    state.discovery_error = None


def prepare_flash(state: WorkflowState, executable: str = AVRDUDE) -> Optional[FlashCommand]:
    """
    Check the selections and build the command for a flash attempt.

    A missing file takes precedence over a missing port. On a missing
    selection the general error is set and None is returned; nothing else
    in the state changes.
    """
    if state.selected_file is None:
        state.general_error = NO_FILE_SELECTED
        return None
    if state.selected_port is None:
        state.general_error = NO_PORT_SELECTED
        return None

    profile = resolve(state.selected_board)
    return build_command(profile, state.selected_port, state.selected_file, executable=executable)


def record_flash(state: WorkflowState, command: FlashCommand, outcome: FlashOutcome) -> None:
    """Store a finished attempt, replacing the previous one."""
    state.last_command = command.display()
    state.last_output = outcome.to_summary()
    state.last_outcome = outcome
    state.general_error = None


def flash(
    state: WorkflowState,
    *,
    runner: Optional[Runner] = None,
    executable: str = AVRDUDE,
) -> Optional[FlashOutcome]:
    """
    Flash the selected file to the selected board. Blocks until avrdude exits.

    Returns:
        The outcome, or None if a selection was missing.
    """
    command = prepare_flash(state, executable)
    if command is None:
        return None
    outcome = execute(command, runner=runner)
    record_flash(state, command, outcome)
    return outcome


def apply_intent(
    state: WorkflowState,
    intent: Intent,
    *,
    scanner: Optional[Scanner] = None,
    runner: Optional[Runner] = None,
    executable: str = AVRDUDE,
) -> WorkflowState:
    """Dispatch an intent to its handler and return the (mutated) state."""
    if isinstance(intent, SelectFile):
        select_file(state, intent.path)
    elif isinstance(intent, SelectBoard):
        select_board(state, intent.board)
    elif isinstance(intent, SelectPort):
        select_port(state, intent.port)
    elif isinstance(intent, Rescan):
        rescan(state, scanner)
    elif isinstance(intent, Flash):
        flash(state, runner=runner, executable=executable)
    else:
        raise TypeError(f"Unknown intent: {intent!r}")
    return state


# ============================================================================
# BACKGROUND FLASHING
# ============================================================================

@dataclass(frozen=True)
class FlashCompleted:
    """Message posted by the worker when avrdude has exited."""
    command: FlashCommand
    outcome: FlashOutcome


class FlashWorker:
    """
    Runs flash attempts off the caller's thread.

    The owner of the WorkflowState calls submit() to start an attempt and
    poll() to apply finished attempts; the worker thread never touches the
    state. At most one attempt is in flight.
    """

    def __init__(self, *, runner: Optional[Runner] = None, executable: str = AVRDUDE) -> None:
        self.runner = runner
        self.executable = executable
        self._results: "queue.Queue[FlashCompleted]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None

    @property
    def busy(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def submit(self, state: WorkflowState) -> Optional[FlashCommand]:
        """
        Start a flash attempt for the current selections.

        Returns:
            The command being run, or None if a selection was missing
            (general error set) or an attempt is already running.
        """
        if self.busy:
            logger.warning("Flash already in progress; ignoring request")
            return None
        command = prepare_flash(state, self.executable)
        if command is None:
            return None

        self._thread = threading.Thread(target=self._run, args=(command,), daemon=True)
        self._thread.start()
        logger.debug("Dispatched flash to worker: %s", command.render())
        return command

    def _run(self, command: FlashCommand) -> None:
        outcome = execute(command, runner=self.runner)
        self._results.put(FlashCompleted(command, outcome))

    def poll(self, state: WorkflowState, timeout: Optional[float] = None) -> Optional[FlashCompleted]:
        """
        Apply a finished attempt to the state, if there is one.

        Args:
            state: State owned by the caller
            timeout: Seconds to wait for a result; None returns immediately

        Returns:
            The completed attempt that was applied, or None.
        """
        try:
            if timeout is None:
                done = self._results.get_nowait()
            else:
                done = self._results.get(timeout=timeout)
        except queue.Empty:
            return None
        record_flash(state, done.command, done.outcome)
        logger.debug("Flash finished with exit status %s", done.outcome.exit_code)
        return done

    def join(self) -> None:
        """Wait for the running attempt, if any, to finish."""
        if self._thread is not None:
            self._thread.join()
