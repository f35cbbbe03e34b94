"""
Arduino Installer CLI

Command-line interface for listing boards and ports and flashing firmware.
"""

import sys
import logging
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.logging import RichHandler
from rich.markup import escape

from arduino_installer.boards import BoardIdentifier, list_boards, resolve
from arduino_installer.core.command import AVRDUDE, build_command
from arduino_installer.core.errors import UnknownBoardError
from arduino_installer.core.messages import (
    MessageLevel,
    StatusMessage,
    messages_from_state,
)
from arduino_installer.core.ports import PortDescriptor, PortType, find_port
from arduino_installer.core.workflow import (
    FlashWorker,
    WorkflowState,
    prepare_flash,
    rescan,
    select_board,
    select_file,
    select_port,
)

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
)
logger = logging.getLogger("arduino_installer")

# Setup Rich console
console = Console()

app = typer.Typer(help="🔧 Arduino Installer - flash firmware with avrdude")

AVRDUDE_ENVVAR = "ARDUINO_INSTALLER_AVRDUDE"
WORKER_POLL_SEC = 0.1


def print_header(text: str) -> None:
    """Print fancy header."""
    console.print(Panel(text, expand=False, style="bold blue"))


def print_success(text: str) -> None:
    """Print success message."""
    console.print(f"✓ {escape(text)}", style="green")


def print_warning(text: str) -> None:
    """Print warning message."""
    console.print(f"⚠️  {escape(text)}", style="yellow")


def print_error(text: str) -> None:
    """Print error message."""
    console.print(f"❌ {escape(text)}", style="red")


def print_json(data: dict) -> None:
    """Print JSON for scripting, unwrapped and without markup."""
    console.print(json.dumps(data, indent=2), markup=False, highlight=False, soft_wrap=True)


def print_status_message(message: StatusMessage, verbose: bool = False) -> None:
    """Print a structured message with optional remediation."""
    if message.level == MessageLevel.ERROR:
        style = "red"
    elif message.level == MessageLevel.WARN:
        style = "yellow"
    else:
        style = "green"
    console.print(message.to_cli_string(verbose=verbose), style=style, markup=False)


def parse_board(value: str) -> BoardIdentifier:
    """
    Parse a board from the command line.

    CLI wrapper around BoardIdentifier.parse that converts UnknownBoardError
    to typer.BadParameter for proper CLI error handling.
    """
    try:
        return BoardIdentifier.parse(value)
    except UnknownBoardError as e:
        raise typer.BadParameter(str(e))


def resolve_port(state: WorkflowState, name: str) -> PortDescriptor:
    """
    Pick the scanned port named `name`.

    Ports missing from the scan are still usable (avrdude may know better);
    they are passed on as UNKNOWN ports with a warning.
    """
    port = find_port(state.ports, name)
    if port is None:
        print_warning(f"Port {name} was not found by the scan; using it anyway")
        port = PortDescriptor(name, PortType.UNKNOWN)
    return port


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Flash compiled firmware onto Arduino boards."""
    if verbose:
        logger.setLevel(logging.DEBUG)


@app.command()
def ports(
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON for scripting"),
) -> None:
    """List available serial ports."""
    state = WorkflowState()
    rescan(state)

    if output_json:
        print_json({
            "ports": [p.to_dict() for p in state.ports],
            "error": state.discovery_error,
        })
        if state.discovery_error:
            raise typer.Exit(1)
        return

    print_header("Available Serial Ports")

    if state.discovery_error:
        print_error(state.discovery_error)
        raise typer.Exit(1)

    if not state.ports:
        print_warning("No serial ports found")
        return

    table = Table(title="Serial Ports")
    table.add_column("Port", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("VID:PID", style="yellow")
    table.add_column("Description", style="green")

    for port in state.ports:
        ids = f"{port.usb.vid:04X}:{port.usb.pid:04X}" if port.usb else "-"
        table.add_row(port.name, port.port_type.name, ids, port.description or "-")

    console.print(table)


@app.command("list-boards")
def list_boards_command() -> None:
    """List supported boards and their avrdude parameters."""
    print_header("Supported Boards")

    table = Table(title="Boards")
    table.add_column("Board", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Programmer", style="magenta")
    table.add_column("Part", style="yellow")
    table.add_column("Chip Erase", style="red")

    for board in list_boards():
        profile = resolve(board)
        table.add_row(
            board.value,
            board.display_name,
            profile.programmer_name,
            profile.part_number,
            "Yes" if profile.erase_before_write else "No",
        )

    console.print(table)


@app.command("show-command")
def show_command(
    firmware: Path = typer.Argument(..., help="Path to compiled firmware (.elf)"),
    port: str = typer.Option(..., "--port", "-p", help="Serial port"),
    board: str = typer.Option(BoardIdentifier.default().value, "--board", "-b", help="Board to flash"),
    avrdude: str = typer.Option(AVRDUDE, "--avrdude", envvar=AVRDUDE_ENVVAR, help="avrdude executable"),
) -> None:
    """Print the avrdude command that flash would run, without running it."""
    board_id = parse_board(board)
    command = build_command(
        resolve(board_id),
        PortDescriptor(port),
        firmware,
        executable=avrdude,
    )
    console.print(command.render(), markup=False, highlight=False, soft_wrap=True)


@app.command()
def flash(
    firmware: Path = typer.Argument(..., help="Path to compiled firmware (.elf)"),
    port: Optional[str] = typer.Option(None, "--port", "-p", help="Serial port"),
    board: str = typer.Option(BoardIdentifier.default().value, "--board", "-b", help="Board to flash"),
    avrdude: str = typer.Option(AVRDUDE, "--avrdude", envvar=AVRDUDE_ENVVAR, help="avrdude executable"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON for scripting"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the command without running it"),
) -> None:
    """Flash firmware to a board with avrdude."""
    state = WorkflowState()
    select_board(state, parse_board(board))
    select_file(state, firmware)
    rescan(state)
    if port:
        select_port(state, resolve_port(state, port))

    if dry_run:
        command = prepare_flash(state, avrdude)
        if command is None:
            for message in messages_from_state(state):
                print_status_message(message, verbose=True)
            raise typer.Exit(1)
        console.print(command.display(), markup=False, highlight=False, soft_wrap=True)
        return

    if not output_json:
        print_header(f"Flashing {state.selected_board.display_name}")

    worker = FlashWorker(executable=avrdude)
    command = worker.submit(state)
    if command is not None:
        if output_json:
            worker.join()
            worker.poll(state)
        else:
            console.print(command.display(), style="dim", markup=False, highlight=False, soft_wrap=True)
            with console.status("Flashing device. Please wait..."):
                while worker.poll(state, timeout=WORKER_POLL_SEC) is None:
                    if not worker.busy and worker.poll(state) is None:
                        break

    outcome = state.last_outcome
    ok = outcome is not None and outcome.succeeded

    if output_json:
        print_json({
            "ok": ok,
            "board": state.selected_board.value,
            "port": state.selected_port.name if state.selected_port else None,
            "command": state.last_command,
            "error": state.general_error,
            "outcome": outcome.to_dict() if outcome else None,
        })
    else:
        if state.last_output:
            console.print(state.last_output, markup=False, highlight=False, soft_wrap=True)
        for message in messages_from_state(state):
            print_status_message(message, verbose=True)
        if ok:
            print_success("Flashing completed")

    if not ok:
        raise typer.Exit(1)


@app.command()
def ui() -> None:
    """Launch the Streamlit UI."""
    try:
        from arduino_installer.streamlit_ui import launch
    except ImportError:
        print_error('Streamlit not installed: pip install -e ".[ui]"')
        raise typer.Exit(1)
    launch()


def main() -> None:
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(0)
    except Exception as e:
        console.print(f"\n[red bold]Fatal error:[/red bold] {escape(str(e))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
