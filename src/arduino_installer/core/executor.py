"""
Run avrdude and capture what it did.

The call blocks until avrdude exits; there is no timeout. A non-zero exit
status is a normal outcome, only a failure to start the process is
reported as a launch failure.
"""

import logging
import subprocess
from typing import Callable, List, Optional, Tuple

from .command import FlashCommand
from .results import FlashOutcome

logger = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[bytes]"]


def decode_output(data: Optional[bytes], stream: str) -> Tuple[str, Optional[str]]:
    """
    Decode captured output as UTF-8.

    Returns:
        Tuple of (text, error). On invalid UTF-8 the text is decoded with
        replacement characters and error describes the failure.
    """
    if not data:
        return "", None
    try:
        return data.decode("utf-8"), None
    except UnicodeDecodeError as exc:
        return data.decode("utf-8", errors="replace"), f"{stream}: {exc}"


def execute(command: FlashCommand, *, runner: Optional[Runner] = None) -> FlashOutcome:
    """
    Run the command and capture exit status, stdout and stderr.

    Args:
        command: Command built by build_command
        runner: subprocess.run compatible callable (injectable for tests)

    Returns:
        FlashOutcome, a launch failure if the executable could not be started.
    """
    runner = runner or subprocess.run
    logger.debug("Running %s", command.render())
    try:
        proc = runner(command.argv, check=False, capture_output=True)
    except OSError as exc:
        cause = exc.strerror or str(exc)
        if exc.filename:
            cause = f"{cause}: {exc.filename}"
        logger.warning("Could not start %s: %s", command.executable, cause)
        return FlashOutcome.launch_failure(cause)

    stdout, out_err = decode_output(proc.stdout, "stdout")
    stderr, err_err = decode_output(proc.stderr, "stderr")
    problems: List[str] = [e for e in (out_err, err_err) if e]

    if proc.returncode != 0:
        logger.info("%s exited with status %d", command.executable, proc.returncode)

    return FlashOutcome.completed(
        exit_code=proc.returncode,
        stdout=stdout,
        stderr=stderr,
        decode_error="; ".join(problems) or None,
    )
