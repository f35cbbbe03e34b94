"""
Result object for flash attempts.

Provides a single outcome structure that both the CLI and the Streamlit
UI render. The outcome is never interpreted beyond exit status: avrdude's
own output is shown as-is.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .messages import MessageCode


@dataclass(frozen=True)
class FlashOutcome:
    """
    Outcome of one avrdude run.

    Either the process launched (exit_code is set and stdout/stderr hold the
    decoded output) or it failed to launch (launch_error holds the OS cause).

    Attributes:
        exit_code: Process exit status, None if the launch failed
        stdout: Decoded standard output
        stderr: Decoded standard error
        decode_error: Set when the output was not valid UTF-8
        launch_error: OS-reported reason the process could not start
    """
    exit_code: Optional[int] = None
    stdout: str = ""
    stderr: str = ""
    decode_error: Optional[str] = None
    launch_error: Optional[str] = None

    @property
    def launched(self) -> bool:
        return self.launch_error is None

    @property
    def succeeded(self) -> bool:
        """True when avrdude ran, exited with status 0 and printed valid UTF-8."""
        return self.kind() is MessageCode.I_FLASH_OK

    def kind(self) -> MessageCode:
        """Classify the outcome for display."""
        if not self.launched:
            return MessageCode.E_LAUNCH_FAILED
        if self.decode_error:
            return MessageCode.E_OUTPUT_UNDECODABLE
        if self.exit_code != 0:
            return MessageCode.E_TOOL_FAILED
        return MessageCode.I_FLASH_OK

    def to_summary(self) -> str:
        """
        Generate the human-readable rendering of the outcome.

        Suitable for the output field of the workflow state.
        """
        if not self.launched:
            return f"Flashing: failed to start: {self.launch_error}"

        lines = [f"Flashing: exit status {self.exit_code}"]
        if self.decode_error:
            lines.append(f"Output is not valid UTF-8: {self.decode_error}")
        if self.stdout.strip():
            lines.append(self.stdout.rstrip())
        if self.stderr.strip():
            lines.append(self.stderr.rstrip())
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "launched": self.launched,
            "succeeded": self.succeeded,
            "exit_code": self.exit_code,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "decode_error": self.decode_error,
            "launch_error": self.launch_error,
        }

    @classmethod
    def completed(
        cls,
        exit_code: int,
        stdout: str = "",
        stderr: str = "",
        decode_error: Optional[str] = None,
    ) -> "FlashOutcome":
        """Create the outcome of a process that ran."""
        return cls(
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
            decode_error=decode_error,
        )

    @classmethod
    def launch_failure(cls, cause: str) -> "FlashOutcome":
        """Create the outcome of a process that could not start."""
        return cls(launch_error=cause)
