"""Step-driven debugger for URM programs.

The debugger never executes statements on its own terms: it only decides
*when* to call the engine's step primitive and renders snapshots between
calls.

Modes:
    Manual: execute one statement per request (space / Enter)
    Auto:   execute one statement every `timeout_ms` milliseconds

Controls:
    m       toggle manual / auto mode
    space   step (manual mode)
    j       slow down (auto mode)
    k       speed up (auto mode)
    q       quit
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .engine import Terminated, init_state, step
from .instructions import Program
from .state import ExecutionState

logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT_MS = 2000
MIN_TIMEOUT_MS = 1
MAX_TIMEOUT_MS = 100000
CONTEXT_RADIUS = 2


def render_window(state: ExecutionState, radius: int = CONTEXT_RADIUS) -> List[str]:
    """Numbered statements around pc, the current one marked with '->'."""
    lines = []
    for index, statement in state.context_window(radius):
        marker = "->" if index == state.pc else "  "
        lines.append(f"{marker} {statement.to_string(index)}")
    if state.terminated:
        lines.append(f"   (terminated, output {state.output})")
    return lines


@dataclass
class DebugMode:
    """Pacing mode of the debugger.

    Attributes:
        auto: True for timed auto-advance, False for manual stepping
        timeout_ms: Delay between auto steps
        step_requested: Manual mode only; a step is pending
    """
    auto: bool = False
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    step_requested: bool = False

    @property
    def speed(self) -> float:
        """Auto-mode speed in instructions per second, rounded to 2 places."""
        return round(1000 / self.timeout_ms, 2)

    def handle_key(self, key: str) -> None:
        """Update the mode for a key press (unknown keys are ignored)."""
        if self.auto:
            if key == "m":
                self.auto = False
                self.step_requested = False
            elif key == "j":
                self.slow_down()
            elif key == "k":
                self.speed_up()
        else:
            if key == "m":
                self.auto = True
                self.timeout_ms = DEFAULT_TIMEOUT_MS
            elif key in (" ", ""):
                self.step_requested = True

    def slow_down(self) -> None:
        # Step by the current order of magnitude: 2000 -> 3000, 100 -> 200
        scaling = 10 ** int(math.floor(math.log10(self.timeout_ms)))
        self.timeout_ms = min(self.timeout_ms + scaling, MAX_TIMEOUT_MS)

    def speed_up(self) -> None:
        # 1000 -> 900 rather than 1000 -> 0
        scaling = 10 ** int(math.floor(math.log10(self.timeout_ms - math.log10(self.timeout_ms))))
        self.timeout_ms = max(self.timeout_ms - scaling, MIN_TIMEOUT_MS)


class DebugSession:
    """A paused-by-default run of one program with display helpers.

    Attributes:
        state: Execution state being stepped
        mode: Current pacing mode
        step_number: 1-based number of the next step to execute
    """

    def __init__(self, program: Program, input_values: Sequence[int], mode: Optional[DebugMode] = None):
        """Start a session.

        Raises:
            ValidationError: If the inputs do not fit the program
        """
        self.state: ExecutionState = init_state(program, input_values)
        self.mode = mode or DebugMode()
        self.step_number = 1

    @property
    def finished(self) -> bool:
        return self.state.terminated

    def advance(self) -> bool:
        """Execute the next statement.

        Returns:
            True if the program has terminated
        """
        result = step(self.state)
        self.step_number += 1
        return isinstance(result, Terminated)

    def poll(self) -> bool:
        """Execute a statement if the mode asks for one right now.

        In manual mode this consumes a pending step request; in auto mode it
        always steps (the driver is responsible for the delay).

        Returns:
            True if the program has terminated
        """
        if self.finished:
            return True
        if self.mode.auto:
            return self.advance()
        if self.mode.step_requested:
            self.mode.step_requested = False
            return self.advance()
        return False

    def render(self) -> str:
        """Render the current frame as text."""
        lines = [f"URM Debugger (step {self.step_number})", "=" * 23, ""]

        lines.append("Registers:")
        for register, value in self.state.registers.items():
            lines.append(f"{register} = {value}")
        lines.append("")

        lines.append("Instructions:")
        lines.extend(render_window(self.state))
        lines.append("")

        lines.extend(self._controls())
        return "\n".join(lines)

    def _controls(self) -> List[str]:
        if self.mode.auto:
            lines = [
                f"Controls: Auto mode [speed: {self.mode.speed} instructions/s "
                f"({self.mode.timeout_ms} ms/instruction)]",
                "- 'm': Switch to Manual Mode",
                "- 'j': Decrease Speed",
                "- 'k': Increase Speed",
                "- Ctrl+C: Pause",
            ]
        else:
            lines = [
                "Controls: Manual Mode",
                "- 'm': Switch to Auto Mode",
                "- Enter/'Space': Execute Next Instruction",
            ]
        lines.append("- 'q'/Ctrl+C: Exit Debugger" if not self.mode.auto else "- 'q': Exit Debugger")
        return lines


def run_debugger(
    program: Program,
    input_values: Sequence[int],
    read_key: Optional[Callable[[str], str]] = None,
    write: Callable[[str], None] = print,
    sleep: Callable[[float], None] = time.sleep,
) -> Optional[int]:
    """Drive a DebugSession from a line-oriented terminal.

    In manual mode each entered line is treated as a key; in auto mode the
    session steps on a timer until it terminates or the user presses Ctrl+C,
    which drops back to manual mode.

    Args:
        program: Parsed program
        input_values: Values for the program's input registers
        read_key: Prompted line reader (defaults to input)
        write: Output sink for rendered frames
        sleep: Delay function (seconds)

    Returns:
        Program output, or None if the user quit before termination

    Raises:
        ValidationError: If the inputs do not fit the program
    """
    read_key = read_key or input
    session = DebugSession(program, input_values)

    while not session.finished:
        write(session.render())

        if session.mode.auto:
            try:
                sleep(session.mode.timeout_ms / 1000)
                session.poll()
            except KeyboardInterrupt:
                session.mode.handle_key("m")
            continue

        try:
            key = read_key("> ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            key = "q"
        if key == "q":
            logger.debug("Debugger exited at pc %d", session.state.pc)
            return None

        # Each character is one key: "mkk" switches to auto and speeds up twice
        for char in key or " ":
            session.mode.handle_key(char)
        session.poll()

    write(session.render())
    return session.state.output
