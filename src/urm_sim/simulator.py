"""URMSimulator: orchestrator around the execution engine.

Ties the pipeline together for launchers and front-ends:
    TEXT -> PARSE -> PROGRAM -> VALIDATE -> STEP ... STEP -> OUTPUT

Every step is recorded as an ExecutionTraceEntry with snapshots taken
before and after the transition, so a run can be audited or replayed in
a display after the fact.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Optional, Sequence

from .engine import init_state, step
from .instructions import Program, Statement
from .parser import parse_program
from .state import ExecutionState, Snapshot


@dataclass
class ExecutionTraceEntry:
    """Single entry in the execution trace.

    Attributes:
        step: Step number (1-based)
        pc: Position of the executed statement
        statement: The executed statement
        pre_state: Snapshot before execution
        post_state: Snapshot after execution
    """
    step: int
    pc: int
    statement: Statement
    pre_state: Snapshot
    post_state: Snapshot

    def register_changes(self) -> Dict[str, tuple]:
        """Registers whose value changed in this step, as (before, after)."""
        before = self.pre_state.registers
        after = self.post_state.registers
        return {
            reg: (before.get(reg, 0), value)
            for reg, value in after.items()
            if before.get(reg) != value
        }


class URMSimulator:
    """Runs URM programs and records an execution trace.

    Attributes:
        program: Currently loaded program
        state: State of the current run (None until start())
        trace: Trace entries of the current run (most recent trace_limit only)
        record_trace: Whether step() keeps trace entries
        trace_limit: Maximum number of entries kept, None for unbounded
    """

    def __init__(self, record_trace: bool = True, trace_limit: Optional[int] = None):
        """Initialize an empty simulator.

        Args:
            record_trace: Keep a trace entry per step (disable for long runs)
            trace_limit: Keep only the most recent entries; older ones are dropped
        """
        self.program: Optional[Program] = None
        self.state: Optional[ExecutionState] = None
        self.record_trace = record_trace
        self.trace_limit = trace_limit
        self.trace: Deque[ExecutionTraceEntry] = self._new_trace()

    def load_program(self, source: str) -> Program:
        """Parse and load a program from source text.

        Raises:
            URMSyntaxError: If the source is malformed
            URMSemanticError: If the source lacks an output declaration
        """
        self.load(parse_program(source))
        return self.program

    def load(self, program: Program) -> None:
        """Load an already parsed program, discarding any current run."""
        self.program = program
        self.state = None
        self.trace = self._new_trace()

    def start(self, input_values: Sequence[int]) -> ExecutionState:
        """Begin a fresh run of the loaded program.

        Raises:
            RuntimeError: If no program is loaded
            ValidationError: If the inputs do not fit the program
        """
        if self.program is None:
            raise RuntimeError("No program loaded")
        self.state = init_state(self.program, list(input_values))
        self.trace = self._new_trace()
        return self.state

    def step(self) -> ExecutionTraceEntry:
        """Execute a single statement.

        Returns:
            ExecutionTraceEntry describing the step

        Raises:
            RuntimeError: If no run is active or the run has terminated
        """
        state = self._require_state()
        pc = state.pc
        pre_state = state.snapshot()

        step(state)
        statement = state.program.statement_at(pc)

        entry = ExecutionTraceEntry(
            step=state.step_count,
            pc=pc,
            statement=statement,
            pre_state=pre_state,
            post_state=state.snapshot()
        )
        if self.record_trace:
            self.trace.append(entry)
        return entry

    def run(self) -> int:
        """Run until termination and return the output value."""
        state = self._require_state()
        while not state.terminated:
            self.step()
        return state.output

    def run_program(self, source: str, input_values: Sequence[int]) -> int:
        """Load, start and run a program in one call."""
        self.load_program(source)
        self.start(input_values)
        return self.run()

    def is_terminated(self) -> bool:
        if self.state is None:
            return False
        return self.state.terminated

    def get_output(self) -> int:
        return self._require_state().output

    def dump_registers(self) -> Dict[str, int]:
        return dict(self._require_state().registers)

    def snapshot(self) -> Snapshot:
        return self._require_state().snapshot()

    def get_summary(self) -> Dict:
        """Get execution summary.

        Returns:
            Dictionary with step count, termination flag, pc, registers and output
        """
        state = self._require_state()
        return {
            "steps": state.step_count,
            "terminated": state.terminated,
            "pc": state.pc,
            "registers": dict(state.registers),
            "output": state.output,
            "trace_length": len(self.trace),
        }

    def format_trace(self) -> str:
        """Render the execution trace in human-readable form."""
        lines = ["=" * 60, "URM EXECUTION TRACE", "=" * 60]

        for entry in self.trace:
            lines.append(f"[Step {entry.step}] {entry.statement.to_string(entry.pc)}")
            changes = [
                f"{reg}: {before} -> {after}"
                for reg, (before, after) in entry.register_changes().items()
            ]
            if changes:
                lines.append(f"  Changes: {', '.join(changes)}")
            if entry.post_state.pc != entry.pc + 1:
                lines.append(f"  PC: {entry.pc} -> {entry.post_state.pc}")

        if self.state is not None:
            lines.extend(["=" * 60, "FINAL STATE", "=" * 60])
            summary = self.get_summary()
            lines.append(f"  Registers: {summary['registers']}")
            lines.append(f"  PC: {summary['pc']}")
            lines.append(f"  Steps: {summary['steps']}")
            lines.append(f"  Output: {summary['output']}")
        return "\n".join(lines)

    def print_trace(self) -> None:
        print(self.format_trace())

    def _new_trace(self) -> Deque[ExecutionTraceEntry]:
        return deque(maxlen=self.trace_limit)

    def _require_state(self) -> ExecutionState:
        if self.state is None:
            raise RuntimeError("No run started")
        return self.state
