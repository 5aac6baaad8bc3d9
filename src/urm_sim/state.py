"""ExecutionState: run-time state of one URM execution.

State Components:
    - Registers: name -> natural number, created lazily on first write
    - PC: 1-based index of the next statement to execute
    - Step count: number of transitions applied so far
    - Program: the (immutable) program being executed

Reading a register that was never written yields 0. Execution has
terminated exactly when pc exceeds the number of statements.

The state is owned by a single run and only mutated through the engine's
step operation; renderers work from snapshot() copies.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from .instructions import Program, Statement


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of an execution state for rendering and tracing.

    Attributes:
        pc: Program counter at the time of the snapshot
        registers: Copy of the register store (insertion ordered)
        statements: The program's statements
        step_count: Transitions applied so far
        terminated: Whether pc is past the last statement
    """
    pc: int
    registers: Dict[str, int]
    statements: Tuple[Statement, ...]
    step_count: int
    terminated: bool


@dataclass
class ExecutionState:
    """Mutable state of a single URM run.

    Attributes:
        program: Program being executed
        registers: Register store; missing names read as 0
        pc: Program counter (1-based)
        step_count: Number of steps executed
    """
    program: Program
    registers: Dict[str, int] = field(default_factory=dict)
    pc: int = 1
    step_count: int = 0

    def read(self, register: str) -> int:
        """Get the value of a register (0 if never written)."""
        return self.registers.get(register, 0)

    def write(self, register: str, value: int) -> None:
        """Set a register, creating it if needed.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError(f"Register {register} cannot hold negative value {value}")
        self.registers[register] = value

    @property
    def terminated(self) -> bool:
        """True once pc has moved past the last statement."""
        return self.pc > len(self.program.statements)

    @property
    def output(self) -> int:
        """Current value of the program's output register."""
        return self.read(self.program.output_register)

    def snapshot(self) -> Snapshot:
        """Create an immutable snapshot of the current state.

        Returns:
            Snapshot with a copy of the registers
        """
        return Snapshot(
            pc=self.pc,
            registers=dict(self.registers),
            statements=self.program.statements,
            step_count=self.step_count,
            terminated=self.terminated
        )

    def context_window(self, radius: int = 2) -> List[Tuple[int, Statement]]:
        """Statements around pc, for display.

        Args:
            radius: Number of statements to show on each side of pc

        Returns:
            List of (1-based index, statement) pairs
        """
        statements = self.program.statements
        start = max(self.pc - radius, 1)
        end = min(self.pc + radius, len(statements))
        return [(index, statements[index - 1]) for index in range(start, end + 1)]

    def __str__(self) -> str:
        """Human-readable state representation."""
        regs = " ".join(f"{k}={v}" for k, v in self.registers.items())
        status = "TERMINATED" if self.terminated else ""
        return f"[Step {self.step_count}] PC={self.pc} {regs} {status}".rstrip()


def create_initial_state(program: Program, input_values: Sequence[int]) -> ExecutionState:
    """Create the state for a fresh run.

    Input registers are bound positionally to the input values; the caller
    is responsible for validating the pair first.

    Args:
        program: Parsed program
        input_values: Values for program.input_registers

    Returns:
        ExecutionState with pc = 1
    """
    return ExecutionState(
        program=program,
        registers=dict(zip(program.input_registers, input_values)),
        pc=1,
        step_count=0
    )
