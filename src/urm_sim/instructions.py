"""Instruction model for URM programs.

A parsed program is a plain, immutable value:

    Program
        input_registers: ordered register names bound to the input vector
        statements:      ordered statements, addressed 1-based by position
        output_register: register whose final value is the result

Statements form a closed set of variants:
    Increment         R++;
    Decrement         R--;            (saturates at 0)
    ZeroAssignment    R = 0;
    Goto              goto N;
    ConditionalGoto   if R == 0 goto N;  /  if R != 0 goto N;

Rendering produces text the parser accepts again, so a rendered statement
re-parses to an equal statement.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Condition(Enum):
    """Comparison of a register against zero."""
    EQUAL = "=="
    NOT_EQUAL = "!="

    def holds(self, value: int) -> bool:
        if self is Condition.EQUAL:
            return value == 0
        return value != 0


@dataclass(frozen=True)
class Statement:
    """Base class for all URM statements."""

    def to_string(self, index: int) -> str:
        """Render the statement as a numbered program line.

        Args:
            index: 1-based position of the statement in its program

        Returns:
            Line such as ``"3: R1++;"``
        """
        return f"{index}: {self}"


@dataclass(frozen=True)
class Increment(Statement):
    register: str

    def __str__(self) -> str:
        return f"{self.register}++;"


@dataclass(frozen=True)
class Decrement(Statement):
    register: str

    def __str__(self) -> str:
        return f"{self.register}--;"


@dataclass(frozen=True)
class ZeroAssignment(Statement):
    register: str

    def __str__(self) -> str:
        return f"{self.register} = 0;"


@dataclass(frozen=True)
class Goto(Statement):
    target: int

    def __str__(self) -> str:
        return f"goto {self.target};"


@dataclass(frozen=True)
class ConditionalGoto(Statement):
    register: str
    condition: Condition
    target: int

    def __str__(self) -> str:
        return f"if {self.register} {self.condition.value} 0 goto {self.target};"


@dataclass(frozen=True)
class Program:
    """Parsed URM program.

    Attributes:
        input_registers: Register names bound positionally to the inputs
        statements: Statements in text order (statement i has index i + 1)
        output_register: Register read once execution terminates
    """
    input_registers: Tuple[str, ...]
    statements: Tuple[Statement, ...]
    output_register: str

    def __len__(self) -> int:
        return len(self.statements)

    def statement_at(self, pc: int) -> Statement:
        """Fetch the statement at a 1-based position.

        Raises:
            IndexError: If pc is outside [1, len(program)]
        """
        if pc < 1 or pc > len(self.statements):
            raise IndexError(f"No statement at position {pc}")
        return self.statements[pc - 1]

    def to_source(self) -> str:
        """Render the whole program as parseable URM text."""
        lines = [f"in({', '.join(self.input_registers)})"]
        lines.extend(f"    {statement}" for statement in self.statements)
        lines.append(f"out({self.output_register})")
        return "\n".join(lines)
