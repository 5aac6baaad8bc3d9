"""Grammar-driven parser for URM program text.

Pipeline:
    text -> lark (LALR, contextual lexer) -> parse tree -> ProgramBuilder -> Program

Surface grammar:
    in(R1, R2, ...)          optional, first
    R++;  R--;  R = 0;       statements, each terminated by ';'
    if R == 0 goto N;
    if R != 0 goto N;
    goto N;
    out(R)                   mandatory, last

Statement N is the N-th statement in text order, whatever its kind.
Whitespace and newlines are insignificant; '#' comments run to end of line.
"""

import logging
from typing import List, NamedTuple, Optional, Tuple

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from .errors import URMSemanticError, URMSyntaxError
from .instructions import (
    Condition,
    ConditionalGoto,
    Decrement,
    Goto,
    Increment,
    Program,
    Statement,
    ZeroAssignment,
)

logger = logging.getLogger(__name__)


URM_GRAMMAR = r"""
    program: input_decl? statement* output_decl?

    input_decl: "in" "(" [register_list] ")" ";"?
    register_list: REGISTER ("," REGISTER)*
    output_decl: "out" "(" REGISTER ")" ";"?

    statement: increment
             | decrement
             | zero_assignment
             | conditional_eq
             | conditional_neq
             | goto

    increment: REGISTER "++" ";"
    decrement: REGISTER "--" ";"
    zero_assignment: REGISTER "=" "0" ";"
    conditional_eq: "if" REGISTER "==" "0" "goto" TARGET ";"
    conditional_neq: "if" REGISTER "!=" "0" "goto" TARGET ";"
    goto: "goto" TARGET ";"

    REGISTER: /[A-Za-z_][A-Za-z0-9_]*/
    TARGET: /[0-9]+/
    COMMENT: /#[^\n]*/

    %import common.WS
    %ignore WS
    %ignore COMMENT
"""


class _Declaration(NamedTuple):
    kind: str
    registers: Tuple[str, ...]


@v_args(inline=True)
class ProgramBuilder(Transformer):
    """Turns a URM parse tree into instruction model values."""

    def program(self, *parts):
        input_registers: Tuple[str, ...] = ()
        output_register: Optional[str] = None
        statements: List[Statement] = []

        for part in parts:
            if isinstance(part, Statement):
                statements.append(part)
            elif part.kind == "in":
                input_registers = part.registers
            else:
                output_register = part.registers[0]

        return input_registers, tuple(statements), output_register

    def input_decl(self, registers=None):
        return _Declaration("in", tuple(registers or ()))

    def register_list(self, *registers):
        return [str(r) for r in registers]

    def output_decl(self, register):
        return _Declaration("out", (str(register),))

    def statement(self, stmt):
        return stmt

    def increment(self, register):
        return Increment(str(register))

    def decrement(self, register):
        return Decrement(str(register))

    def zero_assignment(self, register):
        return ZeroAssignment(str(register))

    def conditional_eq(self, register, target):
        return ConditionalGoto(str(register), Condition.EQUAL, int(target))

    def conditional_neq(self, register, target):
        return ConditionalGoto(str(register), Condition.NOT_EQUAL, int(target))

    def goto(self, target):
        return Goto(int(target))


class URMParser:
    """Lark-backed parser for whole programs and single statements."""

    def __init__(self):
        self._lark = Lark(
            URM_GRAMMAR,
            parser="lalr",
            lexer="contextual",
            start=["program", "statement"],
        )
        self._builder = ProgramBuilder()
        self._terminal_text = {
            t.name: (repr(t.pattern.value) if t.pattern.type == "str" else t.name)
            for t in self._lark.terminals
        }

    def parse_program(self, text: str) -> Program:
        """Parse URM source text into a Program.

        Args:
            text: Complete program text

        Returns:
            Parsed, immutable Program

        Raises:
            URMSyntaxError: If the text does not match the grammar
            URMSemanticError: If no output declaration is present or a
                jump targets position 0
        """
        tree = self._parse(text, "program")
        input_registers, statements, output_register = self._builder.transform(tree)

        if output_register is None:
            logger.debug("Rejected program: no output declaration")
            raise URMSemanticError("No output register found")

        for index, statement in enumerate(statements, start=1):
            _check_target(statement, index)

        logger.debug(
            "Parsed program: %d input(s), %d statement(s), output %s",
            len(input_registers), len(statements), output_register
        )
        return Program(
            input_registers=input_registers,
            statements=statements,
            output_register=output_register
        )

    def parse_statement(self, text: str) -> Statement:
        """Parse a single statement, e.g. ``"if R2 == 0 goto 5;"``.

        Raises:
            URMSyntaxError: If the text is not exactly one statement
            URMSemanticError: If the statement jumps to position 0
        """
        statement = self._builder.transform(self._parse(text, "statement"))
        _check_target(statement, None)
        return statement

    def _parse(self, text: str, start: str):
        try:
            return self._lark.parse(text, start=start)
        except UnexpectedInput as e:
            error = self._syntax_error(e, text)
            logger.debug("Syntax error: %s", error)
            raise error from None

    def _syntax_error(self, e: UnexpectedInput, text: str) -> URMSyntaxError:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        if not line or line < 1 or not column or column < 1:
            line, column = None, None

        if isinstance(e, UnexpectedToken):
            if e.token.type == "$END":
                message = "unexpected end of input"
            else:
                message = f"unexpected token {str(e.token)!r}"
            expected = self._describe_expected(e.expected)
            if expected:
                message = f"{message}, expected one of: {expected}"
        elif isinstance(e, UnexpectedCharacters):
            message = f"unexpected character {e.char!r}"
        elif isinstance(e, UnexpectedEOF):
            message = "unexpected end of input"
        else:
            message = str(e)

        context = e.get_context(text).rstrip("\n") if line is not None else ""
        return URMSyntaxError(message, line=line, column=column, context=context)

    def _describe_expected(self, names) -> str:
        return ", ".join(sorted(self._terminal_text.get(n, n) for n in names if n != "$END"))


def _check_target(statement: Statement, index: Optional[int]) -> None:
    target = getattr(statement, "target", None)
    if target is not None and target < 1:
        where = f"statement {index}" if index is not None else "statement"
        raise URMSemanticError(f"Jump target must be at least 1 ({where}: {statement})")


_parser: Optional[URMParser] = None


def get_parser() -> URMParser:
    """Get the shared parser instance (grammar is compiled once)."""
    global _parser
    if _parser is None:
        _parser = URMParser()
    return _parser


def parse_program(text: str) -> Program:
    """Parse URM program text. See URMParser.parse_program."""
    return get_parser().parse_program(text)


def parse_statement(text: str) -> Statement:
    """Parse one URM statement. See URMParser.parse_statement."""
    return get_parser().parse_statement(text)
