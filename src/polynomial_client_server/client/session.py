"""Interactive menu for building two polynomials and combining them remotely."""
from enum import Enum
import sys
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from polynomial_client_server.common.codec import PolynomialCodec
from polynomial_client_server.common.errors import BadCoefficient, EndOfInput, TransportError
from polynomial_client_server.common.logger import logger
from polynomial_client_server.common.models import Polynomial
from polynomial_client_server.common.operations import Operation

ANSI_CLEAR: str = "\033[H\033[2J"


class Command(str, Enum):
    """Menu entries, keyed by what the user types."""

    SET_P = "1"
    SET_Q = "2"
    ADD = "3"
    SUB = "4"
    MUL = "5"


COMMAND_LABELS: Dict[Command, str] = {
    Command.SET_P: "set p",
    Command.SET_Q: "set q",
    Command.ADD: "Add(p, q)",
    Command.SUB: "Sub(p, q)",
    Command.MUL: "Mul(p, q)",
}

# Symbol printed between p and q in front of a result
OPERATION_SYMBOLS: Dict[Operation, str] = {
    Operation.ADD: "+",
    Operation.SUB: "-",
    Operation.MUL: "*",
}


class Session(BaseModel):
    """The two working polynomials of an interactive session."""

    model_config = ConfigDict(validate_assignment=True)

    p: Polynomial = Field(default_factory=Polynomial, description="First operand")
    q: Polynomial = Field(default_factory=Polynomial, description="Second operand")


class InteractiveClient(BaseModel):
    """
    Text menu driving a polynomial service.

    The user sets p and q by typing their coefficients, highest degree first, and asks the server
    for Add(p, q), Sub(p, q) or Mul(p, q). End of input ends the session.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    service: Any = Field(..., description="Object exposing add, sub and mul, e.g. a PolynomialConnection")
    stdin: Any = Field(default_factory=lambda: sys.stdin, description="User input stream")
    stdout: Any = Field(default_factory=lambda: sys.stdout, description="Menu and results stream")
    stderr: Any = Field(default_factory=lambda: sys.stderr, description="Prompt to continue stream")

    def _read_line(self) -> str:
        """
        Read one line of user input.

        :return: Line without surrounding whitespace
        :rtype: str
        :raises EndOfInput: If the input stream is exhausted
        """
        line = self.stdin.readline()
        if not line:
            raise EndOfInput("end of input")
        return line.strip()

    def _pause(self) -> None:
        """Wait for the user to press return."""
        print("press return to continue", file=self.stderr)
        # End of input is noticed by the next menu prompt
        self.stdin.readline()

    def _report_error(self, what: str, exc: Exception) -> None:
        logger.error(f"failed to {what}: {exc}")
        self._pause()

    def _redraw(self, session: Session) -> None:
        """Clear the screen, then show both polynomials and the menu."""
        self.stdout.write(ANSI_CLEAR)
        print(
            f"\np = [{PolynomialCodec.encode(session.p)}]\nq = [{PolynomialCodec.encode(session.q)}]\n",
            file=self.stdout,
        )
        for command in Command:
            print(f"{command.value}) {COMMAND_LABELS[command]}", file=self.stdout)

    def _read_command(self) -> Command:
        """
        Prompt until the user types a known menu key.

        :return: Selected command
        :rtype: Command
        :raises EndOfInput: If the input stream is exhausted
        """
        while True:
            self.stdout.write("#? ")
            self.stdout.flush()
            line = self._read_line()
            print(file=self.stdout)
            try:
                return Command(line)
            except ValueError:
                continue

    def _read_polynomial(self, name: str) -> Polynomial:
        """
        Prompt for the coefficients of a polynomial.

        :param str name: Name shown in the prompt

        :return: Decoded polynomial
        :rtype: Polynomial
        :raises EndOfInput: If the input stream is exhausted
        :raises BadCoefficient: If the line contains an invalid coefficient
        """
        self.stdout.write(f"{name}? ")
        self.stdout.flush()
        try:
            return PolynomialCodec.read(self.stdin)
        finally:
            print(file=self.stdout)

    def _apply(self, session: Session, operation: Operation) -> None:
        """
        Ask the server for ``operation(p, q)`` and print the result.

        :param Session session: Current session
        :param Operation operation: Operation to apply
        :raises TransportError: If the remote call fails
        """
        polys = (session.p, session.q)
        if operation is Operation.ADD:
            result = self.service.add(polys)
        elif operation is Operation.SUB:
            result = self.service.sub(polys)
        else:
            result = self.service.mul(polys)

        print(f"p {OPERATION_SYMBOLS[operation]} q = [{PolynomialCodec.encode(result)}]", file=self.stdout)
        self._pause()

    def dispatch(self, session: Session, command: Command) -> None:
        """
        Run one menu command against the session.

        A polynomial that fails to decode leaves the previous value in place. Decoding and transport
        errors are reported and the session goes on.

        :param Session session: Session updated by set commands
        :param Command command: Command to run
        :raises EndOfInput: If the input stream is exhausted
        """
        try:
            if command is Command.SET_P:
                session.p = self._read_polynomial("p")
            elif command is Command.SET_Q:
                session.q = self._read_polynomial("q")
            elif command is Command.ADD:
                self._apply(session, Operation.ADD)
            elif command is Command.SUB:
                self._apply(session, Operation.SUB)
            elif command is Command.MUL:
                self._apply(session, Operation.MUL)
        except (BadCoefficient, TransportError) as exc:
            self._report_error(COMMAND_LABELS[command], exc)

    def run(self, session: Session) -> None:
        """
        Show the menu and run commands until the input is exhausted.

        :param Session session: Session owned by this loop
        """
        try:
            while True:
                self._redraw(session)
                self.dispatch(session, self._read_command())
        except EndOfInput:
            logger.info("👋 End of input, session closed")
