"""TCP client for the polynomial service."""
import socket
from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field, IPvAnyAddress, PrivateAttr, ValidationError

from polynomial_client_server.common.errors import ConnectionFailed, RemoteCallError
from polynomial_client_server.common.logger import logger
from polynomial_client_server.common.models import Polynomial, PolynomialTuple
from polynomial_client_server.common.operations import Operation, OperationRequest, OperationResult


class PolynomialConnection(BaseModel):
    """
    Open connection to a polynomial server, used to call Add, Sub and Mul.

    Calls are synchronous: each request is sent and its result awaited before returning.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    sock: Any = Field(..., description="Connected socket")

    _buffer: bytes = PrivateAttr(default=b"")
    _next_id: int = PrivateAttr(default=1)

    def _receive_line(self) -> bytes:
        """
        Read one newline-terminated message from the server.

        :return: Message without its trailing newline
        :rtype: bytes
        :raises RemoteCallError: If the server closes the connection first
        """
        while b"\n" not in self._buffer:
            # Note: data may arrive in several chunks
            chunk: bytes = self.sock.recv(4096)
            if not chunk:
                raise RemoteCallError("connection closed by server")
            self._buffer += chunk
        line, self._buffer = self._buffer.split(b"\n", 1)
        return line

    def call(self, operation: Operation, polys: Sequence[Polynomial]) -> Polynomial:
        """
        Invoke a remote operation and wait for its result.

        :param Operation operation: Operation to invoke
        :param Sequence[Polynomial] polys: Operands, combined left to right

        :return: Polynomial computed by the server
        :rtype: Polynomial
        :raises RemoteCallError: If the call fails or the response is not a valid result for this call
        """
        request = OperationRequest(id=self._next_id, operation=operation, polys=PolynomialTuple(polys=tuple(polys)))
        self._next_id += 1

        try:
            self.sock.sendall(request.model_dump_json().encode() + b"\n")
            line = self._receive_line()
        except OSError as exc:
            raise RemoteCallError(f"{operation.value} call failed: {exc}") from exc

        try:
            outcome = OperationResult.model_validate_json(line)
        except ValidationError as exc:
            raise RemoteCallError(f"malformed response: {exc}") from exc

        if outcome.error is not None:
            raise RemoteCallError(f"server error: {outcome.error}")
        if outcome.id != request.id:
            raise RemoteCallError(f"response to request {outcome.id} received for request {request.id}")
        return outcome.result

    def add(self, polys: Sequence[Polynomial]) -> Polynomial:
        """Sum of the operands, computed remotely."""
        return self.call(Operation.ADD, polys)

    def sub(self, polys: Sequence[Polynomial]) -> Polynomial:
        """First operand minus all the others, computed remotely."""
        return self.call(Operation.SUB, polys)

    def mul(self, polys: Sequence[Polynomial]) -> Polynomial:
        """Product of the operands, computed remotely."""
        return self.call(Operation.MUL, polys)

    def close(self) -> None:
        """Close the underlying socket."""
        self.sock.close()

    def __enter__(self) -> "PolynomialConnection":
        return self

    def __exit__(self, *args) -> None:
        self.close()


class PolynomialClient(BaseModel):
    """
    TCP client configuration for reaching a polynomial server.

    Only establishing the connection is bounded by ``timeout``, calls on an open connection block until
    the server answers.
    """

    # Make the Pydantic instance immutable (read-only), to prevent errors
    # that could be caused by changes to the network configuration during execution.
    model_config = ConfigDict(frozen=True)

    host: IPvAnyAddress = Field(default="127.0.0.1", description="Server host address")
    port: int = Field(default=6090, ge=1, le=65535, description="Server TCP port")
    timeout: float = Field(default=5.0, gt=0, description="Connection timeout in seconds")

    def connect(self) -> PolynomialConnection:
        """
        Dial the server.

        :return: Open connection
        :rtype: PolynomialConnection
        :raises ConnectionFailed: If the server cannot be reached within the timeout
        """
        try:
            sock = socket.create_connection((str(self.host), self.port), timeout=self.timeout)
        except OSError as exc:
            raise ConnectionFailed(f"failed to dial {self.host}:{self.port}: {exc}") from exc

        sock.settimeout(None)
        logger.info(f"🔌 Connected to {self.host}:{self.port}")
        return PolynomialConnection(sock=sock)
