"""TCP server that evaluates polynomial operations using worker processes."""
import json
from multiprocessing import Pipe, Process, cpu_count
from multiprocessing.connection import Connection
import socket
import threading
from typing import Any, Iterator, Tuple

from pydantic import BaseModel, ConfigDict, Field, IPvAnyAddress, PrivateAttr, ValidationError

from polynomial_client_server.common.logger import logger
from polynomial_client_server.common.operations import OperationRequest, OperationResult
from polynomial_client_server.server.worker import WorkerProcess


class PolynomialServer(BaseModel):
    """
    TCP socket server answering polynomial operation requests.

    Features:
        - Newline-delimited JSON requests and results over a persistent connection.
        - Serves each client connection on its own thread.
        - Spawns one worker process per request, destroyed as soon as it has answered.
        - Runs at most ``max_workers`` workers at a time, across all connections.
    """

    model_config = ConfigDict(frozen=True)

    host: IPvAnyAddress = Field(default="127.0.0.1", description="Server host address")
    port: int = Field(default=6090, ge=1, le=65535, description="Server TCP port")
    max_workers: int = Field(default_factory=cpu_count, ge=1, description="Maximum simultaneous workers")

    _slots: threading.BoundedSemaphore = PrivateAttr()

    def model_post_init(self, __context: Any) -> None:
        """Create the semaphore bounding the number of active workers."""
        self._slots = threading.BoundedSemaphore(self.max_workers)

    def _receive_lines(self, conn: socket.socket) -> Iterator[str]:
        """
        Yield non-empty request lines from a client connection until it is closed.

        :param socket.socket conn: Connected client socket

        :return: Iterator over stripped request lines
        :rtype: Iterator[str]
        """
        buffer = b""
        while True:
            # Note: data may arrive in several chunks, a line may span chunk boundaries
            chunk: bytes = conn.recv(4096)
            if not chunk:
                break
            buffer += chunk
            *lines, buffer = buffer.split(b"\n")
            for line in lines:
                if line.strip():
                    yield line.decode(errors="replace").strip()
        if buffer.strip():
            yield buffer.decode(errors="replace").strip()

    @staticmethod
    def _request_id(line: str) -> int:
        """Best-effort identifier of a request that failed validation, 0 if none can be read."""
        try:
            request_id = json.loads(line).get("id")
        except (ValueError, AttributeError):
            return 0
        return request_id if isinstance(request_id, int) and request_id >= 1 else 0

    def _spawn_worker(self, request: OperationRequest) -> Tuple[Process, Connection]:
        """
        Spawn a WorkerProcess for the given request and return process and pipe.

        :param OperationRequest request: Validated request

        :return: Tuple of (Process, parent_pipe)
        :rtype: Tuple[Process, Connection]
        """
        parent_conn, child_conn = Pipe(duplex=False)
        worker = WorkerProcess(conn=child_conn, request=request)
        process = Process(target=worker.run)
        process.start()
        # Only the worker writes, so a dead worker shows up as EOFError on recv()
        child_conn.close()
        return process, parent_conn

    def _evaluate(self, request: OperationRequest) -> OperationResult:
        """
        Run a request on a worker process and wait for its outcome.

        :param OperationRequest request: Validated request

        :return: Result or error sent by the worker
        :rtype: OperationResult
        """
        with self._slots:
            process, pipe_conn = self._spawn_worker(request)
            try:
                return pipe_conn.recv()
            except EOFError:
                logger.error(f"👷❌ Worker exited without answering request {request.id}")
                return OperationResult(id=request.id, error="worker exited without a result")
            finally:
                pipe_conn.close()
                process.join()

    def _handle_line(self, line: str) -> OperationResult:
        """
        Validate a request line and evaluate it.

        :param str line: JSON-encoded OperationRequest

        :return: Result, or an error result if the line is not a valid request
        :rtype: OperationResult
        """
        try:
            request = OperationRequest.model_validate_json(line)
        except ValidationError as exc:
            logger.error(f"📨❌ Invalid request: {exc}")
            return OperationResult(id=self._request_id(line), error=f"invalid request: {exc}")
        return self._evaluate(request)

    def _handle_connection(self, conn: socket.socket, address: Any) -> None:
        """
        Answer every request received on a client connection, in order.

        :param socket.socket conn: Connected client socket
        :param address: Client address, for logging
        """
        logger.info(f"🔌 Client connected: {address}")
        with conn:
            try:
                for line in self._receive_lines(conn):
                    outcome = self._handle_line(line)
                    conn.sendall(outcome.model_dump_json().encode() + b"\n")
            except OSError as exc:
                logger.error(f"🔌❌ Connection to {address} lost: {exc}")
        logger.info(f"🔌 Client disconnected: {address}")

    def start(self) -> None:
        """
        Start the TCP server and serve clients until interrupted.

        Steps:
            1. Bind and listen on the specified host and port.
            2. Accept client connections, each handled on its own thread.
            3. For each request line, spawn a worker process and send its result back.

        :return: None
        """
        logger.info(f"🖥️ Starting server on {self.host}:{self.port}")

        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((str(self.host), self.port))
            s.listen()
            logger.info("🖥️ Server listening")

            try:
                while True:
                    conn, address = s.accept()
                    threading.Thread(target=self._handle_connection, args=(conn, address), daemon=True).start()
            except KeyboardInterrupt:
                logger.info("🖥️ Server stopped")
