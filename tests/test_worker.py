"""Unit tests for WorkerProcess using real Pipe connections."""
from multiprocessing import Pipe

import pytest

from polynomial_client_server.common.models import Polynomial, PolynomialTuple
from polynomial_client_server.common.operations import Operation, OperationRequest, OperationResult
from polynomial_client_server.server.service import PolynomialService
from polynomial_client_server.server.worker import WorkerProcess


def make_request(operation: Operation, request_id: int = 1) -> OperationRequest:
    """Request combining 1 + 2x and 1 + 2x + 3x^2."""
    polys = PolynomialTuple(polys=[Polynomial(coefficients=[1, 2]), Polynomial(coefficients=[1, 2, 3])])
    return OperationRequest(id=request_id, operation=operation, polys=polys)


@pytest.mark.parametrize(
    "operation,expected",
    [
        (Operation.ADD, (2.0, 4.0, 3.0)),
        (Operation.SUB, (0.0, 0.0, -3.0)),
        (Operation.MUL, (1.0, 4.0, 7.0, 6.0)),
    ],
)
def test_worker_sends_result(operation: Operation, expected: tuple) -> None:
    """Worker sends the computed polynomial through the connection."""
    parent_conn, child_conn = Pipe()
    worker = WorkerProcess(conn=child_conn, request=make_request(operation, request_id=7))
    worker.run()

    msg = parent_conn.recv()
    assert isinstance(msg, OperationResult)
    assert msg.id == 7
    assert msg.result.coefficients == expected
    assert msg.error is None


def test_worker_sends_error_when_evaluation_fails(monkeypatch) -> None:
    """Worker sends an error result if evaluation raises."""
    def failing_handle(request):
        raise RuntimeError("boom")

    monkeypatch.setattr(PolynomialService, "handle", staticmethod(failing_handle))

    parent_conn, child_conn = Pipe()
    worker = WorkerProcess(conn=child_conn, request=make_request(Operation.ADD, request_id=2))
    worker.run()

    msg = parent_conn.recv()
    assert msg.id == 2
    assert msg.result is None
    assert msg.error == "boom"


def test_worker_closes_connection() -> None:
    """The worker end of the pipe is closed once the result is sent."""
    parent_conn, child_conn = Pipe()
    WorkerProcess(conn=child_conn, request=make_request(Operation.ADD)).run()

    parent_conn.recv()
    assert child_conn.closed
    with pytest.raises(EOFError):
        parent_conn.recv()


def test_worker_rejects_invalid_request() -> None:
    """Pydantic validation prevents creating a WorkerProcess without a request."""
    _, child_conn = Pipe()
    with pytest.raises(ValueError):
        WorkerProcess(conn=child_conn, request={"id": 1, "operation": "Pow"})
