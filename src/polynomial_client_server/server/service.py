"""Server-side boundary of the polynomial RPC service."""
from polynomial_client_server.common.models import Polynomial, PolynomialTuple
from polynomial_client_server.common.operations import Operation, OperationRequest, OperationResult
from polynomial_client_server.server.engine import OPERATIONS


class PolynomialService:
    """Expose Add, Sub and Mul, each taking a PolynomialTuple and returning a Polynomial."""

    @staticmethod
    def call(operation: Operation, polys: PolynomialTuple) -> Polynomial:
        """
        Apply a remote operation to its operands.

        :param Operation operation: Operation to run
        :param PolynomialTuple polys: Operands

        :return: Result polynomial
        :rtype: Polynomial
        """
        return OPERATIONS[Operation(operation)](polys.polys)

    @staticmethod
    def handle(request: OperationRequest) -> OperationResult:
        """
        Answer a validated request.

        :param OperationRequest request: Request received from a client

        :return: Result carrying the request identifier
        :rtype: OperationResult
        """
        return OperationResult(id=request.id, result=PolynomialService.call(request.operation, request.polys))
