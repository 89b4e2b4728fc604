"""Polynomial arithmetic over tuples of polynomials."""
from collections.abc import Callable as ABCCallable
from typing import Callable, Dict, List, Sequence

from polynomial_client_server.common.models import Polynomial
from polynomial_client_server.common.operations import Operation


class PolynomialEngine:
    """
    Add, subtract and multiply any number of polynomials, combined left to right.

    Design constraints:
        - Inputs are never mutated, every call allocates its own result
        - No shared state, calls may run concurrently
        - Total: every well-formed input, including empty and all-zero polynomials, has a result
    """

    @staticmethod
    def _sum_length(polys: Sequence[Polynomial]) -> int:
        """Length of a sum or difference: the longest operand, 0 without operands."""
        return max((len(p.coefficients) for p in polys), default=0)

    @staticmethod
    def _product_length(polys: Sequence[Polynomial]) -> int:
        """
        Length of a product: one plus the sum of the operand degrees.

        :param Sequence[Polynomial] polys: Operands

        :return: Result length, 0 without operands or if any operand is identically zero
        :rtype: int
        """
        if not polys or any(p.is_zero() for p in polys):
            return 0
        return 1 + sum(p.degree for p in polys)

    @staticmethod
    def add(polys: Sequence[Polynomial]) -> Polynomial:
        """
        Sum all polynomials index by index.

        :param Sequence[Polynomial] polys: Operands

        :return: Sum, as long as the longest operand
        :rtype: Polynomial
        """
        result: List[float] = [0.0] * PolynomialEngine._sum_length(polys)
        for p in polys:
            for i, c in enumerate(p.coefficients):
                result[i] += c
        return Polynomial(coefficients=result)

    @staticmethod
    def sub(polys: Sequence[Polynomial]) -> Polynomial:
        """
        Subtract every following polynomial from the first one.

        :param Sequence[Polynomial] polys: Operands

        :return: Difference, as long as the longest operand
        :rtype: Polynomial
        """
        result: List[float] = [0.0] * PolynomialEngine._sum_length(polys)
        if not polys:
            return Polynomial(coefficients=result)

        result[: len(polys[0].coefficients)] = polys[0].coefficients
        for p in polys[1:]:
            for i, c in enumerate(p.coefficients):
                result[i] -= c
        return Polynomial(coefficients=result)

    @staticmethod
    def mul(polys: Sequence[Polynomial]) -> Polynomial:
        """
        Multiply all polynomials by convolving them pairwise into a running product.

        :param Sequence[Polynomial] polys: Operands

        :return: Product, of length 1 + sum of degrees, or empty if any operand is zero
        :rtype: Polynomial
        """
        length: int = PolynomialEngine._product_length(polys)
        if length == 0:
            return Polynomial()

        running: List[float] = [0.0] * length
        running[: len(polys[0].coefficients)] = polys[0].coefficients
        degree: int = polys[0].degree

        for p in polys[1:]:
            product: List[float] = [0.0] * length
            # Only running[0..degree] can be nonzero at this point
            for i in range(degree + 1):
                c = running[i]
                for j, d in enumerate(p.coefficients):
                    product[i + j] += c * d
            running = product
            degree += p.degree

        return Polynomial(coefficients=running)


# Type alias for engine functions (taking a sequence of polynomials, returning one)
EngineFn: ABCCallable[[Sequence[Polynomial]], Polynomial] = Callable[[Sequence[Polynomial]], Polynomial]

# Mapping of remote operation names to engine functions
OPERATIONS: Dict[Operation, EngineFn] = {
    Operation.ADD: PolynomialEngine.add,
    Operation.SUB: PolynomialEngine.sub,
    Operation.MUL: PolynomialEngine.mul,
}
