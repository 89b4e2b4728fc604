"""Test class PolynomialEngine."""
import pytest

from polynomial_client_server.common.models import Polynomial
from polynomial_client_server.common.operations import Operation
from polynomial_client_server.server.engine import OPERATIONS, PolynomialEngine


def poly(*coefficients: float) -> Polynomial:
    """Build a polynomial from coefficients given lowest degree first."""
    return Polynomial(coefficients=coefficients)


@pytest.mark.parametrize("polys,expected", [
    ([poly(1, 2), poly(1, 2, 3)], (2.0, 4.0, 3.0)),
    ([poly(1, 2, 3), poly(1, 2)], (2.0, 4.0, 3.0)),
    ([poly(1), poly(), poly(0, 0, 1)], (1.0, 0.0, 1.0)),
    ([poly(1, 2)], (1.0, 2.0)),
    ([poly(1, 1), poly(-1, -1)], (0.0, 0.0)),
    ([], ()),
])
def test_add(polys, expected) -> None:
    """Add sums index by index, as long as the longest operand."""
    assert PolynomialEngine.add(polys).coefficients == expected


def test_add_commutative_and_associative() -> None:
    """The order of the operands does not change the sum beyond rounding."""
    p, q, r = poly(0.1, 0.2, 0.3), poly(1e10, -3.5), poly(0.7, 0, 0, 4)
    reference = PolynomialEngine.add([p, q, r]).coefficients
    for polys in ([q, p, r], [r, q, p], [PolynomialEngine.add([p, q]), r], [p, PolynomialEngine.add([q, r])]):
        assert PolynomialEngine.add(polys).coefficients == pytest.approx(reference)


@pytest.mark.parametrize("polys,expected", [
    ([poly(5, 5, 5), poly(1), poly(1, 1)], (3.0, 4.0, 5.0)),
    ([poly(1), poly(1, 2, 3)], (0.0, -2.0, -3.0)),
    ([poly(1, 2, 3)], (1.0, 2.0, 3.0)),
    ([poly()], ()),
    ([], ()),
])
def test_sub(polys, expected) -> None:
    """Sub subtracts every following operand from the first, as long as the longest operand."""
    assert PolynomialEngine.sub(polys).coefficients == expected


@pytest.mark.parametrize("p", [poly(1, 2, 3), poly(0.5, 0, 0), poly(-4), poly()])
def test_sub_self_is_zero_of_same_length(p) -> None:
    """Sub([p]) is p and Sub([p, p]) is all zeros with the length of p."""
    assert PolynomialEngine.sub([p]) == p
    assert PolynomialEngine.sub([p, p]).coefficients == (0.0,) * len(p.coefficients)


@pytest.mark.parametrize("polys,expected", [
    ([poly(1, 1), poly(1, 1)], (1.0, 2.0, 1.0)),
    ([poly(-1, 1), poly(1, 1)], (-1.0, 0.0, 1.0)),
    ([poly(1, 1), poly(1, 1), poly(1, 1)], (1.0, 3.0, 3.0, 1.0)),
    ([poly(2), poly(3)], (6.0,)),
    ([poly(1, 2)], (1.0, 2.0)),
    ([poly(1, 0), poly(2)], (2.0, 0.0)),  # high-order zeros keep their storage
    ([poly(1, 1), poly(1, 0), poly(1, 1)], (1.0, 2.0, 1.0, 0.0)),
    ([poly(0, 0, 2), poly(0, 3)], (0.0, 0.0, 0.0, 6.0)),
])
def test_mul(polys, expected) -> None:
    """Mul convolves the operands left to right."""
    assert PolynomialEngine.mul(polys).coefficients == expected


@pytest.mark.parametrize("polys", [
    [poly(0, 0), poly(1, 1)],
    [poly(1, 1), poly(0)],
    [poly(1, 1), poly()],
    [poly(1, 2), poly(3, 4), poly(0, 0, 0)],
    [poly()],
    [],
])
def test_mul_by_zero_is_empty(polys) -> None:
    """A zero operand, or no operand at all, gives the zero polynomial of length 0."""
    assert PolynomialEngine.mul(polys).coefficients == ()


def test_mul_degree_is_sum_of_degrees() -> None:
    """The degree of a product is the sum of the operand degrees."""
    p, q = poly(1, -2, 0.5), poly(3, 0, 0, 1)
    assert PolynomialEngine.mul([p, q]).degree == p.degree + q.degree


def test_mul_associative() -> None:
    """Grouping of three operands does not change the product beyond rounding."""
    p, q, r = poly(0.3, -1.2), poly(2, 0, 0.1), poly(-5, 1, 1, 7)
    left = PolynomialEngine.mul([PolynomialEngine.mul([p, q]), r])
    right = PolynomialEngine.mul([p, PolynomialEngine.mul([q, r])])
    flat = PolynomialEngine.mul([p, q, r])
    assert left.coefficients == pytest.approx(right.coefficients)
    assert flat.coefficients == pytest.approx(left.coefficients)


def test_operations_do_not_return_inputs() -> None:
    """Every operation allocates a new result, even with a single operand."""
    p = poly(1, 2)
    for fn in (PolynomialEngine.add, PolynomialEngine.sub, PolynomialEngine.mul):
        result = fn([p])
        assert result == p
        assert result is not p


def test_operations_table() -> None:
    """Each remote operation maps to its engine function."""
    assert OPERATIONS[Operation.ADD] is PolynomialEngine.add
    assert OPERATIONS[Operation.SUB] is PolynomialEngine.sub
    assert OPERATIONS[Operation.MUL] is PolynomialEngine.mul
