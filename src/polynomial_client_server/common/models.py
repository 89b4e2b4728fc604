"""Pydantic models for polynomials and polynomial tuples."""
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class Polynomial(BaseModel):
    """
    Polynomial with real coefficients stored lowest degree first.

    ``coefficients[i]`` multiplies ``x^i``. An empty tuple means no terms are defined and is treated
    as the zero polynomial. High-order zero coefficients are allowed.
    """

    # Make the Pydantic instance immutable (read-only), polynomials are values
    # Overflowing products are sent as Infinity rather than null
    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    coefficients: Tuple[float, ...] = Field(default=(), description="Coefficients, index = power of x")

    @property
    def degree(self) -> int:
        """Highest stored power, 0 for the empty polynomial."""
        return max(len(self.coefficients) - 1, 0)

    def is_zero(self) -> bool:
        """Return True when every coefficient is zero (always True when there are none)."""
        return all(c == 0.0 for c in self.coefficients)


class PolynomialTuple(BaseModel):
    """Ordered collection of polynomials sent as the argument of a remote operation."""

    model_config = ConfigDict(frozen=True)

    polys: Tuple[Polynomial, ...] = Field(default=(), description="Operands, combined left to right")
