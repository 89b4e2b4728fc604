"""Pydantic models for polynomial operation requests and results."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from polynomial_client_server.common.models import Polynomial, PolynomialTuple


class Operation(str, Enum):
    """Remote operations exposed by the polynomial service."""

    ADD = "Add"
    SUB = "Sub"
    MUL = "Mul"


class OperationRequest(BaseModel):
    """Represents a single polynomial operation request sent to the server."""

    id: int = Field(..., ge=1, description="Request identifier, echoed in the result")
    operation: Operation = Field(..., description="Name of the remote operation")
    polys: PolynomialTuple = Field(..., description="Operands of the operation")


class OperationResult(BaseModel):
    """Represents the outcome of a polynomial operation, either a result or an error."""

    id: int = Field(..., ge=0, description="Identifier of the answered request, 0 if unknown")
    result: Optional[Polynomial] = Field(default=None, description="Computed polynomial")
    error: Optional[str] = Field(default=None, description="Reason the request could not be served")

    @model_validator(mode="after")
    def exactly_one_outcome(self) -> "OperationResult":
        """Ensure that either a result or an error is present, never both."""
        if (self.result is None) == (self.error is None):
            raise ValueError("Exactly one of result and error must be set")
        return self
