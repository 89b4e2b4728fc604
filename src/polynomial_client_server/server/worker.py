"""Worker process for evaluating polynomial operations."""
from multiprocessing.connection import Connection
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from polynomial_client_server.common.logger import logger
from polynomial_client_server.common.operations import OperationRequest, OperationResult
from polynomial_client_server.server.service import PolynomialService


class WorkerProcess(BaseModel):
    """
    Worker process responsible for evaluating a single polynomial operation.

    Lifecycle:
        - Spawned by the server for one request
        - Sends an OperationResult (result or error) through a Pipe
        - Terminates immediately after computation
    """

    # Make the Pydantic instance immutable (read-only) for safety
    # Allow arbitrary types like multiprocessing.Connection
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    conn: Connection = Field(..., description="Connection object for sending results back to server")
    request: OperationRequest = Field(..., description="Single operation request to evaluate")

    def run(self) -> None:
        """
        Evaluate the requested operation and send the result or error through the pipe.

        :return: None
        """
        logger.info(f"👷🏁 Worker started on request {self.request.id}: {self.request.operation.value}")

        outcome: Union[OperationResult, None] = None

        try:
            outcome = PolynomialService.handle(self.request)
            self.conn.send(outcome)

        except Exception as exc:
            logger.error(f"👷❌ Worker failed on request {self.request.id}: {exc}")
            self.conn.send(OperationResult(id=self.request.id, error=str(exc)))

        finally:
            # Always close the connection
            self.conn.close()

            if outcome is not None:
                logger.info(f"👷✅ Worker finished on request {self.request.id}")
