"""Exceptions raised by the codec and the RPC transport."""


class BadCoefficient(ValueError):
    """A token of an input line is not a decimal floating-point number."""

    def __init__(self, token: str):
        super().__init__(f"bad coefficient: {token}")
        self.token = token


class EndOfInput(EOFError):
    """The input stream is exhausted."""


class TransportError(ConnectionError):
    """Base class for failures of the remote call mechanism."""


class ConnectionFailed(TransportError):
    """The server could not be reached."""


class RemoteCallError(TransportError):
    """A call was sent but no valid result came back."""
