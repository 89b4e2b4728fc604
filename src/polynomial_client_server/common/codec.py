"""Parse and format polynomials in human-readable text form."""
import re
from typing import List, TextIO

from polynomial_client_server.common.errors import BadCoefficient, EndOfInput
from polynomial_client_server.common.models import Polynomial


# Decimal or scientific notation, optional sign: "3", "-2.", ".5", "1e-3"
COEFFICIENT_PATTERN: re.Pattern = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class PolynomialCodec:
    """
    Convert polynomials to and from their textual representation.

    Input lines list the coefficients from the highest degree down to the constant term,
    separated by whitespace:

        - Input line: 1 0 -2
        - Stored coefficients (lowest degree first): (-2.0, 0.0, 1.0)
        - Formatted: x^2 - 2
    """

    @staticmethod
    def tokenize(line: str) -> List[str]:
        """
        Split an input line into coefficient tokens.

        A blank line yields a single empty token so that it is rejected like any other bad coefficient.

        :param str line: Input line

        :return: List of tokens, highest degree first
        :rtype: List[str]
        """
        return line.split() or [""]

    @staticmethod
    def _parse_coefficient(token: str) -> float:
        """
        Convert one token to a float.

        :param str token: Token string

        :return: Parsed coefficient
        :rtype: float
        :raises BadCoefficient: If the token is not a decimal floating-point literal
        """
        # float() alone would also accept "inf", "nan" and "1_000"
        if not COEFFICIENT_PATTERN.fullmatch(token):
            raise BadCoefficient(token)
        return float(token)

    @staticmethod
    def decode(line: str) -> Polynomial:
        """
        Parse a line of coefficients into a Polynomial.

        :param str line: Coefficients separated by whitespace, highest degree first

        :return: Decoded polynomial
        :rtype: Polynomial
        :raises BadCoefficient: On the first token that is not a valid number
        """
        coefficients: List[float] = [
            PolynomialCodec._parse_coefficient(token) for token in PolynomialCodec.tokenize(line)
        ]
        # Text is highest degree first, storage is lowest degree first
        coefficients.reverse()
        return Polynomial(coefficients=coefficients)

    @staticmethod
    def read(stream: TextIO) -> Polynomial:
        """
        Read one line from a text stream and decode it.

        :param TextIO stream: Input stream

        :return: Decoded polynomial
        :rtype: Polynomial
        :raises EndOfInput: If the stream is exhausted
        :raises BadCoefficient: If the line contains an invalid coefficient
        """
        line = stream.readline()
        if not line:
            raise EndOfInput("end of input")
        return PolynomialCodec.decode(line)

    @staticmethod
    def format_number(value: float) -> str:
        """
        Format a float with the shortest representation that reads back to the same value.

        :param float value: Number to format

        :return: Formatted number, without a trailing ".0"
        :rtype: str
        """
        text = repr(float(value))
        if text.endswith(".0"):
            text = text[:-2]
        return text

    @staticmethod
    def encode(poly: Polynomial) -> str:
        """
        Format a polynomial in conventional algebraic notation, highest degree first.

        Zero terms are skipped, a coefficient of magnitude 1 is elided in front of x, and the sign of
        every term but the first is written as the separator.

        :param Polynomial poly: Polynomial to format

        :return: Formatted polynomial, "0" if it has no nonzero coefficient
        :rtype: str
        """
        terms = [(power, c) for power, c in enumerate(poly.coefficients) if c != 0.0]
        if not terms:
            return "0"

        parts: List[str] = []
        for power, c in reversed(terms):
            if parts:
                parts.append(" + " if c > 0.0 else " - ")
                magnitude = "" if power > 0 and abs(c) == 1.0 else PolynomialCodec.format_number(abs(c))
            elif power == 0 or abs(c) != 1.0:
                magnitude = PolynomialCodec.format_number(c)
            else:
                magnitude = "-" if c < 0.0 else ""

            if power == 0:
                parts.append(magnitude)
            elif power == 1:
                parts.append(f"{magnitude}x")
            else:
                parts.append(f"{magnitude}x^{power}")

        return "".join(parts)
