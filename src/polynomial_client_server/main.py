"""
Command line entrypoint.

Two subcommands:
- server: serve Add, Sub and Mul over TCP
- client: connect to a server and run the interactive menu, optionally fed by a script file

Examples
--------
polynomial-client-server server -p 6090
polynomial-client-server client -s 127.0.0.1:6090 -t 5
polynomial-client-server client --script resources/session.7z
"""

import argparse
import io
from multiprocessing import cpu_count
import sys
from typing import List, Optional

from pydantic import BaseModel, Field, FilePath, IPvAnyAddress, ValidationError

from polynomial_client_server.client.client import PolynomialClient
from polynomial_client_server.client.script import load_script
from polynomial_client_server.client.session import InteractiveClient, Session
from polynomial_client_server.common.errors import ConnectionFailed
from polynomial_client_server.common.logger import logger
from polynomial_client_server.server.server import PolynomialServer


class ServerArgs(BaseModel):
    """
    Pydantic model used to validate server CLI arguments.

    Attributes
    ----------
    host : IPvAnyAddress
        Address to listen on.
    port : int
        TCP port to listen on.
    workers : int
        Maximum number of simultaneous worker processes.
    """

    host: IPvAnyAddress
    port: int = Field(ge=1, le=65535)
    workers: int = Field(ge=1)


class ClientArgs(BaseModel):
    """
    Pydantic model used to validate client CLI arguments.

    Attributes
    ----------
    host : IPvAnyAddress
        Server address.
    port : int
        Server TCP port.
    timeout : float
        Connection timeout in seconds.
    script : FilePath, optional
        File or archive whose lines replace the interactive input.
    """

    host: IPvAnyAddress
    port: int = Field(ge=1, le=65535)
    timeout: float = Field(gt=0)
    script: Optional[FilePath] = None


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser with its server and client subcommands.

    :return: Argument parser
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(description="Polynomial arithmetic client/server")
    subparsers = parser.add_subparsers(dest="command", required=True)

    server_parser = subparsers.add_parser("server", help="Serve polynomial operations")
    server_parser.add_argument("-p", "--port", type=int, default=6090, help="server tcp port")
    server_parser.add_argument("--host", default="127.0.0.1", help="address to listen on")
    server_parser.add_argument("--workers", type=int, default=cpu_count(), help="maximum simultaneous workers")

    client_parser = subparsers.add_parser("client", help="Run the interactive client")
    client_parser.add_argument("-s", "--server", default="127.0.0.1:6090", help="server address HOST:PORT")
    client_parser.add_argument("-t", "--timeout", type=float, default=5.0, help="connection timeout in seconds")
    client_parser.add_argument("--script", help="read user input from this file or archive instead of stdin")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> BaseModel:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments, defaults to sys.argv[1:]

    :return: Validated ServerArgs or ClientArgs
    :rtype: BaseModel
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "server":
            return ServerArgs(host=args.host, port=args.port, workers=args.workers)

        host, _, port = args.server.rpartition(":")
        if not host or not port.isdigit():
            parser.error(f"server address must be HOST:PORT, got {args.server!r}")
        return ClientArgs(host=host, port=int(port), timeout=args.timeout, script=args.script)
    except ValidationError as exc:
        parser.error(str(exc))


def run_server(args: ServerArgs) -> int:
    """
    Start the polynomial server and block until it is interrupted.

    :return: Exit status
    :rtype: int
    """
    server = PolynomialServer(host=args.host, port=args.port, max_workers=args.workers)
    server.start()
    return 0


def run_client(args: ClientArgs) -> int:
    """
    Connect to the server and run the interactive session.

    Failing to connect is fatal.

    :return: Exit status
    :rtype: int
    """
    stdin = io.StringIO(load_script(args.script)) if args.script is not None else sys.stdin

    client = PolynomialClient(host=args.host, port=args.port, timeout=args.timeout)
    try:
        connection = client.connect()
    except ConnectionFailed as exc:
        logger.critical(f"🔌❌ {exc}")
        return 1

    with connection:
        InteractiveClient(service=connection, stdin=stdin).run(Session())
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main function, dispatching to the selected subcommand.
    """
    args = parse_args(argv)
    if isinstance(args, ServerArgs):
        sys.exit(run_server(args))
    sys.exit(run_client(args))


if __name__ == "__main__":
    main()
