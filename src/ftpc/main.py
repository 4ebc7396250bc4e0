"""ftpc - Interactive FTP client entry point."""

import argparse
import getpass
import logging
import os
import sys
from typing import Callable, Optional, TextIO

from .config import get_config
from .errors import FTPError
from .models import ActiveMode, PassiveMode
from .session import FTPSession

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  ls [path]               list remote directory
  cd <path>               change remote directory
  pwd                     print remote directory
  get <remote> [local]    download file
  put <local> [remote]    upload file
  mkdir <path>            create remote directory
  rmdir <path>            remove remote directory
  delete <path>           delete remote file
  help                    show this help
  q                       quit"""


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Primitive FTP client.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "host",
        nargs="?",
        help="Server hostname (default: FTP_HOST or localhost)",
    )

    parser.add_argument(
        "port",
        nargs="?",
        type=int,
        help="Server port (default: FTP_PORT or 21)",
    )

    parser.add_argument(
        "-u", "--user",
        help="Username",
    )

    parser.add_argument(
        "-p", "--password",
        help="Password",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-P", "--passive",
        dest="passive",
        action="store_const",
        const=True,
        help="Use passive mode for data transfers",
    )
    mode.add_argument(
        "-A", "--active",
        dest="passive",
        action="store_const",
        const=False,
        help="Use active mode for data transfers",
    )

    parser.add_argument(
        "--env-file",
        help="Path to .env file",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


def login(
    session: FTPSession,
    user: Optional[str],
    password: Optional[str],
    read_line: Callable[[str], str] = input,
    read_password: Callable[[str], str] = getpass.getpass,
) -> bool:
    """Log in, prompting for missing credentials until the server accepts.

    Returns:
        True once logged in, False if the user aborted the prompt (EOF)

    Raises:
        FTPError: On protocol errors
    """
    while True:
        name = user
        if not name:
            os_user = os.getenv("USER", "")
            try:
                name = read_line(f"User ({os_user}): ").strip() or os_user
            except EOFError:
                return False

        secret = password
        if secret is None:
            try:
                secret = read_password("Password: ").strip()
            except EOFError:
                return False

        if session.login(name, secret):
            print("Successfully logged in.")
            return True

        print("Invalid username or password.")
        # Given credentials were wrong; ask for new ones.
        user = None
        password = None


def run_command(session: FTPSession, line: str) -> bool:
    """Execute one interactive command.

    Returns:
        False when the user asked to quit, True otherwise
    """
    line = line.strip()
    cmd, _, args = line.partition(" ")
    args = args.strip()

    try:
        if cmd == "":
            pass
        elif cmd in ("q", "quit", "exit"):
            return False
        elif cmd == "ls":
            print(session.list(args))
        elif cmd == "cd":
            session.cd(args)
        elif cmd == "pwd":
            print(session.pwd())
        elif cmd == "get":
            remote, local = _two_paths(args)
            session.get(remote, local)
            print("File download complete.")
        elif cmd == "put":
            local, remote = _two_paths(args)
            session.put(local, remote)
            print("File upload complete.")
        elif cmd == "mkdir":
            session.mkdir(args)
        elif cmd == "rmdir":
            session.rmdir(args)
        elif cmd == "delete":
            session.delete(args)
        elif cmd == "help":
            print(HELP_TEXT)
        else:
            print("Unknown command.")
    except FTPError as e:
        print(e)

    return True


def command_loop(session: FTPSession, stdin: TextIO = sys.stdin) -> None:
    """Read commands until ``q`` or end of input."""
    for line in stdin:
        if not run_command(session, line):
            return


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = get_config(args.env_file)
    server = config.get_server_config()

    host = args.host or server.host
    port = args.port or server.port
    user = args.user or server.username or None
    password = args.password if args.password is not None else (server.password or None)
    passive = config.passive_mode if args.passive is None else args.passive

    mode = PassiveMode() if passive else ActiveMode(host=config.active_host)

    try:
        session = FTPSession.connect(
            host,
            port,
            timeout=config.timeout,
            mode=mode,
            chunk_size=config.chunk_size,
            max_port_attempts=config.active_port_attempts,
        )
    except FTPError as e:
        print(e)
        return 1

    print("Connected to server")
    with session:
        try:
            if not login(session, user, password):
                return 1
        except FTPError as e:
            print(e)
            return 1

        command_loop(session)

    return 0


def _two_paths(args: str) -> tuple[str, str]:
    first, _, second = args.partition(" ")
    second = second.strip()
    return first, second or os.path.basename(first) or first


if __name__ == "__main__":
    sys.exit(main())
