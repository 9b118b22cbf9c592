"""
PasswordStore — the public operations on store entries.

Each operation validates the entry path, builds a request for one of
the two transports, and checks the shape of what comes back.  Nothing
is cached between calls; every call runs its own process.

The store only relies on ``Transport.execute``: the direct transport
takes a ``Command`` and the framed transport a request mapping, and both
return raw stdout which is decoded here.
"""

import logging
from typing import List, Optional

from . import protocol
from .chomp import chomp
from .config import BACKEND_CLI, BACKENDS, StoreConfig
from .errors import InvalidInputError, InvalidOutputError
from .protocol import JsonValue, decode_message, decode_text, make_request
from .transport import Command, DirectInvocation, FramedSession, Transport

logger = logging.getLogger(__name__)


def validate_path(path: str) -> None:
    """Reject empty or whitespace-only entry paths."""
    if not isinstance(path, str) or not path.strip():
        raise InvalidInputError()


def username_from_entry(entry: str) -> str:
    """Return the last ``/`` segment of an entry path."""
    return entry[entry.rfind("/") + 1:]


class PasswordStore:
    """Client for a gopass-compatible password store.

    Usage:
        store = PasswordStore()
        store.insert("web/example.com/alice", "hunter2")
        store.get("web/example.com/alice")          # "hunter2"
        store.get_usernames("web/example.com")      # ["alice"]
        store.remove("web/example.com/alice")
    """

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        direct: Optional[Transport] = None,
        framed: Optional[Transport] = None,
    ):
        self.config = config if config is not None else StoreConfig()
        if self.config.backend not in BACKENDS:
            raise ValueError(
                f"Unknown backend: '{self.config.backend}'. "
                f"Supported: {', '.join(BACKENDS)}"
            )
        self._direct = direct if direct is not None else DirectInvocation(self.config.program)
        self._framed = framed if framed is not None else FramedSession(
            self.config.program, self.config.listen_args
        )

    @property
    def uses_cli(self) -> bool:
        return self.config.backend == BACKEND_CLI

    def _invoke(self, subcommand: Optional[str], args: List[str], input: Optional[str] = None) -> str:
        stdout = self._direct.execute(Command(subcommand=subcommand, args=args, input=input))
        return decode_text(stdout, "stdout")

    def _request(self, msg_type: str, **payload) -> JsonValue:
        return decode_message(self._framed.execute(make_request(msg_type, **payload)))

    def get(self, path: str) -> str:
        """Get the password at ``path``."""
        validate_path(path)
        if self.uses_cli:
            return chomp(self._invoke(None, [path]))

        response = self._request(protocol.GET_LOGIN, entry=path)
        password = response["password"].as_string()
        if password is None:
            raise InvalidOutputError()
        return password

    def get_usernames(self, path: str) -> List[str]:
        """Get the usernames of the entries matching ``path``."""
        validate_path(path)
        response = self._request(protocol.QUERY, query=path)
        entries = response.as_array()
        if entries is None:
            raise InvalidOutputError()

        usernames = []
        for entry in entries:
            name = entry.as_string()
            if name is None:
                raise InvalidOutputError()
            usernames.append(username_from_entry(name))
        return usernames

    def generate(self, path: str, use_symbols: bool, length: int) -> None:
        """Generate a password of ``length`` characters and store it at ``path``."""
        validate_path(path)
        response = self._request(
            protocol.CREATE,
            entry_name=path,
            password="",
            generate=True,
            length=length,
            use_symbols=use_symbols,
        )
        if response["username"].as_string() is None:
            raise InvalidOutputError()
        logger.debug("Generated entry %s", path)

    def insert(self, path: str, password: str) -> None:
        """Insert ``password`` in the store at ``path``."""
        validate_path(path)
        if self.uses_cli:
            self._invoke(
                self.config.insert_subcommand,
                [self.config.multiline_flag, path],
                input=password,
            )
            return

        response = self._request(protocol.CREATE, entry_name=path, password=password)
        # The store may not echo the password back; only a mismatch fails.
        inserted = response["password"].as_string()
        if inserted is not None and inserted != password:
            raise InvalidOutputError()

    def remove(self, path: str) -> None:
        """Remove the entry at ``path``."""
        validate_path(path)
        self._invoke(self.config.remove_subcommand, [self.config.force_flag, path])
