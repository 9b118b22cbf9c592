"""
password-store: Python client for gopass-compatible password stores.

Quick start:
    from password_store import PasswordStore

    store = PasswordStore()
    store.insert("test/site", "password")
    store.get("test/site")                # "password"
    store.get_usernames("test")           # ["site"]
    store.remove("test/site")

Errors are raised as subclasses of ``PasswordStoreError``; a failure
reported by the store program itself is a ``PassError`` carrying its
diagnostic text verbatim.
"""

__version__ = "0.1.0"

from .chomp import chomp
from .config import StoreConfig, load_config
from .errors import (
    InvalidInputError,
    InvalidOutputError,
    JsonDecodeError,
    PassError,
    PasswordStoreError,
    ProcessIOError,
    TextDecodeError,
)
from .protocol import JsonValue
from .store import PasswordStore
from .transport import Command, DirectInvocation, FramedSession, ProcessOutcome, Transport

__all__ = [
    "Command",
    "DirectInvocation",
    "FramedSession",
    "InvalidInputError",
    "InvalidOutputError",
    "JsonDecodeError",
    "JsonValue",
    "PassError",
    "PasswordStore",
    "PasswordStoreError",
    "ProcessIOError",
    "ProcessOutcome",
    "StoreConfig",
    "TextDecodeError",
    "Transport",
    "__version__",
    "chomp",
    "load_config",
]
