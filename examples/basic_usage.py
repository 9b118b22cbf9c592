"""
Basic usage example: insert, read, list and remove an entry.

Requirements:
    gopass installed and initialised (``gopass setup``), on PATH.

Set PASSWORD_STORE_PROGRAM to point at a different executable.
"""
import logging

from password_store import PassError, PasswordStore, load_config

logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

store = PasswordStore(load_config())

store.insert("test with spaces/pass with spaces", "password")
print(repr(store.get("test with spaces/pass with spaces")))
print(store.get_usernames("test with spaces"))

store.generate("test with spaces/generated", use_symbols=True, length=24)
print(store.get_usernames("test with spaces"))

store.remove("test with spaces/generated")
store.remove("test with spaces/pass with spaces")

# Failures reported by gopass come back verbatim
try:
    store.remove("test with spaces/pass with spaces")
except PassError as e:
    print(f"gopass said: {e}")
