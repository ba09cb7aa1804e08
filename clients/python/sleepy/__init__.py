"""Sleepy.Mongoose Python Client.

A Python client for talking to a database through the Sleepy.Mongoose
REST gateway.

Usage:
    from sleepy import SleepyClient

    client = SleepyClient("http://localhost:27080")
    client.connect()

    # Insert documents
    client.insert("test", "users", {"docs": [{"name": "Alice"}]})

    # Query, then page through the cursor
    page = client.find("test", "users", {"criteria": {"name": "Alice"}})
    page = client.more("test", "users", {"id": page.id})

    # Update and remove
    client.update("test", "users", {"criteria": {"name": "Alice"}, "newobj": {"$set": {"age": 30}}})
    client.remove("test", "users", {"criteria": {"name": "Alice"}})

    # Run a command
    client.command(None, {"ping": 1})
"""

from .client import AsyncSleepyClient, SleepyClient
from .config import ClientConfig
from .encoding import encode_options
from .exceptions import (
    CommandError,
    ConnectionError,
    InvalidArgument,
    MutationError,
    QueryError,
    SleepyError,
)
from .types import (
    DEFAULT_BATCH_SIZE,
    FindOptions,
    InsertOptions,
    MoreOptions,
    RemoveOptions,
    Response,
    UpdateOptions,
)

__version__ = "0.1.0"
__all__ = [
    "SleepyClient",
    "AsyncSleepyClient",
    "ClientConfig",
    "encode_options",
    "SleepyError",
    "InvalidArgument",
    "ConnectionError",
    "QueryError",
    "MutationError",
    "CommandError",
    "DEFAULT_BATCH_SIZE",
    "FindOptions",
    "MoreOptions",
    "RemoveOptions",
    "UpdateOptions",
    "InsertOptions",
    "Response",
]
