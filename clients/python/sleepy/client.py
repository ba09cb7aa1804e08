"""Sleepy.Mongoose HTTP client."""

import inspect
import logging
from typing import Any, Callable

import httpx

from .config import ClientConfig
from .encoding import (
    FORM_CONTENT_TYPE,
    GET,
    POST,
    OpRequest,
    Options,
    collection_op,
    command_op,
    connect_op,
    hello_op,
)
from .exceptions import (
    CommandError,
    ConnectionError,
    InvalidArgument,
    MutationError,
    QueryError,
    SleepyError,
)
from .types import Response

logger = logging.getLogger(__name__)

Callback = Callable[[Response], Any]


def _check_callback(callback: Callback | None) -> None:
    if callback is not None and not callable(callback):
        raise InvalidArgument(
            f"callback must be callable, got {type(callback).__name__}"
        )


class _BaseClient:
    """Configuration and response handling shared by both clients."""

    def __init__(
        self,
        base_url: str | None = None,
        server: str | None = None,
        timeout: float | None = None,
        *,
        config: ClientConfig | None = None,
    ):
        config = config or ClientConfig()
        self.base_url = (base_url or config.base_url).rstrip("/")
        # Database address sent on connect; the only setting meant to change.
        self.server = server or config.server
        self.timeout = timeout if timeout is not None else config.timeout

    def _build(self, request: OpRequest) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"url": request.url(self.base_url)}
        if request.method == POST:
            kwargs["content"] = request.content
            kwargs["headers"] = {"Content-Type": FORM_CONTENT_TYPE}
        return kwargs

    def _decode(
        self,
        request: OpRequest,
        response: httpx.Response,
        error_cls: type[SleepyError],
    ) -> Response:
        """Decode the gateway body.

        Application failures (``ok == 0``) come back as JSON and are returned
        untouched regardless of the HTTP status. Only a body that is not a
        JSON object raises.
        """
        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            logger.warning(
                "Non-JSON response from %s %s (HTTP %s)",
                request.method,
                request.path,
                response.status_code,
            )
            raise error_cls(
                f"Gateway returned an unreadable response for {request.path} "
                f"(HTTP {response.status_code})",
                response.status_code,
            )
        return Response.from_response(body)

    def _transport_error(self, request: OpRequest, e: httpx.HTTPError) -> ConnectionError:
        logger.warning("%s %s failed: %s", request.method, request.path, e)
        return ConnectionError(f"{request.method} {request.path} failed: {e}")


class SleepyClient(_BaseClient):
    """HTTP client for the Sleepy.Mongoose REST gateway.

    Args:
        base_url: URL of the REST gateway (e.g., "http://localhost:27080").
        server: Database server address sent on ``connect``
            (defaults to "localhost:27017").
        timeout: Request timeout in seconds.
        config: Settings to start from; explicit arguments override it.
        transport: Optional httpx transport, mainly for tests.
        autoconnect: Issue ``connect()`` as soon as the client is built.

    Every operation returns the decoded :class:`Response`. When a
    ``callback`` is given it is called with that response first.

    Example:
        >>> client = SleepyClient("http://localhost:27080")
        >>> client.connect()
        >>> page = client.find("test", "users", {"criteria": {"active": True}})
        >>> more = client.more("test", "users", {"id": page.id})
    """

    def __init__(
        self,
        base_url: str | None = None,
        server: str | None = None,
        timeout: float | None = None,
        *,
        config: ClientConfig | None = None,
        transport: httpx.BaseTransport | None = None,
        autoconnect: bool = False,
    ):
        super().__init__(base_url, server, timeout, config=config)
        self._client = httpx.Client(timeout=self.timeout, transport=transport)
        if autoconnect:
            self.connect()

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "SleepyClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _send(
        self,
        request: OpRequest,
        error_cls: type[SleepyError],
        callback: Callback | None,
    ) -> Response:
        _check_callback(callback)
        logger.debug("%s %s", request.method, request.path)
        try:
            response = self._client.request(request.method, **self._build(request))
        except httpx.HTTPError as e:
            raise self._transport_error(request, e)
        result = self._decode(request, response, error_cls)
        if callback is not None:
            callback(result)
        return result

    def connect(
        self, name: str | None = None, callback: Callback | None = None
    ) -> Response:
        """Connect the gateway to the database server.

        Args:
            name: Optional name to give the connection.
            callback: Called with the response.

        Returns:
            ``{"ok": 1}`` style response.
        """
        return self._send(connect_op(self.server, name), CommandError, callback)

    def hello(self, callback: Callback | None = None) -> Response:
        """Ping the gateway. The response carries ``ok`` and ``msg``."""
        return self._send(hello_op(), QueryError, callback)

    def find(
        self,
        db: str,
        collection: str,
        options: Options = None,
        callback: Callback | None = None,
    ) -> Response:
        """Query a collection.

        Args:
            db: Database name.
            collection: Collection name.
            options: ``FindOptions`` or a mapping with any of ``criteria``,
                ``fields``, ``skip``, ``limit``, ``batch_size``.
            callback: Called with the response.

        Returns:
            Response with ``results`` and the cursor ``id``. Keep the id to
            fetch further batches with :meth:`more`.
        """
        request = collection_op(GET, db, collection, "_find", options)
        return self._send(request, QueryError, callback)

    def more(
        self,
        db: str,
        collection: str,
        options: Options,
        callback: Callback | None = None,
    ) -> Response:
        """Fetch the next batch from a cursor.

        ``options`` must carry the cursor ``id`` returned by :meth:`find`
        and may carry ``batch_size``.
        """
        request = collection_op(GET, db, collection, "_more", options)
        return self._send(request, QueryError, callback)

    def remove(
        self,
        db: str,
        collection: str,
        options: Options = None,
        callback: Callback | None = None,
    ) -> Response:
        """Delete the documents matching ``criteria`` (all of them if unset)."""
        request = collection_op(POST, db, collection, "_remove", options)
        return self._send(request, MutationError, callback)

    def update(
        self,
        db: str,
        collection: str,
        options: Options,
        callback: Callback | None = None,
    ) -> Response:
        """Update documents. ``options`` needs ``criteria`` and ``newobj``."""
        request = collection_op(POST, db, collection, "_update", options)
        return self._send(request, MutationError, callback)

    def insert(
        self,
        db: str,
        collection: str,
        options: Options,
        callback: Callback | None = None,
    ) -> Response:
        """Insert documents. ``options`` needs ``docs``, a list of objects."""
        request = collection_op(POST, db, collection, "_insert", options)
        return self._send(request, MutationError, callback)

    def command(
        self,
        db: str | None,
        obj: dict[str, Any],
        callback: Callback | None = None,
    ) -> Response:
        """Run a database command.

        Args:
            db: Database to run against, or ``None`` for a server-level command.
            obj: The command document, e.g. ``{"ping": 1}``.
            callback: Called with the response.

        Returns:
            Command-specific response, always including ``ok``.
        """
        return self._send(command_op(db, obj), CommandError, callback)


class AsyncSleepyClient(_BaseClient):
    """Async HTTP client for the Sleepy.Mongoose REST gateway.

    Same interface as SleepyClient but uses async/await. Concurrent calls
    complete independently, so callbacks fire in completion order rather
    than call order. A callback may also be a coroutine function.
    """

    def __init__(
        self,
        base_url: str | None = None,
        server: str | None = None,
        timeout: float | None = None,
        *,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url, server, timeout, config=config)
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncSleepyClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _send(
        self,
        request: OpRequest,
        error_cls: type[SleepyError],
        callback: Callback | None,
    ) -> Response:
        _check_callback(callback)
        logger.debug("%s %s", request.method, request.path)
        try:
            response = await self._client.request(
                request.method, **self._build(request)
            )
        except httpx.HTTPError as e:
            raise self._transport_error(request, e)
        result = self._decode(request, response, error_cls)
        if callback is not None:
            outcome = callback(result)
            if inspect.isawaitable(outcome):
                await outcome
        return result

    async def connect(
        self, name: str | None = None, callback: Callback | None = None
    ) -> Response:
        """Connect the gateway to the database server."""
        return await self._send(connect_op(self.server, name), CommandError, callback)

    async def hello(self, callback: Callback | None = None) -> Response:
        """Ping the gateway."""
        return await self._send(hello_op(), QueryError, callback)

    async def find(
        self,
        db: str,
        collection: str,
        options: Options = None,
        callback: Callback | None = None,
    ) -> Response:
        """Query a collection asynchronously."""
        request = collection_op(GET, db, collection, "_find", options)
        return await self._send(request, QueryError, callback)

    async def more(
        self,
        db: str,
        collection: str,
        options: Options,
        callback: Callback | None = None,
    ) -> Response:
        """Fetch the next batch from a cursor asynchronously."""
        request = collection_op(GET, db, collection, "_more", options)
        return await self._send(request, QueryError, callback)

    async def remove(
        self,
        db: str,
        collection: str,
        options: Options = None,
        callback: Callback | None = None,
    ) -> Response:
        request = collection_op(POST, db, collection, "_remove", options)
        return await self._send(request, MutationError, callback)

    async def update(
        self,
        db: str,
        collection: str,
        options: Options,
        callback: Callback | None = None,
    ) -> Response:
        request = collection_op(POST, db, collection, "_update", options)
        return await self._send(request, MutationError, callback)

    async def insert(
        self,
        db: str,
        collection: str,
        options: Options,
        callback: Callback | None = None,
    ) -> Response:
        request = collection_op(POST, db, collection, "_insert", options)
        return await self._send(request, MutationError, callback)

    async def command(
        self,
        db: str | None,
        obj: dict[str, Any],
        callback: Callback | None = None,
    ) -> Response:
        """Run a database command asynchronously."""
        return await self._send(command_op(db, obj), CommandError, callback)
