"""Turning operation arguments into gateway requests."""

import json
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Mapping
from urllib.parse import quote

from .types import BaseOptions

GET = "GET"
POST = "POST"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

Options = Mapping[str, Any] | BaseOptions | None


@dataclass(frozen=True)
class OpRequest:
    """A single gateway call: HTTP method, path and encoded arguments."""

    method: str
    path: str
    args: str = ""

    def url(self, base_url: str) -> str:
        """Absolute URL for this request. GET arguments go in the query string."""
        url = f"{base_url}{self.path}"
        if self.method == GET and self.args:
            url = f"{url}?{self.args}"
        return url

    @property
    def content(self) -> str | None:
        """Form body for POST requests."""
        if self.method == POST:
            return self.args
        return None


def _json_default(value: Any) -> Any:
    """Extended-JSON hints for values plain JSON cannot carry."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return {"$date": int(value.timestamp() * 1000)}
    if isinstance(value, date):
        return _json_default(datetime(value.year, value.month, value.day))
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_json(value: Any) -> str:
    """JSON-encode ``value`` compactly and percent-encode the result."""
    text = json.dumps(value, separators=(",", ":"), default=_json_default)
    return quote(text, safe="")


def _is_structured(value: Any) -> bool:
    return value is None or isinstance(value, (Mapping, list, tuple))


def _encode_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_options(options: Options) -> str:
    """Serialize options into a ``key=value&...`` string.

    Structured values are sent as percent-encoded JSON, scalars verbatim.
    Keys keep the mapping's iteration order.

    Example:
        >>> encode_options({"criteria": {"x": 1}, "limit": 5})
        'criteria=%7B%22x%22%3A1%7D&limit=5'
    """
    if options is None:
        return ""
    if isinstance(options, BaseOptions):
        options = options.to_params()

    args = []
    for key, value in options.items():
        if _is_structured(value):
            args.append(f"{key}={encode_json(value)}")
        else:
            args.append(f"{key}={_encode_scalar(value)}")
    return "&".join(args)


def collection_op(
    method: str, db: str, collection: str, op: str, options: Options
) -> OpRequest:
    """Build a request against ``/<db>/<collection>/<op>``."""
    return OpRequest(method, f"/{db}/{collection}/{op}", encode_options(options))


def connect_op(server: str, name: str | None = None) -> OpRequest:
    """Build the ``/_connect`` request for ``server``."""
    args = f"server={server}"
    if name and isinstance(name, str):
        args += f"&name={name}"
    return OpRequest(POST, "/_connect", args)


def command_op(db: str | None, obj: Any) -> OpRequest:
    """Build a ``_cmd`` request, database-scoped when ``db`` is given."""
    path = "/_cmd"
    if db and isinstance(db, str):
        path = f"/{db}{path}"
    return OpRequest(POST, path, f"obj={encode_json(obj)}")


def hello_op() -> OpRequest:
    return OpRequest(GET, "/_hello")
