"""Type definitions for the Sleepy.Mongoose client."""

from dataclasses import dataclass, field, fields
from typing import Any, Mapping

# Applied by the gateway when a request carries no batch_size.
DEFAULT_BATCH_SIZE = 15


class BaseOptions:
    """Mixin turning an options dataclass into an ordered parameter mapping."""

    def to_params(self) -> dict[str, Any]:
        """Return the set fields in declaration order, dropping ``None``."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)  # type: ignore[arg-type]
            if getattr(self, f.name) is not None
        }


@dataclass
class FindOptions(BaseOptions):
    """Options for a ``find`` query.

    Attributes:
        criteria: Filter selecting the documents to return.
        fields: Projection of the fields to return (``_id`` always comes back).
        skip: Number of results to skip.
        limit: Number of results to return.
        batch_size: Results per batch; the gateway uses
            ``DEFAULT_BATCH_SIZE`` when unset.
    """

    criteria: dict[str, Any] | None = None
    fields: dict[str, Any] | None = None
    skip: int | None = None
    limit: int | None = None
    batch_size: int | None = None


@dataclass
class MoreOptions(BaseOptions):
    """Options for fetching the next batch from a cursor."""

    id: int | str
    batch_size: int | None = None


@dataclass
class RemoveOptions(BaseOptions):
    """Options for ``remove``. No criteria removes every document."""

    criteria: dict[str, Any] | None = None


@dataclass
class UpdateOptions(BaseOptions):
    """Options for ``update``."""

    criteria: dict[str, Any]
    newobj: dict[str, Any]


@dataclass
class InsertOptions(BaseOptions):
    """Options for ``insert``."""

    docs: list[dict[str, Any]]


@dataclass
class Response:
    """Decoded gateway response.

    ``body`` is the JSON object exactly as the gateway sent it; the other
    attributes are shortcuts for the common fields. Check ``ok`` before
    trusting anything else.
    """

    ok: bool
    results: list[dict[str, Any]] = field(default_factory=list)
    id: int | str | None = None
    msg: str | None = None
    body: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, response: Mapping[str, Any]) -> "Response":
        """Create a Response from a decoded gateway body."""
        body = dict(response)
        return cls(
            ok=bool(body.get("ok", 0)),
            results=body.get("results") or [],
            id=body.get("id"),
            msg=body.get("msg"),
            body=body,
        )

    def __getitem__(self, key: str) -> Any:
        return self.body[key]

    def __contains__(self, key: object) -> bool:
        return key in self.body

    def get(self, key: str, default: Any = None) -> Any:
        return self.body.get(key, default)
