import httpx
import pytest


class Gateway:
    """Fake gateway recording every request it receives."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.body = {"ok": 1}
        self.status_code = 200
        self.raw: bytes | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def query_pairs(self) -> list[str]:
        return self.last.url.query.decode("ascii").split("&")

    def body_pairs(self) -> list[str]:
        return self.last.content.decode("ascii").split("&")


@pytest.fixture()
def gateway():
    return Gateway()


@pytest.fixture()
def transport(gateway):
    return httpx.MockTransport(gateway)
