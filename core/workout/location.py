from typing import Protocol
from urllib.parse import parse_qsl, urlsplit

from config.app_settings import settings


class LinkLocation(Protocol):
    @property
    def href(self) -> str: ...

    def read_params(self) -> list[tuple[str, str]]: ...

    def replace(self, query: str) -> None: ...


class PageLocation:
    """Address of the current page; ``replace`` swaps the query without navigating away."""

    def __init__(self, path: str = "/", query: str = "", *, base_url: str = settings.SHARE_BASE_URL) -> None:
        self.base_url = base_url.rstrip("/")
        self.path = path or "/"
        self.query = query.lstrip("?")

    @classmethod
    def from_url(cls, url: str = "/") -> "PageLocation":
        parts = urlsplit(url)
        if parts.scheme and parts.netloc:
            return cls(parts.path, parts.query, base_url=f"{parts.scheme}://{parts.netloc}")
        return cls(parts.path, parts.query)

    @property
    def href(self) -> str:
        suffix = f"?{self.query}" if self.query else ""
        return f"{self.base_url}{self.path}{suffix}"

    def read_params(self) -> list[tuple[str, str]]:
        return parse_qsl(self.query, keep_blank_values=True)

    def replace(self, query: str) -> None:
        self.query = query.lstrip("?")


__all__ = ["LinkLocation", "PageLocation"]
