from __future__ import annotations

from typing import Protocol


class ImageStore(Protocol):
    """
    Port for product image hosting.

    ``upload`` accepts whatever the client sent (URL or data URI) and returns
    the public URL to persist. ``destroy`` removes a previously uploaded image.
    """

    def upload(self, source: str, *, folder: str = "products") -> str: ...

    def destroy(self, url: str) -> None: ...


class PassthroughImageStore(ImageStore):
    """Keep images where they already live: the given URL is stored as-is."""

    def upload(self, source: str, *, folder: str = "products") -> str:
        return source

    def destroy(self, url: str) -> None:
        return None
