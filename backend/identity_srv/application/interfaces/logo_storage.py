"""Abstract interface (port) for the object store holding logo files."""

from abc import ABC, abstractmethod


class LogoStorage(ABC):
    """Stores logo payloads by an opaque file identifier."""

    @abstractmethod
    async def upload(self, file_id: str, content: bytes, mime_type: str) -> None:
        ...

    @abstractmethod
    async def delete(self, file_id: str) -> bool:
        """Remove a stored file. Returns True if something was deleted."""
        ...

    @abstractmethod
    def download_url(self, file_id: str) -> str:
        """Public URL under which the file is served."""
        ...
