"""Local filesystem storage for organization logos.

Storage layout:
    <upload_dir>/<file_id>      — one file per uploaded logo

Files are served by the application under ``public_base_url``.
"""

import logging
from pathlib import Path

from identity_srv.application.interfaces import LogoStorage

logger = logging.getLogger(__name__)


class LocalLogoStorage(LogoStorage):
    """Infrastructure adapter keeping logo files on the local disk."""

    def __init__(self, upload_dir: str, public_base_url: str):
        self._upload_dir = Path(upload_dir)
        self._upload_dir.mkdir(parents=True, exist_ok=True)
        self._public_base_url = public_base_url.rstrip("/")

    def _path_for(self, file_id: str) -> Path:
        # file ids are flat names; anything with a directory part is rejected
        name = Path(file_id).name
        if not name or name != file_id:
            raise ValueError(f"Invalid logo file id: {file_id!r}")
        return self._upload_dir / name

    async def upload(self, file_id: str, content: bytes, mime_type: str) -> None:
        dest_path = self._path_for(file_id)
        dest_path.write_bytes(content)
        logger.info("Stored logo: %s (%d bytes, %s)", dest_path, len(content), mime_type)

    async def delete(self, file_id: str) -> bool:
        """Delete a stored logo. Returns False if it was not on disk."""
        file_path = self._path_for(file_id)
        if not file_path.exists():
            return False
        file_path.unlink(missing_ok=True)
        logger.info("Deleted logo from disk: %s", file_path)
        return True

    def download_url(self, file_id: str) -> str:
        return f"{self._public_base_url}/{file_id}"
