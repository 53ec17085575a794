# services/media_service.py
import asyncio
import base64
import logging
import mimetypes
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

import httpx

from nirapoth.core.config import Settings, settings as default_settings
from nirapoth.core.errors import UploadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvidenceFile:
    filename: str
    content: bytes
    content_type: Optional[str] = None

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "EvidenceFile":
        path = Path(path)
        return cls(filename=path.name, content=path.read_bytes())

    @property
    def mime_type(self) -> str:
        return self.content_type or mimetypes.guess_type(self.filename)[0] or "application/octet-stream"

    @property
    def is_image_or_video(self) -> bool:
        return self.mime_type.startswith(("image/", "video/"))


@dataclass(frozen=True)
class UploadedMedia:
    url: str
    public_id: str


class MediaUploader:
    """Unsigned uploads to the Cloudinary media host."""

    def __init__(
        self,
        cloud_name: Optional[str] = None,
        upload_preset: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        config: Optional[Settings] = None,
    ):
        config = config or default_settings
        self.cloud_name = cloud_name if cloud_name is not None else config.CLOUDINARY_CLOUD_NAME
        self.upload_preset = upload_preset if upload_preset is not None else config.CLOUDINARY_UPLOAD_PRESET
        self.base_url = config.CLOUDINARY_BASE_URL.rstrip("/")
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.upload_preset)

    @property
    def upload_url(self) -> str:
        return f"{self.base_url}/{self.cloud_name}/upload"

    def _local_fallback(self, file: EvidenceFile) -> UploadedMedia:
        encoded = base64.b64encode(file.content).decode("ascii")
        return UploadedMedia(
            url=f"data:{file.mime_type};base64,{encoded}",
            public_id=f"local_{uuid.uuid4().hex[:12]}",
        )

    async def upload(
        self,
        file: EvidenceFile,
        folder: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> UploadedMedia:
        """Upload one file, raising ``UploadError`` when the host refuses it."""
        if not self.configured:
            logger.warning("[UPLOAD] Media host is not configured, keeping %s as a data URL", file.filename)
            return self._local_fallback(file)

        form = {"upload_preset": self.upload_preset}
        if folder:
            form["folder"] = folder
        if tags:
            form["tags"] = ",".join(tags)

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    self.upload_url,
                    data=form,
                    files={"file": (file.filename, file.content, file.mime_type)},
                )
        except httpx.HTTPError as e:
            logger.error("[UPLOAD ERROR] %s: %s", file.filename, e)
            raise UploadError(f"Upload failed: {e}", filename=file.filename) from e

        if response.is_error:
            logger.error("[UPLOAD ERROR] %s: HTTP %d %s", file.filename, response.status_code, response.text)
            raise UploadError(
                f"Upload failed: HTTP error! status: {response.status_code}, message: {response.text}",
                filename=file.filename,
            )

        try:
            data = response.json()
            error = data.get("error")
            if error:
                message = error.get("message", "Upload rejected") if isinstance(error, dict) else str(error)
                raise UploadError(f"Upload failed: {message}", filename=file.filename)
            media = UploadedMedia(url=data["secure_url"], public_id=data["public_id"])
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("[UPLOAD ERROR] %s: unreadable reply %r", file.filename, response.text[:200])
            raise UploadError(f"Upload failed: unexpected response from media host ({e})",
                              filename=file.filename) from e

        logger.info("[UPLOAD] %s -> %s", file.filename, media.public_id)
        return media

    async def upload_many(
        self,
        files: Iterable[EvidenceFile],
        folder: Optional[str] = None,
    ) -> List[UploadedMedia]:
        """Upload concurrently; any failure fails the whole batch."""
        return list(await asyncio.gather(*(self.upload(f, folder=folder) for f in files)))
