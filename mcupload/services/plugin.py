"""Uploader plugin that attaches the resumable upload protocol to a host."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Optional

import httpx

from mcupload.core.config import UploaderOptions
from mcupload.models.progress import SessionSummary
from mcupload.services.sessions import UploadHost, UploadSessionManager


class ResumableUploadPlugin:
    """Registers a chunked uploader with a host.

    Example:
        >>> plugin = ResumableUploadPlugin(registry, api_key="secret")
        >>> plugin.install()
        >>> await registry.upload()
    """

    VERSION = "1.0.0"
    type = "uploader"

    def __init__(
        self,
        host: UploadHost,
        options: Optional[UploaderOptions] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **opts: Any,
    ) -> None:
        self.host = host
        self.options = options or UploaderOptions(**opts)
        self.id = self.options.id
        self.manager = UploadSessionManager(host, self.options, transport=transport)
        self.installed = False

    def install(self) -> None:
        self.host.register_uploader(self.upload)
        self.installed = True

    def uninstall(self) -> None:
        self.host.unregister_uploader(self.upload)
        self.installed = False

    async def upload(self, file_ids: Sequence[str]) -> SessionSummary:
        return await self.manager.upload(file_ids)
