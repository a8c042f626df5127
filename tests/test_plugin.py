"""Tests for the uploader plugin and the in-process file registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from mcupload.core.config import DEFAULT_UPLOADER_ID, UploaderOptions
from mcupload.core.exceptions import ValidationError
from mcupload.services.plugin import ResumableUploadPlugin
from mcupload.services.registry import FileRegistry

MIB = 1024 * 1024


class TestResumableUploadPlugin:
    def test_defaults(self):
        plugin = ResumableUploadPlugin(FileRegistry(), api_key="k")

        assert plugin.id == DEFAULT_UPLOADER_ID
        assert plugin.type == "uploader"
        assert plugin.options.server_url == "http://localhost:1352"
        assert plugin.options.chunk_size == MIB

    def test_custom_id(self):
        plugin = ResumableUploadPlugin(FileRegistry(), api_key="k", id="mine")
        assert plugin.id == "mine"

    def test_install_and_uninstall(self):
        registry = FileRegistry()
        plugin = ResumableUploadPlugin(registry, api_key="k")

        plugin.install()
        assert registry.uploaders == [plugin.upload]
        assert plugin.installed is True

        plugin.uninstall()
        assert registry.uploaders == []
        assert plugin.installed is False

    @pytest.mark.asyncio
    async def test_registry_upload_runs_installed_plugin(self, server, temp_dir: Path):
        registry = FileRegistry()
        path = temp_dir / "sample.bin"
        path.write_bytes(b"z" * (2 * MIB + 5))
        file_id = registry.add_path(
            path, meta={"projectId": "42", "destinationPath": "/raw/sample.bin"}
        )
        options = UploaderOptions(api_key="k", server_url="http://mc.test")
        plugin = ResumableUploadPlugin(registry, options, transport=server.transport())
        plugin.install()

        [summary] = await registry.upload()

        assert summary.success is True
        assert summary.get(file_id).result["fileId"] == "100"
        assert len(server.uploads) == 3
        assert server.uploads[0]["project_id"] == "42"
        assert all(u["apikey"] == "k" for u in server.uploads)

    @pytest.mark.asyncio
    async def test_uninstalled_plugin_uploads_nothing(self, server, make_request):
        registry = FileRegistry()
        registry.add_file(make_request(10))
        plugin = ResumableUploadPlugin(registry, api_key="k", transport=server.transport())
        plugin.install()
        plugin.uninstall()

        assert await registry.upload() == []
        assert server.request_count == 0


class TestFileRegistry:
    def test_add_path_prefers_explicit_metadata(self, temp_dir: Path):
        path = temp_dir / "a.txt"
        path.write_text("hello")
        registry = FileRegistry()

        file_id = registry.add_path(
            path,
            project_id="7",
            destination_path="/docs/a.txt",
            meta={"projectId": "1", "destinationPath": "/x"},
        )

        request = registry.get_file(file_id)
        assert request.project_id == "7"
        assert request.destination_path == "/docs/a.txt"
        assert request.size == 5
        assert request.name == "a.txt"
        assert request.meta["projectId"] == "1"

    def test_get_unknown_file(self):
        with pytest.raises(ValidationError, match="Unknown file"):
            FileRegistry().get_file("nope")

    def test_emit_calls_listeners(self, make_request):
        registry = FileRegistry()
        request = make_request(3)
        seen = []
        registry.on("upload-success", lambda file, result: seen.append((file.file_id, result)))

        registry.emit("upload-success", request, {"ok": True})
        registry.emit("upload-error", request, RuntimeError("x"))

        assert seen == [("f1", {"ok": True})]

    def test_remove_file(self, make_request):
        registry = FileRegistry()
        file_id = registry.add_file(make_request(3))

        registry.remove_file(file_id)

        assert registry.files == {}
