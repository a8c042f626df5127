"""Upload and status commands for mcupload."""

from __future__ import annotations

import asyncio
import posixpath
import sys
from pathlib import Path
from typing import Optional

import click

from mcupload.cli.common import Context, ExitCode, global_options, handle_errors
from mcupload.core.output import (
    OutputFormat,
    create_progress,
    print_output,
    print_success,
    print_warning,
)
from mcupload.models.progress import SessionSummary, UploadProgress
from mcupload.services.plugin import ResumableUploadPlugin
from mcupload.services.registry import FileRegistry
from mcupload.services.sessions import UploadSessionManager

UPLOAD_COLUMNS = ["file", "status", "file_id", "file_uuid", "error"]


def _summary_rows(registry: FileRegistry, summary: SessionSummary) -> list[dict[str, object]]:
    rows = []
    for outcome in summary.outcomes:
        request = registry.files.get(outcome.file_id)
        result = outcome.result or {}
        rows.append(
            {
                "file": request.name if request else outcome.file_id,
                "destination": request.destination_path if request else None,
                "status": "uploaded" if outcome.success else "failed",
                "file_id": result.get("fileId"),
                "file_uuid": result.get("fileUuid"),
                "error": str(outcome.error) if outcome.error else None,
            }
        )
    return rows


@click.command("upload")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--project-id", required=True, help="Target project ID")
@click.option("--dest", "destination", required=True, help="Destination directory in the project")
@click.option("--chunk-size", type=int, default=None, help="Chunk size in bytes")
@click.option(
    "--max-concurrent-chunks",
    type=int,
    default=None,
    help="Max chunk requests in flight per file (default: all)",
)
@global_options
@handle_errors
def upload(
    ctx: Context,
    files: tuple[Path, ...],
    project_id: str,
    destination: str,
    chunk_size: Optional[int],
    max_concurrent_chunks: Optional[int],
) -> None:
    """Upload FILES in chunks to a project directory.

    Example:
        mcupload upload data.h5 --project-id 42 --dest /raw
    """
    options = ctx.get_options(
        chunk_size=chunk_size,
        max_concurrent_chunks=max_concurrent_chunks,
    )

    registry = FileRegistry()
    for path in files:
        registry.add_path(
            path,
            project_id=project_id,
            destination_path=posixpath.join(destination, path.name),
        )

    plugin = ResumableUploadPlugin(registry, options)
    plugin.install()

    show_progress = not ctx.quiet and ctx.output_format == OutputFormat.TABLE
    if show_progress:
        with create_progress() as progress:
            tasks = {
                file_id: progress.add_task(request.name, total=request.size)
                for file_id, request in registry.files.items()
            }

            def on_progress(file_id: str, snapshot: UploadProgress) -> None:
                progress.update(
                    tasks[file_id],
                    completed=min(snapshot.bytes_uploaded, snapshot.bytes_total),
                )

            registry.on_progress(on_progress)
            results = asyncio.run(registry.upload())
    else:
        results = asyncio.run(registry.upload())

    plugin.uninstall()
    summary: SessionSummary = results[0]

    if not ctx.quiet:
        print_output(
            _summary_rows(registry, summary),
            format=ctx.output_format,
            columns=UPLOAD_COLUMNS,
            title="Uploads",
        )

    if not summary.success:
        print_warning(f"{summary.failed} of {summary.total} uploads failed")
        sys.exit(ExitCode.UPLOAD_FAILED)

    if not ctx.quiet and ctx.output_format == OutputFormat.TABLE:
        print_success(f"Uploaded {summary.succeeded} file(s) in {summary.duration:.1f}s")


@click.command("status")
@click.argument("file_id")
@global_options
@handle_errors
def status(ctx: Context, file_id: str) -> None:
    """Show the server-side status of an upload by server FILE_ID."""
    manager = UploadSessionManager(FileRegistry(), ctx.get_options())
    upload_status = asyncio.run(manager.check_status(file_id))
    print_output(upload_status.to_dict(), format=ctx.output_format, title="Upload status")
