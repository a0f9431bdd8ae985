from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from doc_library.app.core.logging import setup_logging
from doc_library.app.settings import get_library_settings
from doc_library.documents import DocumentService
from doc_library.records import RecordStore
from doc_library.storage import LocalBackend

app = typer.Typer(no_args_is_help=True, add_completion=False, help="Document library service.")


@app.command("serve")
def serve(
        host: str = typer.Option("127.0.0.1", help="Interface to bind"),
        port: int = typer.Option(8000, help="Port to bind"),
        reload: bool = typer.Option(False, help="Reload on code changes (development)"),
        storage_root: Optional[Path] = typer.Option(None, help="Directory holding uploaded files"),
        seed: bool = typer.Option(False, "--seed/--no-seed", help="Load the sample catalogue on startup"),
        log_level: Optional[str] = typer.Option(None, help="Override LOG_LEVEL"),
):
    """Run the HTTP API with uvicorn."""
    # The app factory reads settings from the environment, also in reload workers.
    if storage_root is not None:
        os.environ["DOCLIB_STORAGE_ROOT"] = str(storage_root)
    if seed:
        os.environ["DOCLIB_SEED_SAMPLE_DATA"] = "true"
    get_library_settings.cache_clear()

    setup_logging(level=log_level)
    uvicorn.run(
        "doc_library.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_config=None,  # keep our logging config
    )


@app.command("orphans")
def orphans(
        storage_root: Optional[Path] = typer.Option(None, help="Directory holding uploaded files"),
        delete: bool = typer.Option(False, "--delete", help="Delete the files instead of listing them"),
):
    """List (or delete) stored files no document references.

    Records live in memory only, so against a stopped service every stored
    file is an orphan.
    """
    settings = get_library_settings(storage_root=str(storage_root) if storage_root else None)
    backend = LocalBackend(settings.storage_root)
    if delete:
        service = DocumentService.from_settings(RecordStore(), backend, settings)
        names = asyncio.run(service.prune_orphans())
    else:
        names = asyncio.run(backend.list_names())

    for name in names:
        typer.echo(name)
    typer.echo(f"{len(names)} orphaned file(s){' deleted' if delete else ''} in {backend.base_path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
