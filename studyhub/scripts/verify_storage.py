"""Check that the configured storage backend accepts, serves and deletes a file.

Usage:
    python -m studyhub.scripts.verify_storage [--mode auto|disk|remote-bucket|remote-signed]
"""

from __future__ import annotations

import argparse
import sys

from rich.console import Console
from rich.table import Table

from studyhub.logging import configure_logging
from studyhub.settings import STORAGE_MODES, Settings, settings
from studyhub.storage.errors import StorageError
from studyhub.storage.factory import build_storage, is_configured
from studyhub.storage.local import LocalStorage

console = Console()

CHECK_CATEGORY = "healthchecks"
CHECK_BYTES = b"studyhub storage check\n"


def _summary(cfg: Settings) -> Table:
    table = Table(title="Storage configuration")
    table.add_column("Backend")
    table.add_column("Configured")
    for mode in ("remote-bucket", "remote-signed", "disk"):
        table.add_row(mode, "yes" if is_configured(mode, cfg) else "no")
    return table


def verify(cfg: Settings) -> int:
    console.print(_summary(cfg))
    try:
        router = build_storage(cfg)
    except StorageError as exc:
        console.print(f"[red]Storage configuration invalid:[/red] {exc}")
        return 1

    mode = "pinned" if router.pinned else "auto"
    chain = " -> ".join(backend.name for backend in router.chain)
    console.print(f"Selected backend: [bold]{router.select_backend()}[/bold] ({mode}, chain: {chain})")

    try:
        stored = router.upload(CHECK_BYTES, content_type="text/plain", category=CHECK_CATEGORY)
    except StorageError as exc:
        console.print(f"[red]Upload failed:[/red] {exc}")
        return 1

    console.print(f"Uploaded via [bold]{stored.backend}[/bold]: id={stored.id}")
    reference = stored.to_reference()
    console.print(f"URL: {router.resolve_url(reference)}")
    if stored.backend != router.select_backend():
        console.print(f"[yellow]Warning:[/yellow] fell back from {router.select_backend()} to {stored.backend}")

    # Router deletes are best-effort and would hide a failure here.
    backend = next(b for b in router.backends if b.name == stored.backend)
    try:
        backend.delete(stored.id)
    except StorageError as exc:
        console.print(f"[red]Delete failed:[/red] {exc}")
        return 1
    if isinstance(backend, LocalStorage) and backend.exists(stored.id):
        console.print(f"[red]Delete failed:[/red] {stored.id} is still on disk")
        return 1

    console.print("[green]Check file deleted. Storage is working.[/green]")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--mode", choices=STORAGE_MODES, help="override STORAGE_MODE for this run")
    args = parser.parse_args(argv)

    configure_logging()
    cfg = settings.model_copy(update={"storage_mode": args.mode}) if args.mode else settings
    return verify(cfg)


if __name__ == "__main__":
    sys.exit(main())
