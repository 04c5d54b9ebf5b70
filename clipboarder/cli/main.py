"""Clipboarder CLI - Main commands."""
import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

app = typer.Typer(
    name="clipboarder",
    help="Send text and images to your Clipboarder clipboard",
    add_completion=False
)
console = Console()

URL_OPTION = typer.Option(
    "http://localhost:8080", "--url", "-u",
    envvar="CLIPBOARDER_URL", help="Backend base URL"
)
TOKEN_OPTION = typer.Option(
    None, "--token", "-t",
    envvar="CLIPBOARDER_TOKEN", help="Access token"
)
INSECURE_OPTION = typer.Option(False, "--insecure", help="Skip TLS verification")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Show debug logs")


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def make_client(url: str, token: Optional[str], insecure: bool = False):
    """Create a client for the given backend."""
    from clipboarder import ClipboarderClient, TransportConfig

    if insecure:
        config = TransportConfig.insecure(base_url=url)
    else:
        config = TransportConfig(base_url=url)
    return ClipboarderClient(access_token=token, config=config)


def detect_mime_type(path: Path) -> Optional[str]:
    """Guess an image type from the file name, then from its content."""
    from clipboarder.client import guess_mime_type

    mime_type = guess_mime_type(path)
    if mime_type and mime_type.startswith("image/"):
        return mime_type

    try:
        from PIL import Image
        with Image.open(path) as img:
            return Image.MIME.get(img.format, mime_type)
    except (OSError, ValueError):
        return mime_type


def _configure_logging(verbose: bool) -> None:
    if verbose:
        from clipboarder import setup_logging
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
        setup_logging(logging.DEBUG)


async def _share(client, request) -> None:
    from clipboarder import ClipboarderException

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("Uploading...", total=None)
            result = await client.share(request)
    except ClipboarderException as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    finally:
        await client.close()

    if result.ok:
        console.print(f"[green]{escape(result.message)}[/green]")
    else:
        console.print(f"[red]{escape(result.message)}[/red]")
        raise typer.Exit(1)


@app.command()
def text(
    texts: List[str] = typer.Argument(..., help="Text(s) to copy"),
    url: str = URL_OPTION,
    token: Optional[str] = TOKEN_OPTION,
    insecure: bool = INSECURE_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Copy text to the clipboard."""
    from clipboarder import ActionKind, ShareRequest

    _configure_logging(verbose)
    action = ActionKind.PROCESS_TEXT if len(texts) == 1 else ActionKind.SEND_MULTIPLE
    request = ShareRequest(action, "text/plain", texts=texts)
    run_async(_share(make_client(url, token, insecure), request))


@app.command()
def image(
    paths: List[Path] = typer.Argument(..., help="Image file(s) to upload"),
    mime_type: Optional[str] = typer.Option(None, "--type", help="Override the image MIME type"),
    url: str = URL_OPTION,
    token: Optional[str] = TOKEN_OPTION,
    insecure: bool = INSECURE_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Upload image files to the clipboard."""
    from clipboarder import ActionKind, ByteSourceRef, ShareRequest
    from clipboarder.client import common_mime_type

    _configure_logging(verbose)
    for path in paths:
        if not path.is_file():
            console.print(f"[red]File not found: {escape(str(path))}[/red]")
            raise typer.Exit(1)

    refs = [ByteSourceRef(str(p), mime_type or detect_mime_type(p)) for p in paths]
    declared = mime_type or common_mime_type(refs)

    action = ActionKind.SEND if len(refs) == 1 else ActionKind.SEND_MULTIPLE
    request = ShareRequest(action, declared, streams=refs)
    run_async(_share(make_client(url, token, insecure), request))


@app.command()
def classify(
    refs: List[str] = typer.Argument(None, help="Text values, or image paths for image types"),
    action: str = typer.Option("send", "--action", "-a", help="process_text, send or send_multiple"),
    mime_type: Optional[str] = typer.Option(None, "--type", help="Declared MIME type"),
):
    """Show how a share request would be classified, without uploading."""
    from clipboarder import ClassificationError, PayloadClassifier

    try:
        payload = PayloadClassifier().classify(action, mime_type, refs or [])
    except ClassificationError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    table = Table()
    table.add_column("Kind", style="cyan")
    table.add_column("Item")
    items = getattr(payload, "items", None) or getattr(payload, "sources", None)
    if items is None:
        items = [getattr(payload, "content", None) or payload.source.uri]
    for item in items:
        table.add_row(payload.kind.value, getattr(item, "uri", item))
    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
