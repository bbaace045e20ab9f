"""ittybit CLI - Main commands."""
import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn

from ittypy.core.api.config import API_KEY_ENV

app = typer.Typer(
    name="itty",
    help="ittybit media API CLI",
    add_completion=False
)
console = Console()

ApiKeyOption = typer.Option(
    None, "--api-key", "-k", envvar=API_KEY_ENV, help="API key", show_default=False
)
FolderOption = typer.Option(None, "--folder", "-f", help="Target folder")


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def make_client(api_key: Optional[str]):
    from ittypy import IttyClient, APIConfig
    return IttyClient(config=APIConfig.from_env(), api_key=api_key)


def report_upload(outcome) -> None:
    from ittypy import UploadComplete

    if isinstance(outcome, UploadComplete):
        console.print(f"[green]Uploaded[/green] ({outcome.chunks} chunk(s))")
        console.print(outcome.url)
        return

    console.print(f"[red]{outcome.reason}[/red]")
    raise typer.Exit(1)


@app.command()
def resumable(
    file: Path = typer.Argument(..., help="File to upload"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Target file name"),
    folder: Optional[str] = FolderOption,
    api_key: Optional[str] = ApiKeyOption,
):
    """Upload a large file in 16 MB chunks with progress."""

    async def do_upload():
        async with make_client(api_key) as itty:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console
            ) as progress:
                task = progress.add_task(f"Uploading {file.name}", total=100)
                outcome = await itty.upload_resumable(
                    file,
                    filename=name,
                    folder=folder,
                    progress_callback=lambda percent: progress.update(task, completed=percent)
                )
        report_upload(outcome)

    run_async(do_upload())


@app.command()
def put(
    file: Path = typer.Argument(..., help="File to upload"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Target file name"),
    folder: Optional[str] = FolderOption,
    api_key: Optional[str] = ApiKeyOption,
):
    """Upload a file with a single signed PUT."""

    async def do_upload():
        async with make_client(api_key) as itty:
            with console.status(f"Uploading {file.name}..."):
                outcome = await itty.upload(file, filename=name, folder=folder)
        report_upload(outcome)

    run_async(do_upload())


@app.command("sign-get")
def sign_get(
    path: str = typer.Argument(..., help="Stored path, e.g. videos/clip.mp4"),
    api_key: Optional[str] = ApiKeyOption,
):
    """Sign a short-lived playback URL."""
    from ittypy import IttyException

    async def do_sign():
        async with make_client(api_key) as itty:
            try:
                signed = await itty.sign_playback(path)
            except IttyException as e:
                console.print(f"[red]{e.reason}[/red]")
                raise typer.Exit(1)
        console.print(signed.url)

    run_async(do_sign())


@app.command()
def ingest(
    url: str = typer.Argument(..., help="Public media URL"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Target file name"),
    folder: Optional[str] = FolderOption,
    api_key: Optional[str] = ApiKeyOption,
):
    """Import a file from a public URL."""
    from ittypy import IttyException, TaskCompleted, TaskTimedOut

    async def do_ingest():
        async with make_client(api_key) as itty:
            try:
                with console.status("Ingesting..."):
                    outcome = await itty.ingest_url(url, folder=folder, filename=name)
            except (IttyException, ValueError) as e:
                console.print(f"[red]{e}[/red]")
                raise typer.Exit(1)

        if isinstance(outcome, TaskCompleted):
            console.print(f"[green]{outcome.file.id}[/green]")
            console.print(outcome.file.url)
        elif isinstance(outcome, TaskTimedOut):
            console.print(f"[yellow]{outcome.reason}[/yellow] Task: {outcome.task.id}")
            raise typer.Exit(2)
        else:
            console.print(f"[red]{outcome.reason}[/red]")
            raise typer.Exit(1)

    run_async(do_ingest())


@app.command()
def task(
    task_id: str = typer.Argument(..., help="Task id"),
    api_key: Optional[str] = ApiKeyOption,
):
    """Show whether a task has produced its file."""
    from ittypy import IttyException

    async def do_lookup():
        async with make_client(api_key) as itty:
            try:
                status = await itty.get_task_status(task_id)
            except (IttyException, ValueError) as e:
                console.print(f"[red]{e}[/red]")
                raise typer.Exit(1)

        if status.done:
            console.print(f"[green]done[/green] {status.file.id}")
            console.print(status.file.url)
        else:
            console.print(f"[yellow]pending[/yellow] ({status.task.status or 'unknown'})")

    run_async(do_lookup())


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
