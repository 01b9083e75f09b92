"""CLI interface for i18ngen using Typer."""

from __future__ import annotations

import logging
import shlex
import signal
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from threading import Event

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from i18ngen import __version__
from i18ngen.core.language import split_language_list
from i18ngen.errors import CancelledError, ConfigError, I18nGenError
from i18ngen.external import DEFAULT_COMMAND, Goi18nTool

app = typer.Typer(
    name="i18ngen",
    help="Generate machine-translated go-i18n resource files.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True, soft_wrap=True)

_verbose = False
_quiet = False

EXIT_CANCELLED = 130


def _print(msg: str, *, verbose_only: bool = False) -> None:
    """Print respecting --verbose/--quiet flags."""
    if _quiet:
        return
    if verbose_only and not _verbose:
        return
    console.print(msg)


def _configure_logging() -> None:
    level = logging.DEBUG if _verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@contextmanager
def _cancel_on_signals() -> Iterator[Event]:
    """Yield an event that is set on SIGINT/SIGTERM; handlers are restored afterwards."""
    cancel_event = Event()

    def _handler(signum, frame) -> None:
        err_console.print(f"[yellow]Received {signal.Signals(signum).name}, stopping...[/yellow]")
        cancel_event.set()

    previous = {}
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            previous[sig] = signal.signal(sig, _handler)
        except ValueError:
            # Not in the main thread; cancellation is then driven by the caller.
            pass
    try:
        yield cancel_event
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"i18ngen {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Show debug logging.",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only show errors.",
    ),
) -> None:
    """i18ngen: translate go-i18n message files with a language model."""
    global _verbose, _quiet
    _verbose = verbose
    _quiet = quiet


@app.command()
def generate(
    output_dir: str = typer.Option(
        "", "--output-dir", "-o", envvar="I18NGEN_OUTPUT_DIR",
        help="Directory to output the translations (required).",
    ),
    default_lang: str = typer.Option(
        "en", "--default-lang", "-l",
        help="Source language of the messages in the code.",
    ),
    model: str = typer.Option(
        "gemini-2.5-flash", "--model", "-m", envvar="I18NGEN_MODEL",
        help="Translation model to use.",
    ),
    provider: str = typer.Option(
        "GOOGLE", "--provider", "-p", envvar="I18NGEN_PROVIDER",
        help="Model provider: GOOGLE, VERTEXAI, OPENAI, ANTHROPIC (or DUMMY for offline runs).",
    ),
    translate_to: list[str] | None = typer.Option(
        None, "--translate-to", "-t",
        help="Languages to generate translations for (comma-separated, repeatable).",
    ),
    tool: str | None = typer.Option(
        None, "--tool",
        help=f"Command that runs goi18n (default: {shlex.join(DEFAULT_COMMAND)!r}).",
    ),
    install: bool = typer.Option(
        True, "--install/--no-install",
        help="Run 'go get -tool' for goi18n before extracting.",
    ),
    report: Path | None = typer.Option(
        None, "--report", "-r",
        help="Save report to file (json/md/csv).",
    ),
) -> None:
    """Extract messages, then translate every missing or stale message per language."""
    from i18ngen.pipeline import create_backend
    from i18ngen.pipeline import generate as run_pipeline
    from i18ngen.reporting.formatters import save_report
    from i18ngen.reporting.report import RunReport

    _configure_logging()

    if not output_dir.strip():
        err_console.print("[red]Error:[/red] --output-dir is required.")
        raise typer.Exit(1)

    targets = split_language_list(translate_to)
    rpt = RunReport()

    try:
        backend = create_backend(provider, model)
    except (ConfigError, ImportError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    _print(f"using model [bold]{backend.label}[/bold] from provider {provider!r}")

    def on_progress(phase: str, current: int, total: int, message: str) -> None:
        _print(f"[dim]{phase}[/dim] {escape(message)}", verbose_only=phase == "install")

    exit_code = 0
    with _cancel_on_signals() as cancel_event:
        goi18n = Goi18nTool(
            command=shlex.split(tool) if tool else DEFAULT_COMMAND,
            cancel_event=cancel_event,
        )
        try:
            run_pipeline(
                backend,
                source_lang=default_lang,
                output_dir=Path(output_dir),
                target_langs=targets,
                tool=goi18n,
                install=install,
                cancel_event=cancel_event,
                on_progress=on_progress,
                report=rpt,
            )
        except CancelledError as e:
            err_console.print(f"[yellow]Cancelled:[/yellow] {escape(str(e))}")
            exit_code = EXIT_CANCELLED
        except (I18nGenError, OSError) as e:
            err_console.print(f"[red]Error:[/red] generating translations: {escape(str(e))}")
            exit_code = 1
        finally:
            if report:
                save_report(rpt, report)

    if exit_code:
        raise typer.Exit(exit_code)

    if not _quiet and rpt.languages:
        table = Table(title="Translations")
        table.add_column("Language")
        table.add_column("Status")
        table.add_column("Messages", justify="right")
        table.add_column("Model calls", justify="right")
        for entry in rpt.languages:
            table.add_row(entry.lang, entry.status, str(entry.messages), str(entry.model_calls))
        console.print(table)

    _print(f"[green]Translation files generated successfully[/green] ({rpt.duration_seconds:.1f}s)")
