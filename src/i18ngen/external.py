"""Wrapper around the goi18n command line tool (extract and merge)."""

from __future__ import annotations

import logging
import shlex
import signal
import subprocess
from collections.abc import Sequence
from pathlib import Path
from threading import Event

from i18ngen.errors import ExternalToolError

logger = logging.getLogger(__name__)

GOI18N_MODULE = "github.com/nicksnyder/go-i18n/v2/goi18n"
DEFAULT_COMMAND = ("go", "tool", "goi18n")
INSTALL_COMMAND = ("go", "get", "-tool", GOI18N_MODULE)
FORMAT = "toml"

# Seconds between cancel checks while a subprocess runs.
_POLL_INTERVAL = 0.2


def run_command(args: Sequence[str], cancel_event: Event | None = None) -> None:
    """Run a command, inheriting stdin/stdout/stderr.

    When ``cancel_event`` is set the process receives SIGTERM. A process that
    ends because of a signal (negative return code) is not treated as a
    failure: the caller notices the cancellation on its own.

    Raises:
        ExternalToolError: If the command cannot be started or exits non-zero.
    """
    cmdline = shlex.join(args)
    logger.debug("Running %s", cmdline)
    try:
        proc = subprocess.Popen(list(args))
    except OSError as e:
        raise ExternalToolError(f'failed to run "{cmdline}": {e}') from e

    terminated = False
    while True:
        try:
            returncode = proc.wait(timeout=_POLL_INTERVAL)
            break
        except subprocess.TimeoutExpired:
            if not terminated and cancel_event is not None and cancel_event.is_set():
                logger.debug("Sending SIGTERM to %s", cmdline)
                proc.send_signal(signal.SIGTERM)
                terminated = True

    if returncode < 0:
        logger.debug("%s stopped by signal %d", cmdline, -returncode)
        return
    if returncode != 0:
        raise ExternalToolError(
            f'failed to run "{cmdline}": exit status {returncode}', returncode=returncode,
        )


class Goi18nTool:
    """Invokes ``goi18n extract`` / ``goi18n merge`` with TOML output."""

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_COMMAND,
        cancel_event: Event | None = None,
    ) -> None:
        self.command = tuple(command)
        self.cancel_event = cancel_event

    def install(self) -> None:
        """Add goi18n as a Go tool dependency of the current module."""
        run_command(INSTALL_COMMAND, self.cancel_event)

    def extract(self, source_lang: str, output_dir: Path) -> None:
        """Scan Go sources and write ``active.<source_lang>.toml``."""
        run_command([
            *self.command, "extract",
            "-sourceLanguage", source_lang,
            "-format", FORMAT,
            "-outdir", str(output_dir),
        ], self.cancel_event)

    def merge(self, source_lang: str, output_dir: Path, *files: Path) -> None:
        """Merge the given files.

        With ``baseline, active`` this writes ``translate.<lang>.toml`` when
        messages are missing or stale. With ``baseline, active, translate``
        the translations are folded into the active file.
        """
        run_command([
            *self.command, "merge",
            "-sourceLanguage", source_lang,
            "-format", FORMAT,
            "-outdir", str(output_dir),
            *(str(f) for f in files),
        ], self.cancel_event)
