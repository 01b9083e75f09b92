"""Exception hierarchy shared by the pipeline, the tool wrapper and the backends."""

from __future__ import annotations


class I18nGenError(Exception):
    """Base class for all errors raised by i18ngen."""


class ConfigError(I18nGenError):
    """Bad or missing required input (output dir, language tag, provider)."""


class ExternalToolError(I18nGenError):
    """The goi18n extract/merge command failed."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class ModelCallError(I18nGenError):
    """The model backend failed while translating a chunk."""

    def __init__(self, message: str, language: str) -> None:
        super().__init__(message)
        self.language = language


class DeserializationError(I18nGenError):
    """A resource file or a model response did not have the expected shape."""


class CancelledError(I18nGenError):
    """Raised when the run is cancelled by a signal or by the user."""


def check_cancel(cancel_event) -> None:
    """Raise CancelledError if the cancel event is set."""
    if cancel_event is not None and cancel_event.is_set():
        raise CancelledError("Operation cancelled by user")
