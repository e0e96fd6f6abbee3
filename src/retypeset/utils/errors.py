"""Typed exceptions raised by the extraction, layout and render stages."""


class RetypesetError(Exception):
    """Base class for all errors raised by the package."""


class InputFileError(RetypesetError, OSError):
    """Raised when the input PDF is missing or unreadable."""


class OutputFileError(RetypesetError, OSError):
    """Raised when the output PDF cannot be written."""


class BackendUnavailableError(RetypesetError):
    """Raised when no usable extraction backend library can be loaded."""


class UnknownBackendError(BackendUnavailableError, KeyError):
    """Raised when a backend name has no registered factory."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class ExtractionError(RetypesetError):
    """Raised when the backend fails to open or read the input document."""


class RenderError(RetypesetError):
    """Raised when the output document cannot be generated."""


class VerificationError(RetypesetError):
    """Raised when the written output cannot be re-opened as expected."""
