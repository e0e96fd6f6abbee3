"""Extract the text of a PDF through PDFium and typeset it into a new PDF.

The command line interface lives in :mod:`retypeset.cli`.
"""

from .pipeline import RetypesetResult, describe_lines, retypeset, verify_output

__version__ = "0.1.0"

__all__ = [
    "RetypesetResult",
    "__version__",
    "describe_lines",
    "retypeset",
    "verify_output",
]
