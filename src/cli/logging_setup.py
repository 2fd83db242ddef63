"""Logging de la CLI (Rich).

Los módulos del Core y los adaptadores solo usan `logging.getLogger(__name__)`;
aquí se decide cómo se renderiza.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_NOISY_LOGGERS = ("boto3", "botocore", "urllib3", "s3transfer")


def configure_logging(level: str = "WARNING", *, verbose: bool = False) -> None:
    """Instala un `RichHandler` en el root logger (stderr)."""

    resolved = "DEBUG" if verbose else level.upper()
    logging.basicConfig(
        level=resolved,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )
    if not verbose:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
