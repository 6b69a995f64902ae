"""Header normalization through an external filter process."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from .constants import DEFAULT_FILTER_COMMAND
from .errors import TransformError

logger = logging.getLogger(__name__)


class ExternalFilterTransformer:
    """Pipe a message file through a filter command and capture its output.

    The default command rewrites the Status header to ``Status: RO`` so the
    archived copy no longer carries Maildir-specific state.
    """

    def __init__(self, command: Sequence[str] | None = None) -> None:
        self.command = list(command or DEFAULT_FILTER_COMMAND)

    def transform(self, content_location: Path) -> bytes:
        """Return the normalized bytes of the message at ``content_location``."""
        try:
            with open(content_location, "rb") as infile:
                result = subprocess.run(
                    self.command,
                    stdin=infile,
                    capture_output=True,
                    check=False,
                )
        except OSError as e:
            raise TransformError(f"Couldn't run {self.command[0]} on {content_location}: {e}") from e

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", "replace").strip()
            raise TransformError(
                f"{self.command[0]} on {content_location} failed "
                f"with status {result.returncode}: {stderr}"
            )

        logger.debug("Normalized %s (%d bytes)", content_location, len(result.stdout))
        return result.stdout
