"""External command adapter."""

from __future__ import annotations

import asyncio
import logging
import shutil
import subprocess
from collections.abc import Sequence

from ..models import CommandOutput
from ..result import Result

logger = logging.getLogger(__name__)


class SubprocessCommandRunner:
    """Runs commands to completion, capturing both streams."""

    def is_command_available(self, command: str) -> bool:
        return shutil.which(command) is not None

    async def run(self, command: str, arguments: Sequence[str] = ()) -> Result[CommandOutput]:
        logger.debug("Running: %s %s", command, " ".join(arguments))
        try:
            result = await asyncio.to_thread(
                subprocess.run,
                [command, *arguments],
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except (subprocess.SubprocessError, OSError) as e:
            logger.warning("Cannot run %s: %s", command, e)
            return CommandOutput.failed(f"Cannot run {command}: {e}")

        return CommandOutput.create(result.returncode, result.stdout, result.stderr)
