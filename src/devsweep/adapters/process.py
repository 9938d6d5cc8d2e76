"""Process table adapter using pgrep/pkill."""

from __future__ import annotations

import asyncio
import logging
import shutil
import subprocess

from ..errors import DomainError
from ..result import Result

logger = logging.getLogger(__name__)


class SystemProcessManager:
    """Looks up and terminates processes by exact name."""

    def is_process_running(self, process_name: str) -> bool:
        if shutil.which("pgrep") is None:
            logger.debug("pgrep not available, assuming %s is not running", process_name)
            return False
        try:
            result = subprocess.run(
                ["pgrep", "-x", process_name],
                capture_output=True,
                text=True,
                check=False,
            )
        except (subprocess.SubprocessError, OSError):
            return False
        return result.returncode == 0

    async def kill_process(self, process_name: str) -> Result[bool]:
        if shutil.which("pkill") is None:
            return Result.failure(DomainError.invalid_operation("pkill is not available"))
        try:
            result = await asyncio.to_thread(
                subprocess.run,
                ["pkill", "-x", process_name],
                capture_output=True,
                text=True,
                check=False,
            )
        except (subprocess.SubprocessError, OSError) as e:
            return Result.failure(DomainError.invalid_operation(f"Cannot run pkill: {e}"))

        # pkill exits 1 when nothing matched
        if result.returncode == 0:
            logger.info("Terminated process: %s", process_name)
            return Result.success(True)
        if result.returncode == 1:
            return Result.success(False)
        return Result.failure(DomainError.invalid_operation(f"pkill {process_name} failed: {result.stderr.strip()}"))
