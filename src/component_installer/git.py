"""Git repository cloner.

Runs git as a subprocess with captured exit status and a hard timeout. A clone
that fails, times out or is cancelled kills the git process and raises
FetchError (cancellation re-raises CancelledError).
"""

import asyncio
import logging
import os
from pathlib import Path

from .config import DEFAULT_CLONE_TIMEOUT
from .exceptions import FetchError

logger = logging.getLogger(__name__)


class GitCloner:
    """Clone component repositories with git (implements RepositoryClonerProtocol)."""

    def __init__(self, git_executable: str = "git", timeout: float = DEFAULT_CLONE_TIMEOUT):
        """Initialize cloner.

        Args:
            git_executable: git binary name or path
            timeout: Seconds before a git command is killed
        """
        self.git_executable = git_executable
        self.timeout = timeout

    async def clone(self, address: str, target_dir: Path) -> str | None:
        """
        Clone address into target_dir.

        Args:
            address: Remote repository address
            target_dir: Existing, empty directory to clone into

        Returns:
            Commit SHA of HEAD after clone, or None if it couldn't be read

        Raises:
            FetchError: If git fails, can't be started, or times out
        """
        logger.info(f"Cloning {address} into {target_dir}")
        returncode, _, stderr = await self._run(["clone", "--quiet", "--", address, str(target_dir)])
        if returncode != 0:
            raise FetchError(
                f"git clone of {address} failed with exit code {returncode}: {stderr.strip()}",
                context={"address": address, "target_dir": str(target_dir), "returncode": returncode},
            )

        returncode, stdout, stderr = await self._run(["rev-parse", "HEAD"], cwd=target_dir)
        if returncode != 0:
            logger.debug(f"Could not read commit of {target_dir}: {stderr.strip()}")
            return None
        return stdout.strip() or None

    async def _run(self, args: list[str], cwd: Path | None = None) -> tuple[int, str, str]:
        """Run a git command and return (returncode, stdout, stderr)."""
        command = [self.git_executable, *args]
        logger.debug(f"Running: {' '.join(command)}")

        # Never block on credential prompts
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=cwd,
                env=env,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise FetchError(f"Failed to run {self.git_executable}: {e}", context={"command": command}) from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except TimeoutError as e:
            await _kill(process)
            raise FetchError(
                f"git {args[0]} timed out after {self.timeout}s",
                context={"command": command, "timeout": self.timeout},
            ) from e
        except asyncio.CancelledError:
            await _kill(process)
            raise

        return (
            process.returncode if process.returncode is not None else -1,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )


async def _kill(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()
