"""
Shell command runner — the subprocess pattern every tool adapter shares.

Runs an argv list (never through a shell), captures output, and turns
the outcome into a Receipt. Adapters build on this instead of calling
``subprocess`` themselves.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path

from ignite.core.models.action import Receipt

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 600


def tool_available(binary: str) -> bool:
    """True when ``binary`` is on PATH."""
    return shutil.which(binary) is not None


def run_command(
    adapter: str,
    action_id: str,
    args: list[str],
    cwd: str | Path,
    timeout: int = DEFAULT_TIMEOUT,
) -> Receipt:
    """Run ``args`` in ``cwd`` and return a receipt. Never raises."""
    command = " ".join(args)
    logger.debug("Executing: %s (cwd=%s)", command, cwd)
    start = time.monotonic()

    try:
        result = subprocess.run(
            args,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return Receipt.failure(
            adapter=adapter,
            action_id=action_id,
            error=f"Command timed out after {timeout}s",
            metadata={"command": command, "timeout": timeout},
        )
    except OSError as e:
        return Receipt.failure(
            adapter=adapter,
            action_id=action_id,
            error=f"Cannot run {args[0]}: {e}",
            metadata={"command": command},
        )

    elapsed_ms = int((time.monotonic() - start) * 1000)
    output = result.stdout.strip()
    stderr = result.stderr.strip()

    if result.returncode == 0:
        return Receipt.success(
            adapter=adapter,
            action_id=action_id,
            output=output,
            duration_ms=elapsed_ms,
            metadata={"command": command, "return_code": 0, "stderr": stderr},
        )
    return Receipt.failure(
        adapter=adapter,
        action_id=action_id,
        error=stderr or f"Command exited with code {result.returncode}",
        duration_ms=elapsed_ms,
        metadata={"command": command, "return_code": result.returncode, "stdout": output},
    )
