"""
Host facts — installed macOS version and hardware model identifier.

Read-only system probes:

    sw_vers -productVersion   → "14.5"
    sysctl -n hw.model        → "Mac14,2"

Both raise HostFactError when the command is missing, times out, exits
non-zero, or prints nothing.
"""

from __future__ import annotations

import logging
import subprocess

from maccompat.core.errors import HostFactError

logger = logging.getLogger(__name__)

_PROBE_TIMEOUT = 10

SYSTEM_VERSION_CMD = ["sw_vers", "-productVersion"]
MODEL_IDENTIFIER_CMD = ["sysctl", "-n", "hw.model"]


def _probe(cmd: list[str]) -> str:
    """Run a probe command and return its trimmed stdout."""
    try:
        r = subprocess.run(
            cmd,
            capture_output=True, text=True, timeout=_PROBE_TIMEOUT,
        )
    except FileNotFoundError as e:
        raise HostFactError(f"{cmd[0]} not found") from e
    except subprocess.TimeoutExpired as e:
        raise HostFactError(f"{cmd[0]} timed out after {_PROBE_TIMEOUT}s") from e
    except OSError as e:
        raise HostFactError(f"{cmd[0]} failed: {e}") from e

    if r.returncode != 0:
        detail = r.stderr.strip() or f"exit code {r.returncode}"
        raise HostFactError(f"{' '.join(cmd)} failed: {detail}")

    output = r.stdout.strip()
    if not output:
        raise HostFactError(f"{' '.join(cmd)} returned no output")

    logger.debug("%s → %s", " ".join(cmd), output)
    return output


def get_system_version() -> str:
    """Installed macOS product version (dotted, e.g. "14.5")."""
    return _probe(SYSTEM_VERSION_CMD)


def get_model_identifier() -> str:
    """Hardware model identifier (e.g. "Mac14,2", "VirtualMac2,1")."""
    return _probe(MODEL_IDENTIFIER_CMD)
