"""
Verdict models — the single result row produced per invocation.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict

# ── Field values ────────────────────────────────────────────────

UNKNOWN = "Unknown"
UNSUPPORTED = "Unsupported"

STATUS_PASS = "Pass"
STATUS_FAIL = "Fail"
STATUS_UNSUPPORTED_HARDWARE = "UnsupportedHardware"

# ── Row schema ──────────────────────────────────────────────────

TABLE_NAME = "macos_compatibility"

ROW_COLUMNS: list[tuple[str, str]] = [
    ("system_version", "text"),
    ("system_os_major", "text"),
    ("model_identifier", "text"),
    ("latest_macos", "text"),
    ("latest_compatible_macos", "text"),
    ("is_compatible", "integer"),
    ("status", "text"),
]


class Compatibility(IntEnum):
    """Tri-state compatibility flag, valued as it appears in the row."""

    COMPATIBLE = 1
    NOT_COMPATIBLE = 0
    INDETERMINATE = -1


class CompatibilityVerdict(BaseModel):
    """Outcome of one compatibility check.

    ``status`` is ``Pass``, ``Fail``, ``UnsupportedHardware`` or a free-text
    error description. ``model_identifier`` is reported after virtual
    machine substitution.
    """

    model_config = ConfigDict(protected_namespaces=())

    system_version: str = UNKNOWN
    system_os_major: str = UNKNOWN
    model_identifier: str = UNKNOWN
    latest_macos: str = UNKNOWN
    latest_compatible_macos: str = UNKNOWN
    compatibility: Compatibility = Compatibility.INDETERMINATE
    status: str = ""

    @property
    def is_compatible(self) -> int:
        return int(self.compatibility)

    @classmethod
    def error(
        cls,
        status: str,
        system_version: str = UNKNOWN,
        system_os_major: str = UNKNOWN,
        model_identifier: str = UNKNOWN,
    ) -> CompatibilityVerdict:
        """Build an indeterminate verdict carrying an error description."""
        return cls(
            system_version=system_version,
            system_os_major=system_os_major,
            model_identifier=model_identifier,
            compatibility=Compatibility.INDETERMINATE,
            status=status,
        )

    def to_row(self) -> dict[str, str | int]:
        """Render as an output row keyed by ``ROW_COLUMNS`` names."""
        return {
            "system_version": self.system_version,
            "system_os_major": self.system_os_major,
            "model_identifier": self.model_identifier,
            "latest_macos": self.latest_macos,
            "latest_compatible_macos": self.latest_compatible_macos,
            "is_compatible": self.is_compatible,
            "status": self.status,
        }
