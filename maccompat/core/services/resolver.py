"""
Compatibility resolver — feed + host facts → verdict.

Pure and total: no I/O, never raises. Missing data shows up in the
verdict, not as an exception.

Decision table (after virtual machine substitution):

    feed versions   model in feed   newest == newest supported   result
    -------------   -------------   --------------------------   -----------------------
    none            —               —                            -1  No OS versions ...
    yes             no / empty      —                             0  UnsupportedHardware
    yes             yes             yes                           1  Pass
    yes             yes             no                            0  Fail

Versions are compared as exact strings; "15.1" and "15.1.0" differ.
"""

from __future__ import annotations

import logging

from maccompat.core.errors import EmptyFeedError
from maccompat.core.models.feed import FeedDocument
from maccompat.core.models.settings import DEFAULT_REFERENCE_MODEL, DEFAULT_VIRTUAL_MARKER
from maccompat.core.models.verdict import (
    STATUS_FAIL,
    STATUS_PASS,
    STATUS_UNSUPPORTED_HARDWARE,
    UNKNOWN,
    UNSUPPORTED,
    Compatibility,
    CompatibilityVerdict,
)

logger = logging.getLogger(__name__)


def os_major(version: str) -> str:
    """First dot-segment of a version string ("14.5" → "14")."""
    return version.split(".", 1)[0]


def substitute_virtual_model(
    model_identifier: str,
    virtual_marker: str = DEFAULT_VIRTUAL_MARKER,
    reference_model: str = DEFAULT_REFERENCE_MODEL,
) -> str:
    """Map a virtual machine model identifier to the reference physical model."""
    if virtual_marker in model_identifier:
        logger.debug(
            "Virtual model %s, resolving as %s", model_identifier, reference_model,
        )
        return reference_model
    return model_identifier


def resolve(
    doc: FeedDocument,
    installed_version: str,
    hardware_model: str,
    *,
    virtual_marker: str = DEFAULT_VIRTUAL_MARKER,
    reference_model: str = DEFAULT_REFERENCE_MODEL,
) -> CompatibilityVerdict:
    """Decide whether ``installed_version`` is the newest ``hardware_model`` supports.

    Args:
        doc: Parsed feed document.
        installed_version: Installed OS version, e.g. "14.5".
        hardware_model: Hardware model identifier, e.g. "Mac14,2".
        virtual_marker: Substring marking a virtualized Mac.
        reference_model: Physical model used in place of a virtualized one.

    Returns:
        A fully populated CompatibilityVerdict.
    """
    verdict = CompatibilityVerdict(
        system_version=installed_version,
        system_os_major=os_major(installed_version),
        model_identifier=hardware_model,
    )

    newest_published = doc.newest_published
    if newest_published is None:
        verdict.latest_macos = UNKNOWN
        verdict.latest_compatible_macos = UNKNOWN
        verdict.compatibility = Compatibility.INDETERMINATE
        verdict.status = EmptyFeedError.STATUS
        return verdict

    verdict.latest_macos = newest_published

    model_identifier = substitute_virtual_model(
        hardware_model, virtual_marker, reference_model,
    )
    verdict.model_identifier = model_identifier

    record = doc.lookup_model(model_identifier)
    newest_supported = record.newest_supported if record else None

    if newest_supported is None:
        verdict.latest_compatible_macos = UNSUPPORTED
        status = STATUS_UNSUPPORTED_HARDWARE
    else:
        verdict.latest_compatible_macos = newest_supported
        status = STATUS_PASS

    compatible = newest_published == verdict.latest_compatible_macos
    if not compatible and status == STATUS_PASS:
        status = STATUS_FAIL

    verdict.compatibility = (
        Compatibility.COMPATIBLE if compatible else Compatibility.NOT_COMPATIBLE
    )
    verdict.status = status
    return verdict
