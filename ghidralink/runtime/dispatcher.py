"""Apply a received link: find the artifact, open it, move the cursor."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from ..address import Address
from ..link_codec import NavigationLink
from ..workspace import OpenArtifact, Workspace, resolve
from .foreground import ForegroundExecutor

logger = logging.getLogger(__name__)


class NavigationService(Protocol):
    def go_to(self, artifact: OpenArtifact, address: Address) -> bool: ...


class DispatchOutcome(enum.Enum):
    NAVIGATED = "navigated"
    ARTIFACT_NOT_FOUND = "artifact-not-found"
    OPEN_FAILED = "open-failed"
    NAVIGATION_UNAVAILABLE = "navigation-unavailable"
    INVALID_ADDRESS = "invalid-address"
    NAVIGATION_FAILED = "navigation-failed"


@dataclass(frozen=True)
class NavigationDispatcherDeps:
    """Collaborators used by :class:`NavigationDispatcher`."""

    executor: ForegroundExecutor
    workspace: Workspace
    navigation_service: Callable[[], NavigationService | None]
    report_status: Callable[[str], None]


class NavigationDispatcher:
    """Foreground-only handler for decoded navigation links."""

    def __init__(self, deps: NavigationDispatcherDeps) -> None:
        self._deps = deps

    def _fail(self, outcome: DispatchOutcome, message: str) -> DispatchOutcome:
        logger.warning("%s: %s", outcome.value, message)
        self._deps.report_status(message)
        return outcome

    def dispatch(self, link: NavigationLink) -> DispatchOutcome:
        """Navigate to ``link``; every failure is reported, none is raised."""
        deps = self._deps
        deps.executor.ensure_foreground("link dispatch")

        handle = resolve(deps.workspace.root_folder(), link.artifact_name)
        if handle is None:
            return self._fail(
                DispatchOutcome.ARTIFACT_NOT_FOUND,
                f"Unable to find '{link.artifact_name}' in the current workspace.",
            )

        try:
            artifact = deps.workspace.open_artifact(handle)
        except OSError as exc:
            return self._fail(DispatchOutcome.OPEN_FAILED, f"Cannot open '{link.artifact_name}': {exc}")

        navigator = deps.navigation_service()
        if navigator is None:
            return self._fail(DispatchOutcome.NAVIGATION_UNAVAILABLE, "Navigation service not available.")

        address = artifact.parse_address(link.address)
        if address is None:
            return self._fail(
                DispatchOutcome.INVALID_ADDRESS,
                f"'{link.address}' is not a valid address in '{artifact.name}'.",
            )

        if not navigator.go_to(artifact, address):
            return self._fail(
                DispatchOutcome.NAVIGATION_FAILED,
                f"Cannot go to {address} in '{artifact.name}'.",
            )
        logger.info("navigated to %s @ %s", artifact.name, address)
        return DispatchOutcome.NAVIGATED


__all__ = [
    "DispatchOutcome",
    "NavigationDispatcher",
    "NavigationDispatcherDeps",
    "NavigationService",
]
