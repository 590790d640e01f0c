"""Error taxonomy for the build pipeline.

Only GateBusyError, ProjectNotFoundError and unexpected errors ever reach
the HTTP layer. BuildFailure and AuditParseError are recovered inside the
build loop and the auditor respectively.
"""

from typing import Optional


class SitewrightError(Exception):
    """Base class for all domain errors."""


class GateBusyError(SitewrightError):
    """Another build session already holds the request gate."""

    def __init__(self, message: str = "The builder is currently busy with another request. Please try again later."):
        super().__init__(message)


class ProjectNotFoundError(SitewrightError):
    """No spec document exists for the requested project id."""

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project {project_id} not found.")


NotFoundError = ProjectNotFoundError


class BuildFailure(SitewrightError):
    """The builder finished without producing an artifact."""


class AuditParseError(SitewrightError):
    """The auditor response could not be parsed into a verdict."""

    def __init__(self, message: str, raw: Optional[str] = None):
        self.raw = raw
        super().__init__(message)


class ExhaustionError(SitewrightError):
    """The retry budget was consumed without a passing verdict."""

    def __init__(self, attempts: int, last_feedback: Optional[str]):
        self.attempts = attempts
        self.last_feedback = last_feedback
        super().__init__(
            f"Max retries reached ({attempts} attempts). "
            f"Last feedback: {last_feedback or 'none'}"
        )


class InvalidTransitionError(ValueError):
    """A project status change that would move backwards."""
