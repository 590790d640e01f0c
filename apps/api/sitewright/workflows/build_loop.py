"""Self-correcting build loop: Builder -> Auditor cycles under a fixed budget."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from ..core.config import settings
from ..core.exceptions import BuildFailure, ExhaustionError
from ..models import AuditVerdict, Project, ProjectStatus
from ..storage import ArtifactStore


logger = logging.getLogger(__name__)


RETRY_INSTRUCTION = """
Your previous build failed these specific checks:
{feedback}

Focus strictly on fixing these errors while keeping the rest of the code intact.
"""

FEEDBACK_SEPARATOR = "\n- "


@dataclass(frozen=True)
class BuildOk:
    artifact_path: str


@dataclass(frozen=True)
class BuildErr:
    reason: str


BuildOutcome = Union[BuildOk, BuildErr]


@dataclass
class AttemptRecord:
    index: int
    feedback: Optional[str] = None
    outcome: Optional[BuildOutcome] = None
    verdict: Optional[AuditVerdict] = None


def join_feedback(issues: List[str]) -> str:
    return FEEDBACK_SEPARATOR.join(issues)


class BuildLoop:
    """
    Bounded retry state machine.

    Each attempt calls the builder, then audits whatever it produced against
    the original spec. A PASS ends the loop; a FAIL turns the verdict issues
    into feedback for the next attempt only. Builder failures and unexpected
    errors consume an attempt without touching the feedback. When the budget
    runs out the last artifact is moved to the failure name.
    """

    def __init__(self, builder, auditor, max_attempts: Optional[int] = None):
        self.builder = builder
        self.auditor = auditor
        self.max_attempts = settings.MAX_BUILD_ATTEMPTS if max_attempts is None else max_attempts
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        self.attempts: List[AttemptRecord] = []

    async def run(self, project: Project, workspace: Path) -> Project:
        self.attempts = []
        feedback: Optional[str] = None
        last_artifact: Optional[str] = None

        for index in range(1, self.max_attempts + 1):
            logger.info(f"Project {project.id}: build iteration {index}/{self.max_attempts}")
            record = AttemptRecord(index=index, feedback=feedback)
            self.attempts.append(record)

            try:
                record.outcome = await self._build(project.spec, workspace, feedback)
                if isinstance(record.outcome, BuildErr):
                    logger.warning(f"Project {project.id}: attempt {index} produced no artifact: {record.outcome.reason}")
                    continue

                last_artifact = record.outcome.artifact_path
                artifact_text = Path(last_artifact).read_text(encoding="utf-8", errors="replace")

                logger.info(f"Project {project.id}: auditing build")
                record.verdict = await self.auditor.audit(artifact_text, project.spec)
            except Exception as e:
                logger.exception(f"Project {project.id}: error in build iteration {index}: {e}")
                if record.outcome is None:
                    record.outcome = BuildErr(reason=str(e))
                continue

            logger.info(f"Project {project.id}: audit status {record.verdict.status.value}")

            if record.verdict.passed:
                project.artifact_path = last_artifact
                project.verdict = record.verdict
                project.transition(ProjectStatus.completed)
                logger.info(f"Project {project.id} completed successfully.")
                return project

            feedback = join_feedback(record.verdict.issues)
            logger.info(f"Project {project.id}: build failed audit, retrying with feedback:\n{feedback}")

        return self._exhaust(project, last_artifact, feedback)

    async def _build(self, spec: str, workspace: Path, feedback: Optional[str]) -> BuildOutcome:
        # Retries see only the issues to fix, not the full blueprint
        effective_spec = RETRY_INSTRUCTION.format(feedback=feedback) if feedback else spec
        try:
            path = await self.builder.build(effective_spec, workspace, feedback)
        except BuildFailure as e:
            return BuildErr(reason=str(e))
        return BuildOk(artifact_path=path)

    def _exhaust(self, project: Project, last_artifact: Optional[str], feedback: Optional[str]) -> Project:
        if last_artifact and Path(last_artifact).is_file():
            project.artifact_path = str(ArtifactStore.mark_failed(Path(last_artifact)))

        error = ExhaustionError(self.max_attempts, feedback)
        project.verdict = AuditVerdict.failing(str(error))
        project.transition(ProjectStatus.failed)
        logger.warning(f"Project {project.id} reached max retries: {error}")
        return project
