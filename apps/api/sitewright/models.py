from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .core.exceptions import InvalidTransitionError


class ProjectStatus(str, Enum):
    in_progress = "in_progress"
    completed = "completed"
    failed = "failed"


class VerdictStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"


class AuditVerdict(BaseModel):
    status: VerdictStatus
    issues: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _issues_match_status(self) -> "AuditVerdict":
        if self.status == VerdictStatus.PASS and self.issues:
            raise ValueError("A PASS verdict cannot carry issues")
        if self.status == VerdictStatus.FAIL and not self.issues:
            raise ValueError("A FAIL verdict must list at least one issue")
        return self

    @property
    def passed(self) -> bool:
        return self.status == VerdictStatus.PASS

    @classmethod
    def passing(cls) -> "AuditVerdict":
        return cls(status=VerdictStatus.PASS, issues=[])

    @classmethod
    def failing(cls, *issues: str) -> "AuditVerdict":
        return cls(status=VerdictStatus.FAIL, issues=list(issues))


_ALLOWED_TRANSITIONS = {
    ProjectStatus.in_progress: {ProjectStatus.completed, ProjectStatus.failed},
    ProjectStatus.completed: set(),
    ProjectStatus.failed: set(),
}


class Project(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(..., frozen=True)
    spec: str
    artifact_path: Optional[str] = None
    status: ProjectStatus = ProjectStatus.in_progress
    verdict: Optional[AuditVerdict] = None

    def __setattr__(self, name, value):
        if name == "status":
            raise AttributeError("Project status changes only through transition()")
        super().__setattr__(name, value)

    def transition(self, new_status: ProjectStatus) -> None:
        """Move the project forward; terminal states never change again."""
        if new_status not in _ALLOWED_TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"Project {self.id}: cannot move from {self.status.value} to {new_status.value}"
            )
        super().__setattr__("status", new_status)


# Request / response models

class GenerateRequest(BaseModel):
    prompt: str = Field(..., min_length=5, description="Prompt must be at least 5 characters long")


class ModifyRequest(BaseModel):
    previous_project_id: UUID = Field(..., description="ID of a previously generated project")
    modification_prompt: str = Field(..., min_length=5)


class HealthResponse(BaseModel):
    status: str
    busy: bool
