"""
Tests for project and verdict models.
"""

import pytest
from pydantic import ValidationError

from sitewright.core.exceptions import InvalidTransitionError
from sitewright.models import (
    AuditVerdict,
    GenerateRequest,
    ModifyRequest,
    Project,
    ProjectStatus,
    VerdictStatus,
)


class TestAuditVerdict:

    def test_pass_without_issues(self):
        verdict = AuditVerdict(status=VerdictStatus.PASS, issues=[])
        assert verdict.passed is True

    def test_pass_with_issues_rejected(self):
        with pytest.raises(ValidationError):
            AuditVerdict(status=VerdictStatus.PASS, issues=["still broken"])

    def test_fail_without_issues_rejected(self):
        with pytest.raises(ValidationError):
            AuditVerdict(status=VerdictStatus.FAIL, issues=[])

    def test_failing_keeps_issue_order(self):
        verdict = AuditVerdict.failing("second", "first")
        assert verdict.issues == ["second", "first"]
        assert verdict.passed is False


class TestProject:

    def test_defaults(self):
        project = Project(id="abc", spec="spec")

        assert project.status == ProjectStatus.in_progress
        assert project.artifact_path is None
        assert project.verdict is None

    def test_id_is_immutable(self):
        project = Project(id="abc", spec="spec")

        with pytest.raises(ValidationError):
            project.id = "other"

    @pytest.mark.parametrize("terminal", [ProjectStatus.completed, ProjectStatus.failed])
    def test_forward_transition(self, terminal):
        project = Project(id="abc", spec="spec")
        project.transition(terminal)
        assert project.status == terminal

    def test_status_cannot_be_assigned_directly(self):
        project = Project(id="abc", spec="spec")
        project.transition(ProjectStatus.failed)

        with pytest.raises(AttributeError, match="transition"):
            project.status = ProjectStatus.in_progress
        assert project.status == ProjectStatus.failed

    def test_no_backward_transition(self):
        project = Project(id="abc", spec="spec")
        project.transition(ProjectStatus.completed)

        with pytest.raises(InvalidTransitionError):
            project.transition(ProjectStatus.in_progress)
        with pytest.raises(InvalidTransitionError):
            project.transition(ProjectStatus.failed)

    def test_serializes_for_api(self):
        project = Project(id="abc", spec="spec", verdict=AuditVerdict.passing())
        project.transition(ProjectStatus.completed)

        data = project.model_dump(mode="json")

        assert data["status"] == "completed"
        assert data["verdict"] == {"status": "PASS", "issues": []}


class TestRequests:

    def test_short_prompt_rejected(self):
        with pytest.raises(ValidationError):
            GenerateRequest(prompt="hi")

    def test_modify_requires_uuid(self):
        with pytest.raises(ValidationError):
            ModifyRequest(previous_project_id="not-a-uuid", modification_prompt="Make it blue")
