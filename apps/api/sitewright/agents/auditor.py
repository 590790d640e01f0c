"""
Auditor Agent: checks a generated page against the original blueprint.

The agent answers with JSON ({"status": "PASS"|"FAIL", "critical_issues": [...]}).
Anything that cannot be read as a verdict degrades to a synthetic FAIL so the
build loop only ever sees well-formed verdicts.
"""

import json
import logging
import re
from typing import Any, List, Optional

from crewai import Agent, Task
from pydantic import BaseModel, Field

from ..core.exceptions import AuditParseError
from ..models import AuditVerdict, VerdictStatus
from .crew import kickoff, resolve_llm


logger = logging.getLogger(__name__)

INVALID_OUTPUT_ISSUE = "Auditor produced invalid JSON output."
UNITEMIZED_FAIL_ISSUE = "Auditor reported FAIL without itemized issues."

_FENCE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


class AuditReport(BaseModel):
    """Structured output the audit task asks CrewAI for."""
    status: str
    critical_issues: List[str] = Field(default_factory=list)


def create_auditor_agent(llm: Optional[str] = None) -> Agent:
    return Agent(
        role="Senior QA Engineer and Code Auditor",
        goal="Decide whether a generated page meets its requirements and is production-ready",
        backstory="""You are a meticulous QA engineer. You read the requirements first,
        then the code, and you only pass work that fulfils the requirements, ships as
        one self-contained file and runs without obvious errors. When you fail a build
        you list specific, actionable issues for the developer to fix.""",
        llm=llm or resolve_llm(),
        verbose=False,
        allow_delegation=False,
        tools=[],
    )


def build_audit_prompt(artifact: str, original_spec: str) -> str:
    return f"""
Your task is to verify if the generated HTML code meets the original requirements and is production-ready.

ORIGINAL REQUIREMENTS:
"{original_spec}"

GENERATED CODE (HTML):
{artifact}

AUDIT CRITERIA:
1. Does the code fulfill the core user requirements?
2. Is it a SINGLE 'index.html' file with embedded CSS/JS? (Critical)
3. Are there any broken syntax or obvious runtime errors?
4. Is the design consistent with a modern, high-quality standard?

Return ONLY valid JSON:
{{
    "status": "PASS" or "FAIL",
    "critical_issues": ["specific, actionable issue", ...]
}}
"critical_issues" must be empty when status is PASS.
"""


def create_audit_task(artifact: str, original_spec: str, agent: Agent) -> Task:
    return Task(
        description=build_audit_prompt(artifact, original_spec),
        expected_output='JSON object with "status" ("PASS" or "FAIL") and "critical_issues" (list of strings).',
        agent=agent,
        output_pydantic=AuditReport,
    )


def parse_verdict(output: Any) -> AuditVerdict:
    """
    Parse auditor output into a verdict.

    Contradictory payloads are normalized: PASS with issues becomes FAIL,
    FAIL without issues gets a placeholder issue.

    Raises:
        AuditParseError: If the output is not a recognizable verdict
    """
    if isinstance(output, BaseModel):
        output = output.model_dump()

    if isinstance(output, str):
        text = output.strip()
        match = _FENCE.search(text)
        if match:
            text = match.group(1)
        try:
            output = json.loads(text)
        except json.JSONDecodeError as e:
            raise AuditParseError(f"Verdict is not valid JSON: {e}", raw=text) from e

    if not isinstance(output, dict):
        raise AuditParseError("Verdict must be a JSON object", raw=str(output))

    status = str(output.get("status", "")).strip().upper()
    if status not in (VerdictStatus.PASS.value, VerdictStatus.FAIL.value):
        raise AuditParseError(f"Unknown verdict status: {status!r}", raw=str(output))

    issues = output.get("critical_issues", output.get("issues", []))
    if not isinstance(issues, list):
        raise AuditParseError("'critical_issues' must be a list", raw=str(output))
    issues = [str(issue) for issue in issues if str(issue).strip()]

    if issues:
        return AuditVerdict(status=VerdictStatus.FAIL, issues=issues)
    if status == VerdictStatus.FAIL.value:
        return AuditVerdict.failing(UNITEMIZED_FAIL_ISSUE)
    return AuditVerdict.passing()


class Auditor:
    """Verdict-producing capability."""

    def __init__(self, llm: Optional[str] = None):
        self.llm = llm

    async def audit(self, artifact: str, original_spec: str) -> AuditVerdict:
        agent = create_auditor_agent(self.llm)
        task = create_audit_task(artifact, original_spec, agent)
        output = await kickoff(agent, task)

        try:
            return parse_verdict(output)
        except AuditParseError as e:
            logger.error(f"Auditor: failed to parse response: {e}")
            return AuditVerdict.failing(INVALID_OUTPUT_ISSUE)


auditor = Auditor()
