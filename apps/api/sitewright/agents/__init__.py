"""
Capability adapters for the site build pipeline.

- Architect: writes the blueprint from the user request (CrewAI)
- Builder: synthesizes index.html from the blueprint (aider CLI)
- Auditor: checks the page against the original blueprint (CrewAI)
"""

from .architect import Architect, create_architect_agent
from .builder import Builder
from .auditor import Auditor, create_auditor_agent, parse_verdict


__all__ = [
    "Architect",
    "create_architect_agent",
    "Builder",
    "Auditor",
    "create_auditor_agent",
    "parse_verdict",
]
