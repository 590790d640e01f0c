"""
Architect Agent: turns a user request into a build blueprint.

The blueprint instructs the builder to produce exactly one self-contained
'index.html'. When an existing page is supplied the architect rewrites the
full blueprint for the new state instead of emitting a diff.
"""

import logging
from typing import Optional, Sequence

from crewai import Agent, Task

from .crew import kickoff, resolve_llm


logger = logging.getLogger(__name__)


SYSTEM_INSTRUCTIONS = """
You are a Principal Software Architect.
Your goal is to design a complete, production-ready website based on the user's request.

CRITICAL REQUIREMENT:
The output must be a detailed technical specification (Blueprint) for a Developer.
You MUST strictly instruct the Developer to generate a SINGLE 'index.html' file.
All CSS must be embedded in <style> tags.
All JavaScript must be embedded in <script> tags.
External assets (images) should be fast, reliable placeholders or CDNs.

The Blueprint should include:
1. Project Structure (Single File 'index.html')
2. Core Features & Requirements
3. Design System (Colors, Typography, Layout - instructions for CSS)
4. Functional Logic (Instructions for JS)
5. Step-by-Step Implementation Guide

Ensure the design instructions are high-quality, modern, and responsive.
"""

UPDATE_INSTRUCTIONS = """
CONTEXT UPDATE:
You are updating an existing website.
READ the provided HTML content in the context below.
ONLY output a full updated Blueprint that preserves the existing features while applying the new user request.
DO NOT output a diff. Output the FULL technical specification for the NEW state of the file.
"""


def create_architect_agent(llm: Optional[str] = None) -> Agent:
    """
    Create the Architect agent for blueprint authoring.

    Args:
        llm: Optional litellm model string override

    Returns:
        Agent instance
    """
    return Agent(
        role="Principal Software Architect",
        goal="Write complete, unambiguous blueprints for single-file websites",
        backstory="""You are a principal architect who has shipped hundreds of
        polished marketing sites, dashboards and small web apps. Your blueprints are
        precise enough that a developer can build the page in one pass without
        asking questions, and you always insist on a single self-contained file.""",
        llm=llm or resolve_llm(),
        verbose=False,
        allow_delegation=False,
        tools=[],
    )


def build_blueprint_prompt(
    requirement: str,
    history: Sequence[str] = (),
    existing_artifact: Optional[str] = None,
) -> str:
    """Assemble the full task description sent to the architect."""
    sections = [SYSTEM_INSTRUCTIONS.strip()]
    if existing_artifact is not None:
        sections.append(UPDATE_INSTRUCTIONS.strip())

    for i, entry in enumerate(history, start=1):
        sections.append(f"PREVIOUS BLUEPRINT ({i}):\n{entry}")

    if existing_artifact is not None:
        sections.append(f"EXISTING HTML CONTENT:\n```html\n{existing_artifact}\n```")

    sections.append(f"USER REQUEST:\n{requirement}")
    return "\n\n".join(sections)


def create_blueprint_task(
    requirement: str,
    agent: Agent,
    history: Sequence[str] = (),
    existing_artifact: Optional[str] = None,
) -> Task:
    return Task(
        description=build_blueprint_prompt(requirement, history, existing_artifact),
        expected_output="A complete Markdown blueprint for a single self-contained index.html.",
        agent=agent,
    )


class Architect:
    """Spec-authoring capability. No internal retry; callers own retry policy."""

    def __init__(self, llm: Optional[str] = None):
        self.llm = llm

    async def author(
        self,
        requirement: str,
        history: Sequence[str] = (),
        existing_artifact: Optional[str] = None,
    ) -> str:
        logger.info("Architect: generating blueprint")
        agent = create_architect_agent(self.llm)
        task = create_blueprint_task(requirement, agent, history, existing_artifact)
        blueprint = await kickoff(agent, task)
        logger.info(f"Architect: blueprint ready ({len(blueprint)} chars)")
        return blueprint


architect = Architect()
