"""Shared helpers for running single-agent CrewAI crews."""

import asyncio
import logging
from typing import Any

from crewai import Agent, Crew, Process, Task

from ..llm_providers import get_litellm_model_string


logger = logging.getLogger(__name__)


def resolve_llm() -> str:
    """litellm model string for the configured provider."""
    return get_litellm_model_string()


def extract_output(result: Any) -> Any:
    """
    Pull the output out of a crew result; CrewAI versions differ here.

    Tasks that declare output_pydantic or output_json yield the structured
    object; everything else yields text.
    """
    structured = getattr(result, "pydantic", None) or getattr(result, "json_dict", None)
    if structured:
        return structured
    if hasattr(result, "raw"):
        return result.raw
    if hasattr(result, "output"):
        return result.output
    if isinstance(result, dict):
        return str(result.get("output", result))
    return str(result)


async def kickoff(agent: Agent, task: Task) -> Any:
    """
    Run a one-agent, one-task crew and return its output.

    kickoff() blocks, so it runs in the default executor and the event
    loop stays free while the model works.
    """
    crew = Crew(
        agents=[agent],
        tasks=[task],
        process=Process.sequential,
        verbose=False,
    )
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, crew.kickoff)
    return extract_output(result)
