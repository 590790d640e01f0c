"""
Builder Agent: synthesizes the page by driving a local coding agent (aider).

The agent runs non-interactively inside the project workspace and must leave
a single 'index.html' behind. No timeout is applied to the subprocess.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import List, Optional

from ..core.config import settings
from ..core.exceptions import BuildFailure
from ..storage import ARTIFACT_FILENAME


logger = logging.getLogger(__name__)


def build_instruction(spec: str, feedback: Optional[str] = None) -> str:
    """Instruction passed to the coding agent via --message."""
    instruction = f"""
Here is the architectural blueprint for the website you need to build.

BLUEPRINT:
{spec}

STRICT INSTRUCTION:
Generate a SINGLE file named '{ARTIFACT_FILENAME}' in the current directory.
It must contain ALL code (HTML, CSS, JS).
Do not create separate .css or .js files.
"""
    if feedback:
        instruction += f"""
CRITICAL FEEDBACK FROM PREVIOUS AUDIT (FIX THESE ISSUES):
{feedback}
"""
    return instruction


def build_command(instruction: str, executable: Optional[str] = None) -> List[str]:
    # --yes: accept every change; --no-auto-commits: leave git history alone
    return [
        executable or settings.BUILDER_COMMAND,
        "--yes",
        "--no-auto-commits",
        "--message", instruction,
    ]


class Builder:
    """Artifact-synthesis capability backed by the aider CLI."""

    def __init__(self, executable: Optional[str] = None):
        self.executable = executable

    async def build(self, spec: str, workspace: Path, feedback: Optional[str] = None) -> str:
        """
        Run the coding agent in the workspace.

        Args:
            spec: Blueprint (or retry instruction) to build from
            workspace: Project directory the agent works in
            feedback: Issues from the previous audit, if any

        Returns:
            Absolute path to the generated index.html

        Raises:
            BuildFailure: If the agent exits non-zero or no artifact appears
        """
        workspace = Path(workspace)
        workspace.mkdir(parents=True, exist_ok=True)

        cmd = build_command(build_instruction(spec, feedback), self.executable)
        logger.info(f"Builder: starting build in {workspace}")

        # stdio is inherited so the agent's progress shows in the server log
        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(workspace),
            env={**os.environ, "CI": "true"},
        )
        returncode = await process.wait()

        if returncode != 0:
            raise BuildFailure(f"Builder exited with code {returncode}")

        artifact = workspace / ARTIFACT_FILENAME
        if not artifact.is_file():
            raise BuildFailure(f"Builder failed: {ARTIFACT_FILENAME} was not found after execution.")

        logger.info(f"Builder: build complete, output at {artifact}")
        return str(artifact.resolve())


builder = Builder()
