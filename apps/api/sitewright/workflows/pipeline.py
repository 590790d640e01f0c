"""Site generation pipeline: Architect -> build loop, for new and existing projects."""

import logging
from typing import Optional

from ..agents.architect import architect as default_architect
from ..agents.auditor import auditor as default_auditor
from ..agents.builder import builder as default_builder
from ..models import Project
from ..storage import ArtifactStore, store as default_store
from .build_loop import BuildLoop


logger = logging.getLogger(__name__)


MODIFY_REQUEST = "Based on the previous blueprint and existing HTML, apply this modification: {prompt}"


class SitePipeline:
    """
    Runs one build session end to end.

    generate:
    1. Mint a project id
    2. Architect writes the blueprint, which is saved
    3. Build loop runs Builder/Auditor until PASS or exhaustion

    modify:
    1. Load the saved blueprint (ProjectNotFoundError if absent)
    2. Read the current canonical page, if any, as context
    3. Architect rewrites the full blueprint, which replaces the old one
    4. Build loop runs in the same workspace
    """

    def __init__(
        self,
        store: Optional[ArtifactStore] = None,
        architect=None,
        builder=None,
        auditor=None,
        max_attempts: Optional[int] = None,
    ):
        self.store = store or default_store
        self.architect = architect or default_architect
        self.builder = builder or default_builder
        self.auditor = auditor or default_auditor
        self.max_attempts = max_attempts

    def _loop(self) -> BuildLoop:
        return BuildLoop(self.builder, self.auditor, max_attempts=self.max_attempts)

    async def generate(self, prompt: str) -> Project:
        project_id = self.store.new_project_id()
        logger.info(f"Starting new project: {project_id}")

        blueprint = await self.architect.author(prompt)
        self.store.save_spec(project_id, blueprint)

        project = Project(id=project_id, spec=blueprint)
        return await self._loop().run(project, self.store.workspace(project_id))

    async def modify(self, previous_project_id: str, modification_prompt: str) -> Project:
        previous_blueprint = self.store.load_spec(previous_project_id)
        existing_html = self.store.read_artifact(previous_project_id)

        logger.info(f"Modifying project: {previous_project_id}")

        blueprint = await self.architect.author(
            MODIFY_REQUEST.format(prompt=modification_prompt),
            [previous_blueprint],
            existing_html,
        )
        self.store.save_spec(previous_project_id, blueprint)

        project = Project(id=previous_project_id, spec=blueprint)
        return await self._loop().run(project, self.store.workspace(previous_project_id))


site_pipeline = SitePipeline()
