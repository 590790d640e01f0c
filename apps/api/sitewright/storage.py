import logging
import os
from pathlib import Path
from typing import Optional
from uuid import uuid4

from .core.config import settings
from .core.exceptions import ProjectNotFoundError


logger = logging.getLogger(__name__)

SPEC_FILENAME = "blueprint.md"
ARTIFACT_FILENAME = "index.html"
FAILED_ARTIFACT_FILENAME = "index_FAILED_AUDIT.html"


class ArtifactStore:
    """
    Filesystem namespace for generated projects.

    Every project owns OUTPUT_DIR/<project_id>/ holding its spec document,
    the canonical artifact and, after an exhausted session, the artifact
    saved under the failure name. Modification only ever looks at the
    canonical name.
    """

    def __init__(self, root: Optional[str] = None):
        self._root = root

    @property
    def root(self) -> Path:
        return Path(self._root or settings.OUTPUT_DIR)

    def ensure_root(self) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    @staticmethod
    def new_project_id() -> str:
        return str(uuid4())

    def workspace(self, project_id: str) -> Path:
        return self.root / project_id

    def ensure_workspace(self, project_id: str) -> Path:
        path = self.workspace(project_id)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def spec_path(self, project_id: str) -> Path:
        return self.workspace(project_id) / SPEC_FILENAME

    def canonical_path(self, project_id: str) -> Path:
        return self.workspace(project_id) / ARTIFACT_FILENAME

    def failed_path(self, project_id: str) -> Path:
        return self.workspace(project_id) / FAILED_ARTIFACT_FILENAME

    def has_spec(self, project_id: str) -> bool:
        return self.spec_path(project_id).is_file()

    def save_spec(self, project_id: str, spec: str) -> Path:
        self.ensure_workspace(project_id)
        path = self.spec_path(project_id)
        path.write_text(spec, encoding="utf-8")
        logger.debug(f"Saved spec for project {project_id} ({len(spec)} chars)")
        return path

    def load_spec(self, project_id: str) -> str:
        path = self.spec_path(project_id)
        if not path.is_file():
            raise ProjectNotFoundError(project_id)
        return path.read_text(encoding="utf-8")

    def read_artifact(self, project_id: str) -> Optional[str]:
        """Return the canonical artifact, or None if no attempt ever passed."""
        path = self.canonical_path(project_id)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8", errors="replace")

    @staticmethod
    def mark_failed(artifact_path: Path) -> Path:
        """Move an artifact aside so it cannot be mistaken for a passing build."""
        artifact_path = Path(artifact_path)
        target = artifact_path.with_name(FAILED_ARTIFACT_FILENAME)
        os.replace(artifact_path, target)
        logger.info(f"Moved failed artifact to {target}")
        return target


store = ArtifactStore()
