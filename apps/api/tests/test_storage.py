"""
Tests for the filesystem artifact store.
"""

from uuid import UUID

import pytest

from sitewright.core.exceptions import ProjectNotFoundError
from sitewright.storage import (
    ARTIFACT_FILENAME,
    FAILED_ARTIFACT_FILENAME,
    SPEC_FILENAME,
    ArtifactStore,
)


def test_new_project_ids_are_unique_uuids():
    first = ArtifactStore.new_project_id()
    second = ArtifactStore.new_project_id()

    assert first != second
    assert str(UUID(first)) == first


def test_spec_round_trip(artifact_store):
    artifact_store.save_spec("p1", "# Blueprint")

    assert artifact_store.has_spec("p1")
    assert artifact_store.load_spec("p1") == "# Blueprint"
    assert (artifact_store.workspace("p1") / SPEC_FILENAME).is_file()


def test_save_spec_overwrites(artifact_store):
    artifact_store.save_spec("p1", "old")
    artifact_store.save_spec("p1", "new")

    assert artifact_store.load_spec("p1") == "new"


def test_load_missing_spec_raises(artifact_store):
    with pytest.raises(ProjectNotFoundError) as exc_info:
        artifact_store.load_spec("missing")

    assert exc_info.value.project_id == "missing"
    assert not artifact_store.has_spec("missing")


def test_read_artifact_only_sees_canonical_name(artifact_store):
    workspace = artifact_store.ensure_workspace("p1")
    assert artifact_store.read_artifact("p1") is None

    (workspace / FAILED_ARTIFACT_FILENAME).write_text("<html>failed</html>", encoding="utf-8")
    assert artifact_store.read_artifact("p1") is None

    (workspace / ARTIFACT_FILENAME).write_text("<html>ok</html>", encoding="utf-8")
    assert artifact_store.read_artifact("p1") == "<html>ok</html>"


def test_read_artifact_replaces_undecodable_bytes(artifact_store):
    workspace = artifact_store.ensure_workspace("p1")
    (workspace / ARTIFACT_FILENAME).write_bytes(b"<html>caf\xe9</html>")

    assert artifact_store.read_artifact("p1") == "<html>caf\ufffd</html>"


def test_mark_failed_moves_artifact(artifact_store):
    workspace = artifact_store.ensure_workspace("p1")
    canonical = workspace / ARTIFACT_FILENAME
    canonical.write_text("<html>bad</html>", encoding="utf-8")
    (workspace / FAILED_ARTIFACT_FILENAME).write_text("<html>older</html>", encoding="utf-8")

    target = ArtifactStore.mark_failed(canonical)

    assert target == artifact_store.failed_path("p1")
    assert not canonical.exists()
    assert target.read_text(encoding="utf-8") == "<html>bad</html>"


def test_ensure_root_creates_directory(tmp_path):
    store = ArtifactStore(root=str(tmp_path / "nested" / "output"))

    root = store.ensure_root()

    assert root.is_dir()
