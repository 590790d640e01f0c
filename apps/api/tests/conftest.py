import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fakes import FakeArchitect, FakeAuditor, FakeBuilder
from sitewright.core.gate import gate
from sitewright.main import app
from sitewright.models import AuditVerdict
from sitewright.storage import ArtifactStore
from sitewright.workflows.pipeline import SitePipeline


@pytest.fixture
def artifact_store(tmp_path):
    return ArtifactStore(root=str(tmp_path / "output"))


@pytest.fixture
def fake_architect():
    return FakeArchitect()


@pytest.fixture
def fake_builder():
    return FakeBuilder()


@pytest.fixture
def fake_auditor():
    return FakeAuditor(AuditVerdict.passing())


@pytest.fixture
def pipeline(artifact_store, fake_architect, fake_builder, fake_auditor):
    return SitePipeline(
        store=artifact_store,
        architect=fake_architect,
        builder=fake_builder,
        auditor=fake_auditor,
        max_attempts=3,
    )


@pytest.fixture(autouse=True)
def gate_released():
    """Every test starts and ends with the process-wide gate free."""
    assert not gate.busy
    yield
    assert not gate.busy


@pytest_asyncio.fixture
async def api_client(monkeypatch, pipeline):
    """HTTP client whose requests run against the fake pipeline."""
    monkeypatch.setattr("sitewright.workflows.pipeline.site_pipeline", pipeline)
    # generic 500 handler re-raises after responding; keep the response instead
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
