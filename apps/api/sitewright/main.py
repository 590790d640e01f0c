import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from .core.config import settings
from .core.gate import gate
from .llm_providers import validate_provider_config
from .middleware.error_handler import register_exception_handlers
from .models import HealthResponse
from .routers import sites
from .storage import store

logger = logging.getLogger(__name__)


app = FastAPI(
    title="Sitewright API",
    description="Prompt-to-website builder: Architect, Builder and Auditor agents in a self-correcting loop",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(sites.router)


@app.on_event("startup")
async def startup_event():
    """Validate configuration and make sure the output directory exists."""
    logger.info("Starting Sitewright API...")
    settings.validate_production_config()

    provider_status = validate_provider_config(settings.MODEL_PROVIDER)
    if provider_status["valid"]:
        logger.info(f"LLM provider '{provider_status['provider']}' configured")
    else:
        logger.warning(
            f"LLM provider '{provider_status['provider']}' is missing configuration: "
            f"{', '.join(provider_status['missing'])}"
        )

    output_dir = store.ensure_root()
    logger.info(f"Output directory confirmed at: {output_dir.resolve()}")


@app.get("/health", response_model=HealthResponse, response_class=ORJSONResponse)
async def health():
    """Health check endpoint; busy reflects the request gate."""
    return {"status": "ok", "busy": gate.busy}
