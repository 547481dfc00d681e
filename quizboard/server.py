"""
quizboard Server - FastAPI app

- Quiz endpoints (criacao, envio, leaderboards, eventos)
- Engine compartilhado via app_state
- Logging configurado a partir do ambiente
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import app_state
from .config import get_config
from .logging_config import configure_logging
from .router import router as quiz_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await app_state.close_engine()


def create_app() -> FastAPI:
    """Cria a aplicacao FastAPI com o router do quiz."""
    config = get_config()
    configure_logging(config.log_level)

    app = FastAPI(title="quizboard", version="0.1.0", lifespan=lifespan)
    app.include_router(quiz_router)

    @app.get("/health")
    async def health():
        return {"status": "healthy", "storage_backend": config.storage_backend}

    return app


app = create_app()


# =============================================================================
# MAIN
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)
