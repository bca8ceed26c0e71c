import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import zenith.routers.api as api_router
from zenith.config import CORS_ORIGINS, LOG_LEVEL
from zenith.registry import PROVIDER_CONFIGS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):

    logger.info("Serving providers: %s", ", ".join(PROVIDER_CONFIGS))
    yield

    logger.info("Image generation API shutting down.")


def create_app() -> FastAPI:

    logging.basicConfig(
        level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    app = FastAPI(title="Zenith Image Generation API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router.get_router(), prefix="/api")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
