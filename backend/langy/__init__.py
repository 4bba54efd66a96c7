import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from langy.config import settings
from langy.db import init_all_databases
from langy.errors import LangyError
from langy.version import __version__

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_all_databases(settings.data_dir)
    yield


async def _langy_error_handler(request: Request, exc: LangyError) -> JSONResponse:
    logger.warning(
        "%s %s -> %d %s: %s",
        request.method, request.url.path, exc.status_code, type(exc).__name__, exc,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


def create_app() -> FastAPI:
    application = FastAPI(title="Langy Backend", version=__version__, lifespan=lifespan)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_exception_handler(LangyError, _langy_error_handler)

    from langy.routers import cards, health, study

    application.include_router(health.router)
    application.include_router(cards.router, prefix="/cards", tags=["cards"])
    application.include_router(study.router, prefix="/study", tags=["study"])

    return application


app = create_app()
