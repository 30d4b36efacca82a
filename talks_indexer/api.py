"""HTTP API for the talks indexer.

Endpoints:
    GET  /health                            Always available
    POST /api/reindex                       Full rebuild (development mode only)
    POST /api/reindex/conference/{slug}     One conference (development mode only)
    POST /api/reindex/talk/{talk_id}        One talk (development mode only)
"""

import logging
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from talks_indexer.config import Config
from talks_indexer.errors import IndexerError, NotFoundError
from talks_indexer.models import ReindexResult
from talks_indexer.pipeline import open_indexer_service
from talks_indexer.ports import Indexer

logger = logging.getLogger(__name__)


class ReindexResponse(BaseModel):
    status: str
    message: str = ""
    result: Optional[ReindexResult] = None


router = APIRouter(prefix="/api", tags=["reindex"])


async def _run(
    request: Request,
    operation: Callable[[Indexer], Awaitable[ReindexResult]],
    failure: str,
    success: str,
) -> JSONResponse:
    indexer: Indexer = request.app.state.indexer
    try:
        result = await operation(indexer)
    except NotFoundError as e:
        logger.warning(f"{failure}: {e}")
        body = ReindexResponse(status="error", message=f"{failure}: {e}")
        return JSONResponse(status_code=404, content=body.model_dump(exclude_none=True))
    except IndexerError as e:
        logger.error(f"{failure}: {e}")
        body = ReindexResponse(status="error", message=f"{failure}: {e}")
        return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))

    logger.info(success)
    body = ReindexResponse(status="success", message=success, result=result)
    return JSONResponse(status_code=200, content=body.model_dump(mode="json", exclude_none=True))


@router.post("/reindex")
async def reindex_all(request: Request):
    return await _run(
        request,
        lambda indexer: indexer.reindex_all(),
        "failed to reindex all conferences",
        "successfully reindexed all conferences",
    )


@router.post("/reindex/conference/{slug}")
async def reindex_conference(slug: str, request: Request):
    return await _run(
        request,
        lambda indexer: indexer.reindex_conference(slug),
        "failed to reindex conference",
        f"successfully reindexed conference: {slug}",
    )


@router.post("/reindex/talk/{talk_id}")
async def reindex_talk(talk_id: str, request: Request):
    return await _run(
        request,
        lambda indexer: indexer.reindex_talk(talk_id),
        "failed to reindex talk",
        f"successfully reindexed talk: {talk_id}",
    )


def create_app(config: Config, indexer: Optional[Indexer] = None) -> FastAPI:
    """Create the FastAPI app.

    When `indexer` is omitted, the service is wired from `config` for the
    lifetime of the app.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if indexer is not None:
            yield
            return
        async with open_indexer_service(config) as service:
            app.state.indexer = service
            logger.info("Indexer service ready")
            yield
        logger.info("Shutting down talks indexer API")

    app = FastAPI(title="Talks Indexer", version="0.1.0", lifespan=lifespan)
    if indexer is not None:
        app.state.indexer = indexer

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    if config.is_development:
        app.include_router(router)
        logger.info("API routes enabled (development mode)")
    else:
        logger.info("API routes disabled (production mode)")

    return app
