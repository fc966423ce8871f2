"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI, File, Request, Response, UploadFile
from fastapi.responses import JSONResponse

from stylefinder.api.schemas import AnalysisResponse, ErrorResponse
from stylefinder.config.settings import Settings, get_settings
from stylefinder.integrations.search_client import SearchClient
from stylefinder.integrations.vision_client import VisionClient
from stylefinder.monitoring.logging import configure_logging
from stylefinder.services.pipeline import AnalysisPipeline, NoImageProvided, SearchService, VisionService
from stylefinder.storage.uploads import UploadStore, UploadTooLarge
from stylefinder.workers.cleanup import remove_expired_uploads

logger = logging.getLogger(__name__)

NO_IMAGE_MESSAGE = "Aucune image fournie"
TOO_LARGE_MESSAGE = "Image trop volumineuse"
SERVER_ERROR_MESSAGE = "Une erreur est survenue lors de l'analyse de l'image"
ANALYSIS_MODE_HEADER = "X-Analysis-Mode"


def create_app(
    settings: Settings | None = None,
    *,
    vision: VisionService | None = None,
    search: SearchService | None = None,
) -> FastAPI:
    """Initialise the FastAPI application."""

    settings = settings or get_settings()
    configure_logging(settings)

    vision_client = vision or VisionClient(settings)
    search_client = search or SearchClient(settings)
    uploads = UploadStore(Path(settings.upload_dir), max_bytes=settings.max_upload_bytes)

    @contextlib.asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        await asyncio.to_thread(
            remove_expired_uploads,
            uploads.root,
            timedelta(minutes=settings.upload_ttl_minutes),
        )
        if not settings.vision_configured or not settings.search_configured:
            logger.warning("External services are not fully configured; analyses will use mock results.")
        yield
        for client in (vision_client, search_client):
            close = getattr(client, "close", None)
            if close is not None:
                await close()

    app = FastAPI(
        title="StyleFinder API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(status_code=500, content={"error": SERVER_ERROR_MESSAGE})

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.post(
        "/api/analyze",
        tags=["analysis"],
        response_model=AnalysisResponse,
        responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}},
    )
    async def analyze(response: Response, image: UploadFile | None = File(default=None)) -> AnalysisResponse | JSONResponse:
        """Analyse an uploaded garment photo and return similar products."""

        if image is None:
            return JSONResponse(status_code=400, content={"error": NO_IMAGE_MESSAGE})

        pipeline = AnalysisPipeline(settings, vision_client, search_client)
        try:
            async with uploads.scoped_upload(image, suffix=Path(image.filename or "").suffix) as path:
                image_bytes = await asyncio.to_thread(path.read_bytes)
            result = await pipeline.analyze_image(image_bytes)
        except NoImageProvided:
            return JSONResponse(status_code=400, content={"error": NO_IMAGE_MESSAGE})
        except UploadTooLarge:
            return JSONResponse(status_code=413, content={"error": TOO_LARGE_MESSAGE})
        finally:
            await image.close()

        response.headers[ANALYSIS_MODE_HEADER] = "fallback" if result.fallback_used else "live"
        return AnalysisResponse.from_result(result)

    return app


app = create_app()
