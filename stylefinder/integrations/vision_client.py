"""Async client for the Google Cloud Vision ``images:annotate`` endpoint."""

from __future__ import annotations

import base64
import logging
from typing import Any, Mapping

import httpx

from stylefinder.config.settings import Settings
from stylefinder.imgproc.normalize import probe_image
from stylefinder.integrations.errors import VisionUnavailable
from stylefinder.integrations.retry import call_with_retries
from stylefinder.models import DominantColor, LabelAnnotation, RawVisionOutput, WebEntity

logger = logging.getLogger(__name__)

LABEL_RESULTS = 15
COLOR_RESULTS = 5
WEB_RESULTS = 10


def parse_annotation(payload: Mapping[str, Any]) -> RawVisionOutput:
    """Convert one ``AnnotateImageResponse`` into ``RawVisionOutput``.

    The API omits colour channels equal to zero, so missing channels read as 0.
    """

    labels = tuple(
        LabelAnnotation(description=str(entry.get("description", "")), score=float(entry.get("score", 0.0)))
        for entry in payload.get("labelAnnotations") or []
        if entry.get("description")
    )

    raw_colors = ((payload.get("imagePropertiesAnnotation") or {}).get("dominantColors") or {}).get("colors") or []
    colors = []
    for entry in raw_colors:
        color = entry.get("color") or {}
        colors.append(
            DominantColor(
                red=int(round(float(color.get("red", 0)))),
                green=int(round(float(color.get("green", 0)))),
                blue=int(round(float(color.get("blue", 0)))),
                score=float(entry.get("score", 0.0)),
                pixel_fraction=float(entry.get("pixelFraction", 0.0)),
            )
        )

    web_entities = tuple(
        WebEntity(description=str(entry["description"]), score=float(entry.get("score", 0.0)))
        for entry in (payload.get("webDetection") or {}).get("webEntities") or []
        if entry.get("description")
    )
    return RawVisionOutput(labels=labels, colors=tuple(colors), web_entities=web_entities)


class VisionClient:
    """Sends images to Google Vision for label, colour and web detection."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._client = http_client or httpx.AsyncClient(
            base_url=settings.vision_base_url.rstrip("/"),
            timeout=settings.request_timeout,
            headers={"Content-Type": "application/json"},
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    def _features(self) -> list[dict[str, Any]]:
        features: list[dict[str, Any]] = [
            {"type": "LABEL_DETECTION", "maxResults": LABEL_RESULTS},
            {"type": "IMAGE_PROPERTIES", "maxResults": COLOR_RESULTS},
        ]
        if self._settings.vision_web_detection:
            features.append({"type": "WEB_DETECTION", "maxResults": WEB_RESULTS})
        return features

    async def _annotate(self, body: Mapping[str, Any]) -> dict[str, Any]:
        async def _post() -> dict[str, Any]:
            response = await self._client.post(
                "/images:annotate",
                params={"key": self._settings.vision_api_key},
                json=body,
            )
            response.raise_for_status()
            return response.json()

        return await call_with_retries(
            _post,
            name="Google Vision",
            error_cls=VisionUnavailable,
            max_retries=self._settings.max_retries,
            backoff=self._settings.retry_backoff,
        )

    async def analyze(self, image_bytes: bytes) -> RawVisionOutput:
        """Annotate ``image_bytes`` and return labels, dominant colours and web entities."""

        if not self._settings.vision_configured:
            raise VisionUnavailable("Google Vision API key is not configured.")

        body = {
            "requests": [
                {
                    "image": {"content": base64.b64encode(image_bytes).decode("ascii")},
                    "features": self._features(),
                }
            ]
        }
        try:
            data = await self._annotate(body)
        except ValueError as exc:
            raise VisionUnavailable("Google Vision returned a non-JSON body.") from exc

        responses = data.get("responses") or [{}]
        first = responses[0] or {}
        error = first.get("error")
        if error:
            logger.error("Google Vision annotation error: %s", error.get("message", error))
            raise VisionUnavailable(
                f"Google Vision annotation error: {error.get('message', 'unknown error')}",
                status_code=error.get("code"),
            )

        result = parse_annotation(first)
        logger.debug(
            "Vision returned %d labels, %d colours, %d web entities",
            len(result.labels),
            len(result.colors),
            len(result.web_entities),
        )
        return result

    async def ping(self) -> bool:
        """Return ``True`` when a tiny annotation request succeeds."""

        await self.analyze(probe_image())
        return True
