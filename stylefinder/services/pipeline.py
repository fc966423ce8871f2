"""Analysis pipeline: vision labels to ranked similar products."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Mapping, Protocol, Sequence

from stylefinder.catalog.classifier import AttributeClassifier
from stylefinder.config.settings import Settings
from stylefinder.imgproc.normalize import ImageNormalizer
from stylefinder.integrations.errors import IntegrationError
from stylefinder.models import AnalysisResult, RawVisionOutput
from stylefinder.search.normalizer import ResultNormalizer
from stylefinder.search.query_builder import QueryBuilder
from stylefinder.services.fallback import MockResultGenerator
from stylefinder.services.stages import PipelineStage

logger = logging.getLogger(__name__)


class NoImageProvided(ValueError):
    """Raised when an analysis is requested without image content."""


class VisionService(Protocol):
    async def analyze(self, image_bytes: bytes) -> RawVisionOutput: ...


class SearchService(Protocol):
    async def search(self, query: str, count: int) -> Sequence[Mapping[str, Any]]: ...


class AnalysisPipeline:
    """Sequences classification, query building, search and normalisation.

    Failures of the vision or search collaborator never reach the caller: the
    whole result is replaced by ``MockResultGenerator`` output and flagged with
    ``fallback_used``. Results are never partially real.

    Instances are request-scoped (``stage`` is per run); the vision and search
    clients may be shared.
    """

    def __init__(
        self,
        settings: Settings,
        vision: VisionService,
        search: SearchService,
        *,
        rng: random.Random | None = None,
        image_normalizer: ImageNormalizer | None = None,
    ) -> None:
        self._settings = settings
        self._vision = vision
        self._search = search
        self._rng = rng or random.Random(settings.fallback_seed)
        self._image_normalizer = image_normalizer or ImageNormalizer(max_side=settings.image_max_side)
        self._classifier = AttributeClassifier()
        self._query_builder = QueryBuilder(locale=settings.search_locale)
        self._normalizer = ResultNormalizer(rng=self._rng)
        self._fallback = MockResultGenerator(rng=self._rng, product_count=settings.fallback_product_count)
        self.stage = PipelineStage.IDLE

    async def analyze_image(self, image_bytes: bytes) -> AnalysisResult:
        """Return attributes and ranked products for ``image_bytes``.

        Raises ``NoImageProvided`` for empty input; never raises for service failures.
        """

        if not image_bytes:
            raise NoImageProvided("No image content was provided.")

        self.stage = PipelineStage.IDLE
        try:
            result = await self._run(image_bytes)
        except Exception as exc:
            failed_stage = self.stage
            if isinstance(exc, IntegrationError):
                logger.warning("Falling back to mock results at stage %s: %s", failed_stage.value, exc)
            else:
                logger.exception("Unexpected collaborator failure at stage %s; using mock results", failed_stage.value)
            self.stage = PipelineStage.FALLBACK_GENERATING
            result = self._fallback.generate()

        self.stage = PipelineStage.DONE
        return result

    async def _run(self, image_bytes: bytes) -> AnalysisResult:
        self.stage = PipelineStage.CLASSIFYING
        prepared = await asyncio.to_thread(self._image_normalizer.normalize, image_bytes)
        vision_output = await self._vision.analyze(prepared)
        attributes = self._classifier.classify(vision_output)

        query = self._query_builder.build(attributes)
        self.stage = PipelineStage.QUERY_BUILT
        logger.info("Search query built: %s", query)

        self.stage = PipelineStage.SEARCHING
        items = await self._search.search(query, self._settings.search_result_count)

        self.stage = PipelineStage.NORMALIZING
        products = self._normalizer.normalize(items, attributes)
        return AnalysisResult(attributes=attributes, products=products)
