"""Response payloads for the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stylefinder.models import AnalysisResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AttributesPayload(_CamelModel):
    color: str
    color_name: str
    category: str
    pattern: str
    style: str


class ProductPayload(_CamelModel):
    id: str
    name: str
    brand: str
    price: float = Field(ge=0)
    currency: str
    image_url: str
    product_url: str
    source: str
    similarity: float = Field(ge=0, le=1)


class AnalysisResponse(_CamelModel):
    """Public JSON shape of one analysis."""

    attributes: AttributesPayload
    products: list[ProductPayload]

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisResponse":
        return cls.model_validate(result.to_dict())


class ErrorResponse(BaseModel):
    error: str
