"""Schemas for catalogue and revalidation endpoints."""
from typing import List

from pydantic import BaseModel, Field


class CatalogueNamesSchema(BaseModel):
    list_id: str
    names: List[str]


class CatalogueNameSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class RevalidateRequestSchema(BaseModel):
    path: str = Field("/", min_length=1)


class RevalidateResponseSchema(BaseModel):
    """Revalidation is fire-and-forget: success is always reported."""
    path: str
    success: bool = True
