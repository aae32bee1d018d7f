"""Schemas for city endpoints."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CityCreateSchema(BaseModel):
    """Body of POST /cities. The slug is derived from the name."""
    name: str = Field(..., min_length=1, max_length=255)
    country_slug: str = ""
    is_active: bool = True
    content: Dict[str, Any] = Field(default_factory=dict)


class CityUpdateSchema(BaseModel):
    """Body of PUT /cities/{id}. Omitted fields are left unchanged."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    country_slug: Optional[str] = None
    is_active: Optional[bool] = None
    content: Optional[Dict[str, Any]] = None


class CitySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    city_slug: str
    country_slug: str = ""
    is_active: bool = True
    content: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CityWriteResponseSchema(BaseModel):
    """A written city plus any secondary sync failures that were absorbed."""
    city: CitySchema
    warnings: List[str] = Field(default_factory=list)


class CityDeleteResponseSchema(BaseModel):
    deleted: bool
    warnings: List[str] = Field(default_factory=list)


class CityNameAvailabilitySchema(BaseModel):
    name: str
    available: bool
    reason: Optional[str] = None
    conflicting_id: Optional[int] = None
