"""Schemas for country endpoints."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CountryCreateSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    # Derived from the name when omitted
    slug: Optional[str] = None
    is_active: bool = True
    selected_cities: List[str] = Field(default_factory=list)
    content: Dict[str, Any] = Field(default_factory=dict)


class CountryUpdateSchema(BaseModel):
    """Body of PUT /countries/{id}. The slug cannot be changed."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    is_active: Optional[bool] = None
    selected_cities: Optional[List[str]] = None
    content: Optional[Dict[str, Any]] = None


class CountrySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    name: str
    is_active: bool = True
    selected_cities: List[str] = Field(default_factory=list)
    content: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
