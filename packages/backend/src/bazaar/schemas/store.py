"""Pydantic schemas for stores and their theme customization."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ─── Stores ─────────────────────────────────────────────

class StoreCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = ""


class StoreUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None


class StoreRead(BaseModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    name: str
    description: str
    created_at: datetime

    model_config = {"from_attributes": True}


# ─── Theme customization ────────────────────────────────

class ThemeFields(BaseModel):
    """Every writable styling field. All optional.

    store_id, id and timestamps are deliberately absent: they are not
    writable through the API, and any such keys in the body are dropped.
    """
    theme: Optional[str] = Field(None, max_length=50)

    font_family: Optional[str] = Field(None, max_length=100)
    font_size: Optional[str] = Field(None, max_length=20)
    font_color: Optional[str] = Field(None, max_length=30)
    heading_font_family: Optional[str] = Field(None, max_length=100)
    heading_font_size: Optional[str] = Field(None, max_length=20)
    heading_font_color: Optional[str] = Field(None, max_length=30)

    background_color: Optional[str] = Field(None, max_length=30)
    text_color: Optional[str] = Field(None, max_length=30)
    accent_color: Optional[str] = Field(None, max_length=30)
    border_color: Optional[str] = Field(None, max_length=30)
    button_color: Optional[str] = Field(None, max_length=30)
    button_text_color: Optional[str] = Field(None, max_length=30)
    button_hover_color: Optional[str] = Field(None, max_length=30)
    button_hover_text_color: Optional[str] = Field(None, max_length=30)
    card_background_color: Optional[str] = Field(None, max_length=30)
    nav_bar_color: Optional[str] = Field(None, max_length=30)
    nav_bar_text_color: Optional[str] = Field(None, max_length=30)
    nav_bar_hover_color: Optional[str] = Field(None, max_length=30)
    link_color: Optional[str] = Field(None, max_length=30)
    link_hover_color: Optional[str] = Field(None, max_length=30)
    success_color: Optional[str] = Field(None, max_length=30)
    warning_color: Optional[str] = Field(None, max_length=30)
    error_color: Optional[str] = Field(None, max_length=30)

    border_radius: Optional[str] = Field(None, max_length=20)
    button_border_radius: Optional[str] = Field(None, max_length=20)
    product_grid_layout: Optional[str] = Field(None, max_length=30)
    container_width: Optional[str] = Field(None, max_length=20)

    banner_text: Optional[str] = None
    footer_text: Optional[str] = None
    banner_image: Optional[str] = None
    logo_image: Optional[str] = None
    favicon: Optional[str] = None
    about_image: Optional[str] = None
    footer_image: Optional[str] = None


class ThemeCustomizationRead(BaseModel):
    id: uuid.UUID
    store_id: uuid.UUID
    theme: str

    font_family: Optional[str] = None
    font_size: Optional[str] = None
    font_color: Optional[str] = None
    heading_font_family: Optional[str] = None
    heading_font_size: Optional[str] = None
    heading_font_color: Optional[str] = None

    background_color: Optional[str] = None
    text_color: Optional[str] = None
    accent_color: Optional[str] = None
    border_color: Optional[str] = None
    button_color: Optional[str] = None
    button_text_color: Optional[str] = None
    button_hover_color: Optional[str] = None
    button_hover_text_color: Optional[str] = None
    card_background_color: Optional[str] = None
    nav_bar_color: Optional[str] = None
    nav_bar_text_color: Optional[str] = None
    nav_bar_hover_color: Optional[str] = None
    link_color: Optional[str] = None
    link_hover_color: Optional[str] = None
    success_color: Optional[str] = None
    warning_color: Optional[str] = None
    error_color: Optional[str] = None

    border_radius: Optional[str] = None
    button_border_radius: Optional[str] = None
    product_grid_layout: Optional[str] = None
    container_width: Optional[str] = None

    banner_text: Optional[str] = None
    footer_text: Optional[str] = None
    banner_image: str
    logo_image: str
    favicon: str
    about_image: Optional[str] = None
    footer_image: Optional[str] = None

    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
