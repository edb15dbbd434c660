"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import List, Optional


class QuoteRequestSchema(BaseModel):
    """Request body for POST /v1/quote

    Fields are raw form strings; missing fields arrive empty and are reported
    together with every other invalid field.
    """

    venue_slug: str = Field("", description="Venue identifier, e.g. home-assignment-venue-helsinki")
    cart_value: str = Field("", description="Cart value in euros, e.g. 10.00 or 10,00")
    user_latitude: str = Field("", description="Customer latitude in decimal degrees")
    user_longitude: str = Field("", description="Customer longitude in decimal degrees")


class QuoteDisplay(BaseModel):
    """Human-readable amounts"""

    cart_value: str
    delivery_fee: str
    small_order_surcharge: str
    total_price: str
    distance: str


class QuoteResponse(BaseModel):
    """Response for POST /v1/quote (amounts in cents, distance in meters)"""

    deliverable: bool
    cart_value: int
    delivery_fee: int
    small_order_surcharge: int
    total_price: int
    distance: int
    reason: Optional[str] = None
    max_distance: Optional[int] = None
    display: QuoteDisplay


class FieldViolationSchema(BaseModel):
    """Single invalid input field"""

    field: str
    code: str
    message: str


class InvalidInputResponse(BaseModel):
    """422 body for POST /v1/quote"""

    detail: List[FieldViolationSchema]
