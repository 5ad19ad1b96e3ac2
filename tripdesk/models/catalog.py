# --- File: tripdesk/models/catalog.py ---
"""
Catalog collaborator tables.

Vehicles, tour guides, drivers and places are owned by the catalog side of
the storefront. Only the columns used to build display snapshots for
inquiries are mapped here; this service never writes to them outside of
seeding and tests.
"""

from typing import List, Optional

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from tripdesk.models.base import BaseModel, JSONType, TimestampMixin

__all__ = ["Vehicle", "TourGuide", "Driver", "Place"]


class Vehicle(TimestampMixin, BaseModel):
    """Vehicle available for custom trips."""

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[str] = mapped_column(String(30), nullable=False, default="sedan")
    passenger_capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=4)
    price_per_day: Mapped[Optional[float]] = mapped_column(Float, nullable=True)


class TourGuide(TimestampMixin, BaseModel):
    """Tour guide available for custom trips."""

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    languages: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    price_per_day: Mapped[Optional[float]] = mapped_column(Float, nullable=True)


class Driver(TimestampMixin, BaseModel):
    """Driver available for custom trips."""

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    license_type: Mapped[str] = mapped_column(String(30), nullable=False, default="light")
    rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    price_per_day: Mapped[Optional[float]] = mapped_column(Float, nullable=True)


class Place(TimestampMixin, BaseModel):
    """Destination that can appear in an itinerary."""

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
