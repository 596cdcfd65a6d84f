# src/storefront/domain/models.py
from __future__ import annotations

from decimal import Decimal
from enum import StrEnum
from typing import Self

from pydantic import BaseModel, Field, model_validator

# Sentinel für "kein Kategorie-Filter aktiv"
ALL_CATEGORIES = "all"

# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------


class Rating(BaseModel):
    rate: float = Field(ge=0, description="Durchschnittliche Bewertung")
    count: int = Field(ge=0, description="Anzahl der Bewertungen")

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Aggregate: Product
# ---------------------------------------------------------------------------


class Product(BaseModel):
    """
    Ein Produkt des Remote-Katalogs.
    Nach dem Laden unveränderlich; Filter referenzieren dieselben Instanzen.
    """

    id: int = Field(description="Stabiler, eindeutiger Identifier der Quelle")
    title: str = Field(min_length=1, max_length=512)
    description: str = ""
    category: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    image: str = Field(description="URL des Produktbildes")
    rating: Rating = Field(default_factory=lambda: Rating(rate=0, count=0))

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Catalog load state
# ---------------------------------------------------------------------------


class LoadStatus(StrEnum):
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


class LoadErrorKind(StrEnum):
    TRANSPORT = "transport"
    BAD_STATUS = "bad_status"
    EMPTY_PAYLOAD = "empty_payload"


class CatalogLoadState(BaseModel):
    status: LoadStatus
    data: tuple[Product, ...] | None = None
    error: LoadErrorKind | None = None
    error_detail: str | None = None

    @model_validator(mode="after")
    def check_status_payload(self) -> Self:
        if self.status == LoadStatus.READY and self.data is None:
            raise ValueError("data muss gesetzt sein, wenn status=ready")
        if self.status == LoadStatus.FAILED and self.error is None:
            raise ValueError("error muss gesetzt sein, wenn status=failed")
        return self

    model_config = {"frozen": True}


class SearchMode(StrEnum):
    """Unterscheidet "keine Suche" von "Suche ohne Treffer"."""

    IDLE = "idle"
    RESULTS = "results"
    NO_RESULTS = "no_results"
