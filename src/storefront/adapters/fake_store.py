# src/storefront/adapters/fake_store.py
from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from storefront.domain.models import LoadErrorKind, Product
from storefront.domain.ports import CatalogLoadError, CatalogSourcePort

logger = logging.getLogger(__name__)

_DEFAULT_URL = "https://fakestoreapi.com/products"


class FakeStoreAdapter(CatalogSourcePort):
    """
    Adapter für die FakeStore Products API.
    Normalisiert die Rohdaten in Product-Instanzen und übersetzt
    Transportfehler in CatalogLoadError mit eindeutigem LoadErrorKind.
    """

    def __init__(
        self, http_client: httpx.AsyncClient, url: str = _DEFAULT_URL, timeout: float = 10.0
    ) -> None:
        self._client = http_client
        self._url = url
        self._timeout = timeout

    async def fetch_all(self) -> list[Product]:
        try:
            response = await self._client.get(self._url, timeout=self._timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CatalogLoadError(LoadErrorKind.BAD_STATUS, str(e)) from e
        except httpx.RequestError as e:
            raise CatalogLoadError(LoadErrorKind.TRANSPORT, f"Connection error: {e}") from e

        # Nur 200 zählt als Erfolg (z.B. 204 No Content ist kein Katalog)
        if response.status_code != 200:
            raise CatalogLoadError(
                LoadErrorKind.BAD_STATUS, f"Unexpected status code {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CatalogLoadError(LoadErrorKind.EMPTY_PAYLOAD, "Response body is not JSON") from e

        if not data or not isinstance(data, list):
            raise CatalogLoadError(LoadErrorKind.EMPTY_PAYLOAD, "there is no products to show")

        products = []
        for raw_product in data:
            try:
                products.append(Product.model_validate(raw_product))
            except ValidationError:
                logger.warning("Skipping malformed product in catalog payload", exc_info=True)

        if not products:
            raise CatalogLoadError(LoadErrorKind.EMPTY_PAYLOAD, "no valid products in payload")

        return products
