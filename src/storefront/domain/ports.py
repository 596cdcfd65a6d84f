# src/storefront/domain/ports.py
from abc import ABC, abstractmethod

from storefront.domain.models import LoadErrorKind, Product


class CatalogSourcePort(ABC):
    """
    Abstrakte Schnittstelle für die Remote-Katalogquelle.
    Die Core-Domain kennt ausschließlich dieses Interface.
    """

    @abstractmethod
    async def fetch_all(self) -> list[Product]:
        """
        Ruft den vollständigen Katalog in der Reihenfolge der Quelle ab.

        Raises:
            CatalogLoadError: Bei Netzwerkfehlern, Fehler-Statuscodes oder
                leerem Payload.
        """
        ...


# ---------------------------------------------------------------------------
# Custom Domain Exceptions
# ---------------------------------------------------------------------------


class CatalogLoadError(Exception):
    def __init__(self, kind: LoadErrorKind, detail: str):
        super().__init__(f"Catalog load failed ({kind}): {detail}")
        self.kind = kind
        self.detail = detail
