"""
Barcode lookup service.

A barcode is only unique inside one environment. A client who is a member
of several environments can scan a barcode that exists in more than one of
them; the lookup reports every environment-qualified match instead of
picking one.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID

from ..models import Product


class LookupStatus:
    NONE = 'none'
    UNIQUE = 'unique'
    MULTIPLE = 'multiple'


@dataclass
class BarcodeLookup:
    """Result of a barcode lookup across a client's memberships."""

    barcode: str
    matches: List[Product] = field(default_factory=list)

    @property
    def status(self) -> str:
        if not self.matches:
            return LookupStatus.NONE
        if len(self.matches) == 1:
            return LookupStatus.UNIQUE
        return LookupStatus.MULTIPLE

    @property
    def is_unique(self) -> bool:
        return self.status == LookupStatus.UNIQUE

    @property
    def product(self) -> Optional[Product]:
        """The single match, or None when there are zero or several."""
        return self.matches[0] if self.is_unique else None


def find_by_barcode(*, environment_id: UUID, barcode: str) -> Optional[Product]:
    """Return the product with this barcode in the environment, or None."""
    return (
        Product.objects
        .select_related('environment')
        .filter(environment_id=environment_id, barcode=barcode)
        .first()
    )


def lookup_barcode_for_client(*, client_id: UUID, barcode: str) -> BarcodeLookup:
    """
    Look a barcode up in every environment the client is a member of.

    Each membership contributes at most one product (per-environment
    uniqueness); matches are ordered by when the client joined.
    """
    matches = list(
        Product.objects
        .select_related('environment', 'environment__company')
        .filter(
            barcode=barcode,
            environment__memberships__client_id=client_id,
        )
        .order_by('environment__memberships__joined_at', 'environment_id')
    )
    return BarcodeLookup(barcode=barcode, matches=matches)
