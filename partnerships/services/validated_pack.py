"""Resolution of the pack a partnership is entitled to.

Pricing, ticketing and documents all call ``ValidatedPackResolver.resolve``;
none of them reads the selected or suggested pack directly.
"""

from dataclasses import dataclass

from partnerships.domain import Partnership, PartnershipOption, SponsoringPack
from partnerships.domain.errors import ValidatedPackNotFoundError
from partnerships.stores.interfaces import CatalogStore, PartnershipStore


@dataclass(frozen=True)
class ValidatedPack:
    partnership: Partnership
    pack: SponsoringPack
    options: tuple[PartnershipOption, ...]
    suggested: bool = False


class ValidatedPackResolver:
    def __init__(self, partnerships: PartnershipStore, catalog: CatalogStore) -> None:
        self._partnerships = partnerships
        self._catalog = catalog

    def resolve(self, partnership: Partnership) -> ValidatedPack:
        """Return the validated pack of a partnership with the options stored against it.

        Options come from the suggestion set when the suggestion was approved,
        from the registrant selection otherwise.

        Raises:
            ValidatedPackNotFoundError: If no suggestion was approved and the
                partnership has not been validated.
        """
        pack_id = partnership.validated_pack_id()
        if pack_id is None:
            raise ValidatedPackNotFoundError(partnership.id)
        pack = self._catalog.get_pack(partnership.event_id, pack_id)
        if pack is None:
            raise ValidatedPackNotFoundError(partnership.id)
        suggested = partnership.suggestion.is_approved
        options = self._partnerships.list_options(partnership.id, pack_id, suggested=suggested)
        return ValidatedPack(
            partnership=partnership, pack=pack, options=tuple(options), suggested=suggested
        )
