"""Pricing of a partnership's validated pack and its overrides."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace

from partnerships.domain import (
    EventId,
    Money,
    OptionId,
    PartnershipId,
    PartnershipOption,
    SponsoringPack,
)
from partnerships.domain.errors import (
    InvalidPriceError,
    OptionNotFoundError,
    PricingWithoutPackError,
    ValidatedPackNotFoundError,
)
from partnerships.services.common import parse_id, require_partnership
from partnerships.services.validated_pack import ValidatedPack, ValidatedPackResolver
from partnerships.stores.interfaces import PartnershipStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionPriceLine:
    option_id: OptionId
    catalog_price: Money | None
    price_override: Money | None
    effective_price: Money | None
    selected_quantity: int | None = None


@dataclass(frozen=True)
class PartnershipPricing:
    """Partnership-with-amount view."""

    partnership_id: PartnershipId
    pack: SponsoringPack
    pack_price: Money
    pack_price_override: Money | None
    options: tuple[OptionPriceLine, ...]
    amount: Money


def effective_pack_price(validated: ValidatedPack) -> Money:
    override = validated.partnership.pack_price_override
    return override if override is not None else validated.pack.base_price


def compute_amount(validated: ValidatedPack) -> Money:
    """Pack price plus every priced option, overrides taking precedence."""
    amount = effective_pack_price(validated)
    for option in validated.options:
        if option.effective_price is not None:
            amount = amount + option.effective_price
    return amount


def _line(option: PartnershipOption) -> OptionPriceLine:
    return OptionPriceLine(
        option_id=option.option.id,
        catalog_price=option.option.price,
        price_override=option.price_override,
        effective_price=option.effective_price,
        selected_quantity=option.selected_quantity,
    )


def _to_money(value: int | None) -> Money | None:
    if value is None:
        return None
    try:
        return Money(value)
    except ValueError as exc:
        raise InvalidPriceError(value) from exc


class PricingService:
    """Computes amounts and records price overrides."""

    def __init__(self, store: PartnershipStore, resolver: ValidatedPackResolver) -> None:
        self._store = store
        self._resolver = resolver

    def price(self, validated: ValidatedPack) -> PartnershipPricing:
        return PartnershipPricing(
            partnership_id=validated.partnership.id,
            pack=validated.pack,
            pack_price=validated.pack.base_price,
            pack_price_override=validated.partnership.pack_price_override,
            options=tuple(_line(option) for option in validated.options),
            amount=compute_amount(validated),
        )

    def get_pricing(self, event_id: str, partnership_id: str) -> PartnershipPricing:
        """Return the partnership with its computed amount.

        Raises:
            PartnershipNotFoundError: If the partnership does not exist for the event.
            ValidatedPackNotFoundError: If the partnership has no validated pack.
        """
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        partnership = require_partnership(self._store, eid, pid)
        return self.price(self._resolver.resolve(partnership))

    def update_pricing(
        self,
        event_id: str,
        partnership_id: str,
        pack_price_override: int | None,
        options_price_overrides: Mapping[str, int | None] | None = None,
    ) -> PartnershipPricing | None:
        """Set or clear price overrides.

        The pack override is always applied, None clearing it. Option overrides
        only touch the listed options of the validated pack.

        Returns the updated pricing, or None when the partnership has no
        validated pack and only clearing was requested.

        Raises:
            InvalidPriceError: If an override is negative.
            PricingWithoutPackError: If a value is set on a partnership without a validated pack.
            OptionNotFoundError: If a listed option is not part of the validated pack.
        """
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        pack_override = _to_money(pack_price_override)
        option_overrides = {
            parse_id(OptionId, option_id, "option"): _to_money(price)
            for option_id, price in (options_price_overrides or {}).items()
        }

        with self._store.atomic():
            partnership = require_partnership(self._store, eid, pid, for_update=True)
            try:
                validated = self._resolver.resolve(partnership)
            except ValidatedPackNotFoundError:
                if pack_override is not None or any(
                    price is not None for price in option_overrides.values()
                ):
                    raise PricingWithoutPackError(pid) from None
                validated = None

            if validated is None:
                # Nothing priced yet, only clear what may have been left.
                if partnership.pack_price_override is not None:
                    self._store.save_partnership(replace(partnership, pack_price_override=None))
                return None

            stored = {option.option.id for option in validated.options}
            unknown = [option_id for option_id in option_overrides if option_id not in stored]
            if unknown:
                raise OptionNotFoundError(unknown)

            partnership = replace(partnership, pack_price_override=pack_override)
            self._store.save_partnership(partnership)
            for option_id, price in option_overrides.items():
                self._store.set_option_price_override(
                    pid, validated.pack.id, option_id, price, suggested=validated.suggested
                )

            logger.info(
                "Updated pricing of partnership %s (pack override set: %s, %d option overrides)",
                pid,
                pack_override is not None,
                len(option_overrides),
            )
            return self.price(self._resolver.resolve(partnership))
