"""Catalog resolution and option selection validation.

Registration and suggestion both go through ``CatalogService.validate_selections``
so a pack/option mismatch fails the same way on both paths.
"""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from functools import singledispatch

from partnerships.domain import (
    EventId,
    OptionChoice,
    OptionId,
    OptionType,
    PackId,
    SponsoringOption,
    SponsoringPack,
)
from partnerships.domain.errors import (
    InvalidSelectedValueError,
    InvalidSelectionError,
    MissingTranslationError,
    OptionNotFoundError,
    OptionNotInPackError,
    OptionNotOptionalError,
    PackNotFoundError,
)
from partnerships.domain.selections import (
    NumberSelection,
    OptionSelection,
    QuantitativeSelection,
    SelectableSelection,
    TextSelection,
    is_selected,
)
from partnerships.stores.interfaces import CatalogStore


@dataclass(frozen=True)
class PackCatalog:
    """Options of a pack, split by how they end up in a partnership."""

    pack: SponsoringPack
    required: tuple[OptionId, ...]
    optional: frozenset[OptionId]

    def contains(self, option_id: OptionId) -> bool:
        return option_id in self.optional or option_id in self.required


@singledispatch
def _to_choice(selection: OptionSelection, option: SponsoringOption) -> OptionChoice:
    raise InvalidSelectionError(f"Unsupported option selection {type(selection).__name__}")


@_to_choice.register
def _(selection: TextSelection, option: SponsoringOption) -> OptionChoice:
    return OptionChoice(option_id=option.id)


@_to_choice.register
def _(selection: QuantitativeSelection, option: SponsoringOption) -> OptionChoice:
    return OptionChoice(option_id=option.id, selected_quantity=selection.selected_quantity)


@_to_choice.register
def _(selection: NumberSelection, option: SponsoringOption) -> OptionChoice:
    return OptionChoice(option_id=option.id, selected_quantity=option.fixed_quantity)


@_to_choice.register
def _(selection: SelectableSelection, option: SponsoringOption) -> OptionChoice:
    value = option.selectable_value(selection.selected_value_id)
    if value is None:
        valid = [f"{v.value} ({v.id})" for v in option.selectable_values]
        raise InvalidSelectedValueError(option.id, selection.selected_value_id, valid)
    return OptionChoice(option_id=option.id, selected_value_id=value.id)


def _required_choice(option: SponsoringOption) -> OptionChoice:
    if option.option_type is OptionType.TYPED_NUMBER:
        return OptionChoice(option_id=option.id, selected_quantity=option.fixed_quantity)
    return OptionChoice(option_id=option.id)


class CatalogService:
    """Resolves pack catalogs and validates option selections against them."""

    def __init__(self, catalog: CatalogStore) -> None:
        self._catalog = catalog

    def require_pack(self, event_id: EventId, pack_id: PackId) -> SponsoringPack:
        """Return a pack belonging to the event.

        Raises:
            PackNotFoundError: If the pack does not exist for this event.
        """
        pack = self._catalog.get_pack(event_id, pack_id)
        if pack is None:
            raise PackNotFoundError(pack_id)
        return pack

    def resolve(self, pack: SponsoringPack) -> PackCatalog:
        associations = self._catalog.list_pack_options(pack.id)
        return PackCatalog(
            pack=pack,
            required=tuple(a.option_id for a in associations if a.required),
            optional=frozenset(a.option_id for a in associations if not a.required),
        )

    def validate_selections(
        self,
        pack: SponsoringPack,
        selections: Sequence[OptionSelection],
        language: str,
    ) -> list[OptionChoice]:
        """Return the option rows to store for a pack, required options included.

        Raises:
            InvalidSelectionError: If an option is selected more than once.
            OptionNotInPackError: If an option is not associated with the pack.
            OptionNotOptionalError: If an option is required by the pack.
            MissingTranslationError: If an option has no translation for the language.
            InvalidSelectedValueError: If a selectable value does not belong to its option.
        """
        catalog = self.resolve(pack)
        selected = [selection for selection in selections if is_selected(selection)]

        duplicates = [
            option_id
            for option_id, count in Counter(s.option_id for s in selected).items()
            if count > 1
        ]
        if duplicates:
            raise InvalidSelectionError(
                f"Options selected more than once: {[str(d) for d in duplicates]}"
            )

        unknown = [s.option_id for s in selected if not catalog.contains(s.option_id)]
        if unknown:
            raise OptionNotInPackError(unknown)
        not_optional = [s.option_id for s in selected if s.option_id not in catalog.optional]
        if not_optional:
            raise OptionNotOptionalError(not_optional)

        wanted = [*catalog.required, *(s.option_id for s in selected)]
        options = self._catalog.get_options(wanted)
        missing = [option_id for option_id in wanted if option_id not in options]
        if missing:
            raise OptionNotFoundError(missing)

        choices = [_required_choice(options[option_id]) for option_id in catalog.required]
        for selection in selected:
            option = options[selection.option_id]
            if option.translation(language) is None:
                raise MissingTranslationError(option.id, language)
            choices.append(_to_choice(selection, option))
        return choices
