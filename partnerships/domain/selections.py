"""Option selections submitted at registration or with a suggestion.

A selection is one of four variants, discriminated by its ``type`` key:

- ``text_selection``: presence means selected.
- ``quantitative_selection``: carries a user-chosen quantity; a quantity of
  zero means the option is not selected at all.
- ``number_selection``: fixed-quantity option, presence means selected.
- ``selectable_selection``: carries the id of one of the option's values.

``parse_selection`` is the only place that looks at the discriminator.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from partnerships.domain.errors import InvalidSelectionError
from partnerships.domain.value_objects import OptionId


@dataclass(frozen=True)
class TextSelection:
    option_id: OptionId


@dataclass(frozen=True)
class QuantitativeSelection:
    option_id: OptionId
    selected_quantity: int

    def __post_init__(self) -> None:
        if self.selected_quantity < 0:
            raise ValueError("Selected quantity cannot be negative")


@dataclass(frozen=True)
class NumberSelection:
    option_id: OptionId


@dataclass(frozen=True)
class SelectableSelection:
    option_id: OptionId
    selected_value_id: UUID


OptionSelection = TextSelection | QuantitativeSelection | NumberSelection | SelectableSelection


def _text(option_id: OptionId, payload: Mapping[str, Any]) -> TextSelection:
    return TextSelection(option_id=option_id)


def _quantitative(option_id: OptionId, payload: Mapping[str, Any]) -> QuantitativeSelection:
    quantity = payload.get("selected_quantity")
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise InvalidSelectionError(f"Option {option_id} requires an integer selected_quantity")
    try:
        return QuantitativeSelection(option_id=option_id, selected_quantity=quantity)
    except ValueError as exc:
        raise InvalidSelectionError(f"Option {option_id}: {exc}") from exc


def _number(option_id: OptionId, payload: Mapping[str, Any]) -> NumberSelection:
    return NumberSelection(option_id=option_id)


def _selectable(option_id: OptionId, payload: Mapping[str, Any]) -> SelectableSelection:
    try:
        value_id = UUID(str(payload["selected_value_id"]))
    except (KeyError, ValueError) as exc:
        raise InvalidSelectionError(
            f"Option {option_id} requires a valid selected_value_id"
        ) from exc
    return SelectableSelection(option_id=option_id, selected_value_id=value_id)


_PARSERS = {
    "text_selection": _text,
    "quantitative_selection": _quantitative,
    "number_selection": _number,
    "selectable_selection": _selectable,
}


def parse_selection(payload: Mapping[str, Any]) -> OptionSelection:
    """Build a selection variant from its wire representation."""
    kind = payload.get("type")
    parser = _PARSERS.get(kind) if isinstance(kind, str) else None
    if parser is None:
        raise InvalidSelectionError(f"Unknown option selection type: {kind}")
    try:
        option_id = OptionId.from_string(payload["option_id"])
    except (KeyError, ValueError) as exc:
        raise InvalidSelectionError("Option selection requires a valid option_id") from exc
    return parser(option_id, payload)


def is_selected(selection: OptionSelection) -> bool:
    """A quantitative selection of zero is treated as not selected."""
    if isinstance(selection, QuantitativeSelection):
        return selection.selected_quantity > 0
    return True
