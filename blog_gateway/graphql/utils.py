from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from strawberry.types import Info
from strawberry.types.nodes import FragmentSpread, InlineFragment, SelectedField, Selection


def as_text(value: Any) -> Any:
    """Temporal columns are exposed as ISO-8601 strings."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def _field_names(selections: Iterable[Selection]) -> list[str]:
    names: list[str] = []
    for selection in selections:
        if isinstance(selection, SelectedField):
            names.append(selection.name)
        elif isinstance(selection, (FragmentSpread, InlineFragment)):
            names.extend(_field_names(selection.selections))
    return names


def requested_fields(info: Info) -> list[str]:
    """Names of the fields selected under the current field, fragments flattened.

    Order follows the query; repeated names are kept once.
    """
    names: list[str] = []
    for field in info.selected_fields:
        names.extend(_field_names(field.selections))
    return list(dict.fromkeys(names))
