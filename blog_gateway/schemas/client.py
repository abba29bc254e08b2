from datetime import date, datetime, time
from typing import Any

from pydantic import BaseModel, field_validator


# --- Client Schemas ---
class ClientCreate(BaseModel):
    """Validated values for a new ``clients`` row.

    GraphQL exposes temporal columns as strings; they are parsed here so the
    driver receives real ``date``/``datetime`` parameters.
    """

    name: str | None = None
    last_name: str | None = None
    email: str | None = None
    birthday: date | None = None
    address: str | None = None
    created_at: datetime

    @field_validator("created_at", mode="before")
    @classmethod
    def accept_plain_dates(cls, value: Any) -> Any:
        # "2024-01-01" means midnight of that day
        if isinstance(value, str) and len(value.strip()) == 10:
            return datetime.combine(date.fromisoformat(value.strip()), time.min)
        return value

    def column_values(self) -> dict[str, Any]:
        """Values to insert, skipping fields the caller did not send."""
        return self.model_dump(exclude_unset=True)
