import strawberry


# --- Input Types ---
@strawberry.input
class ClientInput:
    created_at: str
    name: str | None = strawberry.UNSET
    email: str | None = strawberry.UNSET
    last_name: str | None = strawberry.UNSET
    birthday: str | None = strawberry.UNSET
    address: str | None = strawberry.UNSET

    def submitted_fields(self) -> dict[str, str | None]:
        """Fields present in the request, as sent."""
        return {
            name: value
            for name, value in vars(self).items()
            if value is not strawberry.UNSET
        }


# --- Object Types ---
@strawberry.type
class Client:
    id: int
    created_at: str
    name: str | None = None
    email: str | None = None
    last_name: str | None = None
    birthday: str | None = None
    address: str | None = None
    updated_at: str | None = None
