import logging

from strawberry.types import Info

from blog_gateway import crud
from blog_gateway.graphql.types.client import Client, ClientInput
from blog_gateway.schemas import ClientCreate

logger = logging.getLogger(__name__)


async def create_client(info: Info, client: ClientInput) -> Client:
    """Resolver for the 'createClient' mutation.

    Inserts one row in the request transaction and echoes the submitted
    fields next to the generated id. Failures are logged and re-raised.
    """
    submitted = client.submitted_fields()
    try:
        values = ClientCreate(**submitted).column_values()
        new_id = await crud.insert_client(info.context.tx, values=values)
    except Exception:
        logger.error("Error creating client", exc_info=True)
        raise
    logger.info("Client created", extra={"props": {"client_id": new_id}})
    return Client(id=new_id, **submitted)
