import logging

import strawberry
from graphql import GraphQLError
from sqlalchemy.exc import SQLAlchemyError
from strawberry.extensions import SchemaExtension
from strawberry.utils.await_maybe import await_maybe

from blog_gateway.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class CustomErrorHandler(SchemaExtension):
    """Logs resolver failures and tags them with an error code.

    Messages reach the client unchanged; only ``extensions.code`` is added.
    Nothing is swallowed: the failing field still errors, so the request
    transaction is rolled back.
    """

    async def resolve(self, _next, root, info: strawberry.Info, *args, **kwargs):
        try:
            return await await_maybe(_next(root, info, *args, **kwargs))
        except GraphQLError:
            raise
        except SQLAlchemyError as e:
            logger.error(
                f"SQLAlchemyError in resolver '{info.field_name}': {e}", exc_info=True
            )
            raise self.tagged(e, "DATABASE_ERROR") from e
        except (ValidationError, ValueError) as e:
            logger.warning(f"Invalid input in resolver '{info.field_name}': {e}")
            raise self.tagged(e, "VALIDATION_ERROR") from e
        except Exception as e:
            logger.error(
                f"Unexpected exception in resolver '{info.field_name}': {e}",
                exc_info=True,
            )
            raise

    @staticmethod
    def tagged(error: Exception, code: str) -> GraphQLError:
        return GraphQLError(
            message=str(error),
            original_error=error,
            extensions={"code": code},
        )
