import logging
from collections.abc import AsyncIterator

from graphql import GraphQLError
from strawberry.extensions import SchemaExtension
from strawberry.types import ExecutionContext

from blog_gateway import telemetry

logger = logging.getLogger(__name__)


def operation_errors(execution_context: ExecutionContext) -> list[GraphQLError]:
    """Errors the response will carry: parse/validation errors plus execution errors."""
    errors = list(execution_context.pre_execution_errors or [])
    result = execution_context.result
    if result is not None and result.errors:
        errors.extend(result.errors)
    return errors


class TransactionScope(SchemaExtension):
    """Finishes the request transaction once the whole operation has settled.

    Rolls back when the response carries at least one error, commits
    otherwise. Failures of commit/rollback propagate to the caller.
    """

    async def on_operation(self) -> AsyncIterator[None]:
        tx = self.execution_context.context.tx
        try:
            yield
        except BaseException:
            logger.warning("Operation raised; rolling back transaction")
            await self._finish(tx, "rollback")
            raise

        errors = operation_errors(self.execution_context)
        # No result and no recorded error means execution was cut short
        if errors or self.execution_context.result is None:
            logger.info(
                "Rolling back transaction",
                extra={"props": {"errors": len(errors)}},
            )
            await self._finish(tx, "rollback")
        else:
            logger.info("Committing transaction")
            await self._finish(tx, "commit")

    async def _finish(self, tx, outcome: str) -> None:
        try:
            if outcome == "commit":
                await tx.commit()
            else:
                await tx.rollback()
        except Exception:
            logger.error(f"Transaction {outcome} failed", exc_info=True)
            telemetry.record_transaction("failed")
            raise
        telemetry.record_transaction(outcome)
