"""Export GraphQL components for use in the main application."""

from .context import Context, get_context
from .dataloaders import RelationLoaders, create_relation_loaders
from .schema import Mutation, Query, schema

__all__ = [
    "Context",
    "get_context",
    "RelationLoaders",
    "create_relation_loaders",
    "Mutation",
    "Query",
    "schema",
]
