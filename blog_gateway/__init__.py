"""GraphQL gateway over the blog database (users, posts, comments, clients)."""

__version__ = "0.1.0"
