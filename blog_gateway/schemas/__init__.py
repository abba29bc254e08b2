from blog_gateway.schemas.client import ClientCreate

__all__ = ["ClientCreate"]
