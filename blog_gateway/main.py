import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from strawberry.fastapi import GraphQLRouter

from blog_gateway.core.config import settings
from blog_gateway.database import async_engine
from blog_gateway.graphql import get_context, schema
from blog_gateway.logging_config import setup_logging
from blog_gateway.telemetry import setup_telemetry

# Call setup_logging early, before creating app or loggers
setup_logging()
logger = logging.getLogger(__name__)

# --- Rate Limiting Setup ---
# Applied to every route through SlowAPIMiddleware, keyed by client IP
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.RATE_LIMIT])


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_telemetry(app)
    logger.info("Application startup complete.")
    yield
    # Release pooled connections
    await async_engine.dispose()
    logger.info("Application shutdown.")


app = FastAPI(title="Blog GraphQL Gateway", lifespan=lifespan)

# --- Add Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# --- GraphQL Setup ---
# One transaction and one set of relation loaders per request (see get_context)
graphql_app: GraphQLRouter = GraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide="graphiql" if settings.GRAPHQL_IDE else None,
)
app.include_router(graphql_app, prefix="/graphql")


@app.get("/")
async def read_root():
    logger.info("Root endpoint called")
    return {"message": "Blog GraphQL Gateway"}


@app.get("/health")
async def health_check(request: Request):
    logger.debug("Health check endpoint called")
    return {"status": "ok"}


if __name__ == "__main__":
    # uvicorn is normally started from the command line
    import uvicorn

    logger.info("Starting Uvicorn directly for local testing")
    uvicorn.run(app, host="0.0.0.0", port=8000)
