"""
Gift marketplace API

Business-side gift verification/redemption and admin moderation.
Run with: uvicorn marketplace.main:app
"""
import logging
import sys
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

load_dotenv()

from . import __version__
from .config import settings
from .core.env import get_env_name, is_local_env
from .db import init_db
from .exception_handlers import register_exception_handlers
from .middleware import LoggingMiddleware, RequestIDMiddleware
from .routers import admin, gift_orders, health

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger("marketplace")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting gift marketplace API v{__version__} (env={get_env_name()})")
    # Deployed databases are migrated out of band
    if is_local_env():
        init_db()
    yield
    logger.info("Shutting down gift marketplace API")


app = FastAPI(title="Gift Marketplace API", version=__version__, lifespan=lifespan)

# Added last runs first: request id must exist before the access log line
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIDMiddleware)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(gift_orders.router)
app.include_router(admin.router)
