import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from harvest.config import get_settings
from harvest.pipeline import build_pipeline

from .routers import deals, products

settings = get_settings()
logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with httpx.AsyncClient() as client:
        app.state.pipeline = build_pipeline(client, settings)
        logger.info("[INIT] Serving deals from %s", settings.products_file)
        yield


app = FastAPI(title="Deal Harvest", version="0.1.0", lifespan=lifespan)


@app.get("/health")
def healthcheck():
    return {"status": "ok", "products_file": str(settings.products_file)}


app.include_router(deals.router, prefix="/api", tags=["deals"])
app.include_router(products.router, prefix="/api/products", tags=["products"])
