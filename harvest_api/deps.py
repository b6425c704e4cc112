from fastapi import Request

from harvest.catalog import ProductFile
from harvest.config import Settings, get_settings
from harvest.pipeline import ProductPipeline


def get_app_settings() -> Settings:
    return get_settings()


def get_product_file() -> ProductFile:
    return ProductFile(get_settings().products_file)


def get_pipeline(request: Request) -> ProductPipeline:
    # built in the app lifespan so every request shares one httpx client
    return request.app.state.pipeline
