import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from harvest.errors import ExtractionFailed
from harvest.pipeline import ProductPipeline
from harvest.schema import Category

from ..deps import get_pipeline

logger = logging.getLogger(__name__)

router = APIRouter()


class ExtractRequest(BaseModel):
    url: str
    category: Optional[Category] = None


@router.post("/extract")
async def extract_product(payload: ExtractRequest, pipeline: ProductPipeline = Depends(get_pipeline)):
    """
    Run one URL through the extraction pipeline and return the finished
    product record. Nothing is written to the product file.
    """
    try:
        product = await pipeline.extract(payload.url, category=payload.category)
    except ExtractionFailed as exc:
        logger.warning("Extraction failed for %s: %s", payload.url, exc)
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    return product.to_record()
