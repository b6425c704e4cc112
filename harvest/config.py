import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError


class Settings(BaseModel):
    products_file: Path = Field(default=Path("products.json"), alias="PRODUCTS_FILE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    direct_timeout: float = Field(default=8.0, alias="DIRECT_TIMEOUT", gt=0)
    min_content_length: int = Field(default=1000, alias="MIN_CONTENT_LENGTH", ge=0)
    import_delay: float = Field(default=0.75, alias="IMPORT_DELAY", ge=0)
    scraperapi_key: Optional[str] = Field(default=None, alias="SCRAPERAPI_KEY")

    ebay_app_id: Optional[str] = Field(default=None, alias="EBAY_APP_ID")
    ebay_cert_id: Optional[str] = Field(default=None, alias="EBAY_CERT_ID")
    ebay_oauth_url: str = Field(default="https://api.ebay.com/identity/v1/oauth2/token", alias="EBAY_OAUTH_URL")
    ebay_browse_url: str = Field(default="https://api.ebay.com/buy/browse/v1", alias="EBAY_BROWSE_URL")
    ebay_campaign_id: Optional[str] = Field(default=None, alias="EBAY_CAMPAIGN_ID")
    ebay_affiliate_id: Optional[str] = Field(default=None, alias="EBAY_AFFILIATE_ID")

    featured_limit: int = Field(default=8, alias="FEATURED_LIMIT", ge=1)
    featured_min_discount: int = Field(default=30, alias="FEATURED_MIN_DISCOUNT", ge=0, le=100)

    @property
    def ebay_enabled(self) -> bool:
        return bool(self.ebay_app_id and self.ebay_cert_id)


def _load_dotenv():
    # Load from repo root if present, otherwise rely on environment variables.
    root_env = Path(__file__).resolve().parents[1] / ".env"
    if root_env.exists():
        load_dotenv(root_env)
    else:
        load_dotenv()


def load_settings(env: Optional[dict] = None) -> Settings:
    """Build settings from a mapping of environment variables (os.environ by default)."""
    env = dict(os.environ if env is None else env)
    # blank values in .env files mean "unset"
    env = {k: v for k, v in env.items() if v != ""}
    try:
        return Settings(**env)
    except ValidationError as exc:
        bad = sorted({str(e["loc"][0]) for e in exc.errors()})
        detail = f"Invalid environment variables: {', '.join(bad)}"
        raise RuntimeError(detail) from exc


@lru_cache()
def get_settings() -> Settings:
    _load_dotenv()
    return load_settings()
