import logging
from pathlib import Path
from typing import Iterable, List, Union

import orjson

logger = logging.getLogger(__name__)


class ProductFile:
    """The JSON product list the deal site serves from."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> List[dict]:
        if not self.path.exists():
            return []
        data = orjson.loads(self.path.read_bytes())
        if isinstance(data, dict):
            data = data.get("products", [])
        if not isinstance(data, list):
            raise ValueError(f"{self.path}: expected a list of products")
        return [p for p in data if isinstance(p, dict)]

    def save(self, products: List[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(orjson.dumps(products, option=orjson.OPT_INDENT_2) + b"\n")

    def merge(self, products: Iterable[dict]) -> int:
        """Append records not already present (by affiliateLink or id). Returns how many were added."""
        existing = self.load()
        links = {p.get("affiliateLink") for p in existing}
        ids = {p.get("id") for p in existing}
        added = 0
        for record in products:
            if record.get("affiliateLink") in links or record.get("id") in ids:
                logger.info("Skipping duplicate %s", record.get("id"))
                continue
            existing.append(record)
            links.add(record.get("affiliateLink"))
            ids.add(record.get("id"))
            added += 1
        if added:
            self.save(existing)
        logger.info("Merged %d new products into %s (%d total)", added, self.path, len(existing))
        return added
