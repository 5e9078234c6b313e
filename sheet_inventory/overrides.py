import logging
from typing import Iterable, Optional
import requests
from pydantic import ValidationError

from . import settings
from .exceptions import OverridesError
from .schemas import InventoryRecord, ItemOverride

logger = logging.getLogger(__name__)


class OverridesClient:
    """
    Thin client for the `inventory_overrides` table behind a PostgREST API
    (e.g. Supabase REST). Columns: id (text pk), is_hidden (bool), product_image (text).
    Reads degrade to "no overrides"; writes raise OverridesError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        table: Optional[str] = None,
    ):
        self.base_url = (base_url or settings.OVERRIDES_URL or "").rstrip("/")
        self.api_key = api_key or settings.OVERRIDES_KEY
        self.table = table or settings.OVERRIDES_TABLE

    @property
    def enabled(self) -> bool:
        return bool(self.base_url and self.api_key)

    @property
    def _endpoint(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def _headers(self, **extra: str) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        headers.update(extra)
        return headers

    def get_overrides(self) -> list[ItemOverride]:
        if not self.enabled:
            return []
        try:
            response = requests.get(
                self._endpoint,
                params={"select": "id,is_hidden,product_image"},
                headers=self._headers(),
                timeout=settings.REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            return [ItemOverride(**row) for row in response.json()]
        except (requests.exceptions.RequestException, ValueError, ValidationError) as e:
            logger.error(f"❌ Error fetching overrides: {e}")
            return []

    def _upsert(self, payload: dict) -> None:
        if not self.enabled:
            raise OverridesError("Overrides store is not configured.")
        try:
            response = requests.post(
                self._endpoint,
                params={"on_conflict": "id"},
                json=payload,
                headers=self._headers(Prefer="resolution=merge-duplicates"),
                timeout=settings.REQUEST_TIMEOUT,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise OverridesError(f"Failed to save override for {payload['id']}: {e}") from e

    def set_hidden(self, item_id: str, hidden: bool) -> bool:
        """Upserts the hidden flag; the stored image is left as is."""
        logger.info(f"Setting visibility for {item_id}: hidden={hidden}")
        self._upsert({"id": item_id, "is_hidden": hidden})
        return hidden

    def set_image(self, item_id: str, image_url: str) -> str:
        """Upserts the replacement image; the hidden flag is left as is."""
        self._upsert({"id": item_id, "product_image": image_url})
        return image_url


def apply_overrides(
    records: Iterable[InventoryRecord],
    overrides: Iterable[ItemOverride],
    include_hidden: bool = False,
) -> list[InventoryRecord]:
    """Drops hidden items (unless include_hidden) and swaps in override images."""
    by_id = {override.id: override for override in overrides}
    result = []
    for record in records:
        override = by_id.get(record.id)
        if override is None:
            result.append(record)
            continue
        if override.is_hidden and not include_hidden:
            continue
        if override.product_image:
            record = record.model_copy(update={"image_url": override.product_image})
        result.append(record)
    return result
