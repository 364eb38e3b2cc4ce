"""
Vaulted item model — something the user saved to their vault.

Vaulting carries no decision or strength; it is always read as an implicit like
of fixed weight. timestamp is kept from the store record but never decays the save.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..utils.tags import parse_tags
from .candidate import normalize_media_type

logger = logging.getLogger(__name__)


class VaultedItem(BaseModel):
    """A saved vault item with the same type/topic shape as a candidate."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str = ""
    type: Optional[str] = None
    tags: List[str] = Field(default_factory=list, validation_alias=AliasChoices("tags", "tags_json"))
    timestamp: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("timestamp", "created_at")
    )

    @field_validator("tags", mode="before")
    @classmethod
    def _parse_tags(cls, v: Any) -> List[str]:
        return parse_tags(v)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> Optional[str]:
        return normalize_media_type(v) if isinstance(v, str) and v else None


def ensure_vault_items(
    items: List[Union[Dict[str, Any], "VaultedItem"]],
) -> List["VaultedItem"]:
    """Convert list of dicts or VaultedItems to VaultedItem models; bad records become empty items."""
    result: List[VaultedItem] = []
    for item in items:
        if isinstance(item, VaultedItem):
            result.append(item)
            continue
        try:
            result.append(VaultedItem.model_validate(item))
        except ValidationError as exc:
            logger.warning(
                "[malformed_vault_item] VAULT_ITEM_VALIDATION_FAILED errors=%s",
                exc.error_count(),
            )
            result.append(VaultedItem())
    return result
