"""
Site settings repository and service.

Site settings are a flat key/value table (JSON values) edited from the
admin panel.
"""

import logging
from typing import Any, Optional

from shared.repository import BaseRepository
from .interfaces import ISiteSettingsService
from .models import SiteSetting
from .exceptions import MissingSettingKeyError

logger = logging.getLogger(__name__)

SETTINGS_TABLE = "site_settings"


class SiteSettingsRepository(BaseRepository[SiteSetting]):
    """Repository for the ``site_settings`` table."""

    def list_all(self) -> list[SiteSetting]:
        result = self._db.table(SETTINGS_TABLE).select("*").order("key").execute()
        return [SiteSetting(**row) for row in result.data]

    def upsert(self, key: str, value: Any) -> SiteSetting:
        result = (
            self._db.table(SETTINGS_TABLE)
            .upsert(
                {"key": key, "value": value, "updated_at": self._now_iso()},
                on_conflict="key",
            )
            .execute()
        )
        return SiteSetting(**result.data[0])


class SiteSettingsService(ISiteSettingsService):
    """Site settings service backed by Supabase."""

    def __init__(self, repository: SiteSettingsRepository):
        self._repo = repository

    async def list_settings(self) -> list[SiteSetting]:
        return self._repo.list_all()

    async def upsert_setting(self, key: Optional[str], value: Any) -> SiteSetting:
        if not key or not key.strip():
            raise MissingSettingKeyError()

        setting = self._repo.upsert(key.strip(), value)
        logger.info(f"Site setting '{setting.key}' updated")
        return setting
