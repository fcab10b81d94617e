"""
Prompt template repository for database access.
"""

from typing import Optional, Any

from shared.repository import BaseRepository
from .models import PromptTemplate


TEMPLATES_TABLE = "prompt_templates"


class PromptTemplateRepository(BaseRepository[PromptTemplate]):
    """
    Repository for the ``prompt_templates`` table.

    Note: This repository does NOT perform authorization checks.
    """

    def list_all(self) -> list[PromptTemplate]:
        """All templates, default first, then newest first."""
        result = (
            self._db.table(TEMPLATES_TABLE)
            .select("*")
            .order("is_default", desc=True)
            .order("created_at", desc=True)
            .execute()
        )
        return [PromptTemplate(**row) for row in result.data]

    def get_by_id(self, template_id: str) -> Optional[PromptTemplate]:
        result = self._db.table(TEMPLATES_TABLE).select("*").eq("id", template_id).execute()
        if not result.data:
            return None
        return PromptTemplate(**result.data[0])

    def create(self, data: dict[str, Any]) -> PromptTemplate:
        result = self._db.table(TEMPLATES_TABLE).insert(data).execute()
        return PromptTemplate(**result.data[0])

    def update(self, template_id: str, data: dict[str, Any]) -> PromptTemplate:
        data = {**data, "updated_at": self._now_iso()}
        result = self._db.table(TEMPLATES_TABLE).update(data).eq("id", template_id).execute()
        return PromptTemplate(**result.data[0])

    def delete(self, template_id: str) -> None:
        self._db.table(TEMPLATES_TABLE).delete().eq("id", template_id).execute()

    def clear_default(self, except_id: Optional[str] = None) -> None:
        """
        Remove the default flag from every template.

        Args:
            except_id: Template that keeps its flag (the one being promoted)
        """
        query = self._db.table(TEMPLATES_TABLE).update({"is_default": False}).eq("is_default", True)
        if except_id:
            query = query.neq("id", except_id)
        query.execute()
