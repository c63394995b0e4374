"""
upsert_link skill

Builds the persistence draft for the link from the parsed URL and any
hydrated content. Writing it to storage is the job of a later collaborator.

State:
    requires: url_info (optional: hydrated_content, link_id, note)
    provides: persist_link
"""

from typing import Any

from shelf.schemas.links import HydratedContent, ParsedUrlInfo, PersistLinkInput, Provider
from shelf.skills.base import BaseSkill, SkillContext


class UpsertLinkSkill(BaseSkill):
    """Skill that prepares state["persist_link"]"""

    name = "upsert_link"
    description = "Persist link shell, content payload, and status"
    requires = ("url_info",)
    provides = ("persist_link",)

    async def run(self, args: dict[str, Any] | None, context: SkillContext) -> PersistLinkInput:
        url_info: ParsedUrlInfo = context.state.require("url_info", skill=self.name)

        if url_info.provider == Provider.UNKNOWN:
            raise ValueError("Cannot upsert link for unknown provider")

        hydrated: HydratedContent | None = context.state.get("hydrated_content")

        payload = PersistLinkInput(
            link_id=context.state.get("link_id") or context.task.link_id,
            url=url_info.normalized,
            provider=url_info.provider,
            provider_id=url_info.provider_id,
            domain=url_info.domain,
            title=hydrated.title if hydrated else None,
            text=hydrated.text if hydrated else None,
            raw=hydrated.raw if hydrated else None,
            note=context.state.get("note") or context.task.note,
        )

        context.state["persist_link"] = payload
        return payload
