"""
Link skills

The skills behind the hydrate plan: parse_url, hydrate_provider and
upsert_link. upsert_embedding and the summarize/search skills are provided
by the storage and ranking services.
"""

from shelf.core.config import Settings
from shelf.skills.base import BaseSkill
from shelf.skills.links.hydrate_provider import HydrateProviderSkill
from shelf.skills.links.parse_url import ParseUrlSkill, parse_link_url
from shelf.skills.links.upsert_link import UpsertLinkSkill
from shelf.skills.registry import SkillRegistry


def core_skills(settings: Settings | None = None) -> list[BaseSkill]:
    """Fresh instances of the link skills"""
    return [ParseUrlSkill(), HydrateProviderSkill(settings=settings), UpsertLinkSkill()]


def register_core_skills(registry: SkillRegistry, settings: Settings | None = None) -> None:
    """Register the link skills in ``registry``"""
    for skill in core_skills(settings):
        registry.register(skill)


__all__ = [
    "HydrateProviderSkill",
    "ParseUrlSkill",
    "UpsertLinkSkill",
    "core_skills",
    "parse_link_url",
    "register_core_skills",
]
