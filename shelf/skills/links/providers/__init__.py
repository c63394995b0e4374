"""
Provider integrations used by hydrate_provider

Each hydrate_* coroutine fetches one piece of content and reports it with
the outcome protocol: ok with full content, or skipped with a reason when
credentials are missing or the provider answers with an error.
"""

from shelf.skills.links.providers.arxiv import hydrate_arxiv
from shelf.skills.links.providers.reddit import hydrate_reddit
from shelf.skills.links.providers.x import hydrate_x

__all__ = ["hydrate_arxiv", "hydrate_reddit", "hydrate_x"]
