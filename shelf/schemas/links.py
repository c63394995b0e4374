"""
Link schemas

Payloads written into execution state by the link skills: parsed URL
details, hydrated provider content and the persistence draft.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from shelf.schemas.outcome import Outcome


class Provider(str, Enum):
    """Content providers detected from a URL"""

    REDDIT = "reddit"
    X = "x"
    ARXIV = "arxiv"
    UNKNOWN = "unknown"


class ParsedUrlInfo(BaseModel):
    """Result of parse_url, stored under state["url_info"]"""

    raw: str = Field(..., description="URL exactly as provided")
    normalized: str = Field(..., description="Canonical URL for the provider")
    domain: str = Field(..., description="Hostname without a leading www.")
    provider: Provider = Field(..., description="Detected provider")
    provider_id: str | None = Field(default=None, description="Provider-specific identifier")


class HydratedContent(BaseModel):
    """Normalized content fetched from a provider"""

    provider: Provider
    provider_id: str
    title: str
    text: str = ""
    raw: Any = None
    embed_html: str | None = Field(default=None, description="Embeddable preview markup")


HydrationResult = Outcome[HydratedContent]


class PersistLinkInput(BaseModel):
    """Draft link record produced by upsert_link, stored under state["persist_link"]"""

    link_id: str | None = None
    url: str
    provider: Provider
    provider_id: str | None = None
    domain: str | None = None
    title: str | None = None
    summary: str | None = None
    note: str | None = None
    text: str | None = None
    raw: Any = None
