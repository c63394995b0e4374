"""
parse_url skill

Normalizes the task URL and detects which provider serves it.

State:
    requires: nothing (reads args["url"] or task.url)
    provides: url_info, link_id (when the task carries one)
"""

import re
from typing import Any
from urllib.parse import SplitResult, urlsplit

from shelf.schemas.links import ParsedUrlInfo, Provider
from shelf.skills.base import BaseSkill, SkillContext

ARXIV_ID_PATTERN = re.compile(r"^\d{4}\.\d{4,5}(v\d+)?$")
REDDIT_ID_PATTERN = re.compile(r"/comments/([a-z0-9]+)", re.IGNORECASE)
X_ID_PATTERN = re.compile(r"/status(?:es)?/(\d+)", re.IGNORECASE)
ARXIV_PATH_PATTERN = re.compile(r"/(?:abs|pdf)/(.+?)(?:\.pdf)?/?$", re.IGNORECASE)


def infer_provider(domain: str) -> Provider:
    """Map a hostname (without www.) to a provider"""
    host = domain.lower()

    if host == "reddit.com" or host.endswith(".reddit.com"):
        return Provider.REDDIT

    if host in ("x.com", "twitter.com") or host.endswith((".x.com", ".twitter.com")):
        return Provider.X

    if host == "arxiv.org" or host.endswith(".arxiv.org"):
        return Provider.ARXIV

    return Provider.UNKNOWN


def extract_provider_id(provider: Provider, path: str) -> str | None:
    if provider == Provider.REDDIT:
        match = REDDIT_ID_PATTERN.search(path)
    elif provider == Provider.X:
        match = X_ID_PATTERN.search(path)
    elif provider == Provider.ARXIV:
        match = ARXIV_PATH_PATTERN.search(path)
    else:
        return None

    return match.group(1) if match else None


def normalize_url(parts: SplitResult, provider: Provider, provider_id: str | None) -> str:
    if provider == Provider.X and provider_id:
        return f"https://x.com/i/web/status/{provider_id}"

    if provider == Provider.REDDIT:
        return f"https://www.reddit.com{parts.path.rstrip('/')}"

    if provider == Provider.ARXIV and provider_id:
        return f"https://arxiv.org/abs/{provider_id}"

    host = parts.netloc.rsplit("@", 1)[-1]
    return f"{parts.scheme}://{host}{parts.path}"


def _arxiv_info(raw_url: str, identifier: str) -> ParsedUrlInfo:
    return ParsedUrlInfo(
        raw=raw_url,
        normalized=f"https://arxiv.org/abs/{identifier}",
        domain="arxiv.org",
        provider=Provider.ARXIV,
        provider_id=identifier,
    )


def parse_link_url(raw_url: str) -> ParsedUrlInfo:
    """
    Parse a link URL into provider details

    Accepts http(s) URLs, "arxiv:<id>" and bare arXiv identifiers such as
    "2301.12345". Unrecognized hosts yield provider "unknown".

    Raises:
        ValueError: If the URL has no scheme or host
    """
    candidate = raw_url.strip()

    if ARXIV_ID_PATTERN.match(candidate):
        return _arxiv_info(raw_url, candidate)

    try:
        parts = urlsplit(candidate)
    except ValueError as e:
        raise ValueError(f"Invalid URL provided to parse_url: {e}") from e

    if parts.scheme.lower() == "arxiv":
        identifier = parts.path.strip("/")
        if not identifier:
            raise ValueError(f"Invalid URL provided to parse_url: {raw_url!r}")
        return _arxiv_info(raw_url, identifier)

    if not parts.scheme or not parts.hostname:
        raise ValueError(f"Invalid URL provided to parse_url: {raw_url!r}")

    domain = parts.hostname.removeprefix("www.")
    provider = infer_provider(domain)
    provider_id = extract_provider_id(provider, parts.path)

    return ParsedUrlInfo(
        raw=raw_url,
        normalized=normalize_url(parts, provider, provider_id),
        domain=domain,
        provider=provider,
        provider_id=provider_id,
    )


class ParseUrlSkill(BaseSkill):
    """Skill that parses the task URL into state["url_info"]"""

    name = "parse_url"
    description = "Normalize the URL and detect provider"
    provides = ("url_info", "link_id")

    async def run(self, args: dict[str, Any] | None, context: SkillContext) -> ParsedUrlInfo:
        raw_url = (args or {}).get("url") or context.task.url
        if not raw_url:
            raise ValueError("parse_url requires a URL on the task or step args")

        info = parse_link_url(raw_url)
        context.state["url_info"] = info

        if context.task.link_id:
            context.state["link_id"] = context.task.link_id

        if info.provider == Provider.UNKNOWN:
            context.logger.warning("agent.skill.parse_url.unknown_provider", {"raw_url": raw_url})

        return info
