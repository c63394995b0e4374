"""
Reddit hydration

Fetches a post through the Reddit OAuth API and appends its top-level
comments to the post body.
"""

import logging
from typing import Any

import httpx

from shelf.schemas.links import HydratedContent, HydrationResult, Provider
from shelf.skills.links.providers.http import DEFAULT_TIMEOUT_SECONDS, http_client

logger = logging.getLogger(__name__)

REDDIT_API_BASE = "https://oauth.reddit.com"
DEFAULT_USER_AGENT = "shelf/0.1"
DEFAULT_COMMENT_LIMIT = 5


async def hydrate_reddit(
    url: str,
    *,
    provider_id: str | None = None,
    access_token: str | None = None,
    user_agent: str = DEFAULT_USER_AGENT,
    limit_comments: int = DEFAULT_COMMENT_LIMIT,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> HydrationResult:
    """
    Hydrate a Reddit post

    Args:
        url: Normalized post URL
        provider_id: Post id parsed from the URL, used if the API omits it
        access_token: Reddit OAuth access token
        user_agent: User-Agent header required by Reddit
        limit_comments: Top-level comments to include (0 disables the request)
        client: Optional AsyncClient to use instead of a new one
        timeout: Timeout for a newly created client

    Returns:
        ok with title and text (post body plus comments), or skipped

    Raises:
        httpx.HTTPError: Transport failure on the post lookup
    """
    if not access_token:
        return HydrationResult.skipped("Missing Reddit OAuth access token")

    headers = {
        "Authorization": f"bearer {access_token}",
        "User-Agent": user_agent,
    }

    async with http_client(client, timeout) as http:
        info_response = await http.get(
            f"{REDDIT_API_BASE}/api/info", params={"url": url}, headers=headers
        )

        if info_response.status_code != 200:
            return HydrationResult.skipped(
                f"Reddit info request failed with status {info_response.status_code}"
            )

        post = _first_post(info_response.json())
        if not post:
            return HydrationResult.skipped("No Reddit post found for URL")

        post_id = post.get("id") or provider_id
        if not post_id:
            return HydrationResult.skipped("Unable to resolve Reddit post id")

        comments: Any = None
        if limit_comments > 0:
            # Comments are best effort; the post alone is still useful
            try:
                comments_response = await http.get(
                    f"{REDDIT_API_BASE}/comments/{post_id}",
                    params={"limit": limit_comments, "depth": 1},
                    headers=headers,
                )
                if comments_response.status_code == 200:
                    comments = comments_response.json()
            except (httpx.HTTPError, ValueError) as e:
                logger.warning(f"Reddit comments request failed for {post_id}: {e}")
                comments = {"error": str(e)}

    title = post.get("title") or "Reddit post"
    selftext = (post.get("selftext") or "").strip()
    parts = [selftext, *_top_comment_bodies(comments, limit_comments)]

    content = HydratedContent(
        provider=Provider.REDDIT,
        provider_id=post_id,
        title=title,
        text="\n\n".join(part for part in parts if part),
        raw={"post": post, "comments": comments},
    )
    return HydrationResult.ok(content)


def _first_post(info: Any) -> dict[str, Any] | None:
    """Return the data of the first listing child of an /api/info response"""
    if not isinstance(info, dict):
        return None

    children = (info.get("data") or {}).get("children") or []
    if not children or not isinstance(children[0], dict):
        return None

    post = children[0].get("data")
    return post if isinstance(post, dict) else None


def _top_comment_bodies(comments: Any, limit: int) -> list[str]:
    """Extract non-empty top-level comment bodies from a /comments response"""
    if not isinstance(comments, list) or len(comments) < 2:
        return []

    listing = comments[1] if isinstance(comments[1], dict) else {}
    children = (listing.get("data") or {}).get("children")
    if not isinstance(children, list):
        return []

    bodies: list[str] = []
    for child in children:
        body = (child.get("data") or {}).get("body") if isinstance(child, dict) else None
        if isinstance(body, str) and body.strip():
            bodies.append(body.strip())

    return bodies[: max(0, limit)]
