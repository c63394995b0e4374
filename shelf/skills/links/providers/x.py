"""
X (Twitter) hydration

Uses the X v2 API when a bearer token is available and falls back to the
public oEmbed endpoint, which only yields an embeddable preview.
"""

import logging

import httpx

from shelf.schemas.links import HydratedContent, HydrationResult, Provider
from shelf.skills.links.providers.http import DEFAULT_TIMEOUT_SECONDS, http_client

logger = logging.getLogger(__name__)

X_TWEETS_ENDPOINT = "https://api.x.com/2/tweets"
OEMBED_ENDPOINT = "https://publish.twitter.com/oembed"
TITLE_MAX_LENGTH = 120


def status_url(provider_id: str) -> str:
    return f"https://x.com/i/web/status/{provider_id}"


async def hydrate_x(
    provider_id: str,
    *,
    bearer_token: str | None = None,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> HydrationResult:
    """
    Hydrate a post on X

    Returns:
        ok with the post text when the API answers; otherwise skipped,
        carrying the oEmbed preview as partial content when available

    Raises:
        httpx.HTTPError: Transport failure
    """
    async with http_client(client, timeout) as http:
        if bearer_token:
            response = await http.get(
                X_TWEETS_ENDPOINT,
                params={
                    "ids": provider_id,
                    "tweet.fields": "created_at,author_id,public_metrics",
                },
                headers={"Authorization": f"Bearer {bearer_token}"},
            )

            if response.status_code == 200:
                payload = response.json()
                tweets = payload.get("data") or []
                if tweets:
                    text = tweets[0].get("text")
                    text = text if isinstance(text, str) else ""
                    title = text.split("\n")[0][:TITLE_MAX_LENGTH] or "Post on X"
                    return HydrationResult.ok(
                        HydratedContent(
                            provider=Provider.X,
                            provider_id=provider_id,
                            title=title,
                            text=text,
                            raw=payload,
                        )
                    )
            logger.info(f"X API returned no post for {provider_id} (status {response.status_code})")
            fallback_reason = "X API request returned no post; falling back to oEmbed"
        else:
            fallback_reason = "No bearer token provided for X API; falling back to oEmbed"

        embed_response = await http.get(OEMBED_ENDPOINT, params={"url": status_url(provider_id)})

    if embed_response.status_code != 200:
        return HydrationResult.skipped("Unable to fetch X oEmbed payload")

    oembed = embed_response.json()
    html = oembed.get("html") if isinstance(oembed, dict) else None

    content = HydratedContent(
        provider=Provider.X,
        provider_id=provider_id,
        title="Post on X",
        text="",
        raw={"oembed": oembed},
        embed_html=html if isinstance(html, str) else None,
    )
    return HydrationResult.skipped(fallback_reason, content=content)
