"""
arXiv hydration

Reads the paper title and abstract from the arXiv Atom API.
"""

from xml.etree import ElementTree

import httpx

from shelf.schemas.links import HydratedContent, HydrationResult, Provider
from shelf.skills.links.providers.http import DEFAULT_TIMEOUT_SECONDS, http_client

ARXIV_QUERY_ENDPOINT = "https://export.arxiv.org/api/query"
ATOM_NS = {"atom": "http://www.w3.org/2005/Atom"}


async def hydrate_arxiv(
    provider_id: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> HydrationResult:
    """
    Hydrate an arXiv paper by identifier

    Returns:
        ok with title and abstract, or skipped

    Raises:
        httpx.HTTPError: Transport failure
    """
    async with http_client(client, timeout) as http:
        response = await http.get(ARXIV_QUERY_ENDPOINT, params={"id_list": provider_id})

    if response.status_code != 200:
        return HydrationResult.skipped(f"arXiv request failed with status {response.status_code}")

    xml = response.text
    try:
        feed = ElementTree.fromstring(response.content)
    except ElementTree.ParseError:
        return HydrationResult.skipped("arXiv response is not valid XML")

    entry = feed.find("atom:entry", ATOM_NS)
    if entry is None:
        return HydrationResult.skipped(f"No arXiv entry found for '{provider_id}'")

    title = _collapse(entry.findtext("atom:title", default="", namespaces=ATOM_NS))
    summary = _collapse(entry.findtext("atom:summary", default="", namespaces=ATOM_NS))

    content = HydratedContent(
        provider=Provider.ARXIV,
        provider_id=provider_id,
        title=title or "arXiv paper",
        text=summary,
        raw={"xml": xml},
    )
    return HydrationResult.ok(content)


def _collapse(text: str) -> str:
    """Join the hard-wrapped lines arXiv uses in titles and abstracts"""
    return " ".join(text.split())
