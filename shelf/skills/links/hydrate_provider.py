"""
hydrate_provider skill

Fetches content for the parsed URL from its provider.

State:
    requires: url_info (optional: credentials)
    provides: hydration, hydrated_content (only when content was produced)

Credentials are looked up in step args first (args["reddit"]["access_token"],
args["x"]["bearer_token"]), then state["credentials"][provider], then
settings. The provider's args may also carry an httpx.AsyncClient
(args["reddit"]["client"]) used instead of a new client.

A run already cancelled when the skill starts skips the provider request.
"""

from typing import Any

from pydantic import SecretStr

from shelf.core.config import Settings, get_settings
from shelf.schemas.links import HydrationResult, ParsedUrlInfo, Provider
from shelf.skills.base import BaseSkill, SkillContext
from shelf.skills.links.providers import hydrate_arxiv, hydrate_reddit, hydrate_x
from shelf.skills.state import ExecutionState


class HydrateProviderSkill(BaseSkill):
    """Skill that hydrates link content from Reddit, X or arXiv"""

    name = "hydrate_provider"
    description = "Fetch provider-specific content and metadata"
    requires = ("url_info",)
    provides = ("hydration", "hydrated_content")

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    async def run(self, args: dict[str, Any] | None, context: SkillContext) -> HydrationResult:
        url_info: ParsedUrlInfo = context.state.require("url_info", skill=self.name)

        if url_info.provider == Provider.UNKNOWN:
            context.logger.warning("agent.skill.hydrate_provider.unknown", {"url": url_info.raw})
            result = HydrationResult.skipped(f"Unsupported provider for '{url_info.domain}'")
            context.state["hydration"] = result
            return result

        if context.cancelled:
            result = HydrationResult.skipped("Run cancelled before provider request")
        else:
            provider_args = (args or {}).get(url_info.provider.value) or {}
            result = await self._hydrate(url_info, provider_args, context.state)

        context.state["hydration"] = result
        if result.content is not None:
            context.state["hydrated_content"] = result.content

        if result.is_skipped:
            context.logger.info(
                "agent.skill.hydrate_provider.skipped",
                {"provider": url_info.provider.value, "reason": result.reason},
            )

        return result

    async def _hydrate(
        self, url_info: ParsedUrlInfo, args: dict[str, Any], state: ExecutionState
    ) -> HydrationResult:
        settings = self.settings
        timeout = settings.HTTP_TIMEOUT_SECONDS
        client = args.get("client")

        if url_info.provider == Provider.REDDIT:
            return await hydrate_reddit(
                url_info.normalized,
                provider_id=url_info.provider_id,
                access_token=_credential(
                    args, state, "reddit", "access_token", settings.REDDIT_ACCESS_TOKEN
                ),
                user_agent=args.get("user_agent") or settings.REDDIT_USER_AGENT,
                limit_comments=args.get("limit_comments", settings.REDDIT_COMMENT_LIMIT),
                client=client,
                timeout=timeout,
            )

        if url_info.provider == Provider.X:
            if not url_info.provider_id:
                return HydrationResult.skipped("Missing X provider identifier")
            return await hydrate_x(
                url_info.provider_id,
                bearer_token=_credential(
                    args, state, "x", "bearer_token", settings.X_BEARER_TOKEN
                ),
                client=client,
                timeout=timeout,
            )

        if url_info.provider == Provider.ARXIV:
            if not url_info.provider_id:
                return HydrationResult.skipped("Missing arXiv identifier")
            return await hydrate_arxiv(url_info.provider_id, client=client, timeout=timeout)

        return HydrationResult.skipped(f"Unsupported provider '{url_info.provider.value}'")


def _credential(
    args: dict[str, Any],
    state: ExecutionState,
    provider: str,
    key: str,
    fallback: SecretStr | None,
) -> str | None:
    value = args.get(key)
    if not value:
        credentials = state.get("credentials") or {}
        value = (credentials.get(provider) or {}).get(key)
    if not value and fallback is not None:
        value = fallback.get_secret_value()
    return value or None
