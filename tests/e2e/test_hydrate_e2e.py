"""
End-to-end tests for the hydrate plan

Runs planner, orchestrator and the link skills together, with provider
HTTP served by httpx.MockTransport.
"""

import httpx
import pytest

from shelf.agents.orchestrator import ExecutionError, PlanOrchestrator
from shelf.agents.planner import build_plan
from shelf.schemas.links import HydratedContent, HydrationResult, Provider
from shelf.schemas.plan import AgentPlan, PlanStep, TaskKind, TaskRequest
from shelf.skills.base import FunctionSkill
from shelf.skills.links import register_core_skills
from shelf.skills.registry import SkillRegistry

REDDIT_URL = "https://www.reddit.com/r/webdev/comments/abc123/my_project/"


async def no_backoff(delay, signal):
    return None


def reddit_handler(request: httpx.Request) -> httpx.Response:
    """Minimal Reddit OAuth API"""
    assert request.headers["Authorization"] == "bearer reddit-token"

    if request.url.path == "/api/info":
        return httpx.Response(
            200,
            json={
                "data": {
                    "children": [
                        {
                            "data": {
                                "id": "abc123",
                                "title": "Sample Reddit Post",
                                "selftext": "Post body",
                            }
                        }
                    ]
                }
            },
        )

    if request.url.path == "/comments/abc123":
        return httpx.Response(
            200,
            json=[
                {"data": {"children": []}},
                {
                    "data": {
                        "children": [
                            {"data": {"body": "First comment"}},
                            {"data": {"body": "Second comment"}},
                        ]
                    }
                },
            ],
        )

    return httpx.Response(404)


class TestHydrateEndToEnd:
    """Test the hydrate plan from URL to persistence draft"""

    def setup_method(self):
        self.registry = SkillRegistry()
        self.embedded: list = []
        self.task = TaskRequest(kind=TaskKind.HYDRATE, link_id="link-1", url=REDDIT_URL)

    def register_embedding(self):
        self.registry.register(
            FunctionSkill(
                "upsert_embedding",
                lambda args, ctx: self.embedded.append(ctx.state.require("persist_link")),
            )
        )

    def orchestrator(self, settings) -> PlanOrchestrator:
        return PlanOrchestrator(self.registry, settings=settings, backoff_wait=no_backoff)

    @pytest.mark.asyncio
    async def test_with_mocked_hydration(self, settings, sink):
        """A stand-in hydrate skill feeds upsert_link through state"""
        register_core_skills(self.registry, settings=settings)
        self.register_embedding()

        def fake_hydrate(args, ctx):
            url_info = ctx.state.require("url_info")
            content = HydratedContent(
                provider=url_info.provider,
                provider_id=url_info.provider_id,
                title="Sample Reddit Post",
                text="Post body\n\nFirst comment",
            )
            ctx.state["hydrated_content"] = content
            return HydrationResult.ok(content)

        self.registry.register(FunctionSkill("hydrate_provider", fake_hydrate))

        result = await self.orchestrator(settings).run_plan(self.task, logger=sink)

        persisted = result.state["persist_link"]
        assert persisted.link_id == "link-1"
        assert persisted.provider == Provider.REDDIT
        assert persisted.provider_id == "abc123"
        assert persisted.title == "Sample Reddit Post"
        assert persisted.text == "Post body\n\nFirst comment"
        assert self.embedded == [persisted]
        assert sink.messages()[-1] == "agent.plan.completed"

    @pytest.mark.asyncio
    async def test_reddit_over_mock_transport(self, settings):
        """The real skills hydrate a Reddit post through an injected client"""
        register_core_skills(self.registry, settings=settings)
        self.register_embedding()

        async with httpx.AsyncClient(transport=httpx.MockTransport(reddit_handler)) as client:
            plan = build_plan(self.task)
            steps = [
                PlanStep(
                    use=step.use,
                    description=step.description,
                    args=(
                        {"reddit": {"access_token": "reddit-token", "client": client}}
                        if step.use == "hydrate_provider"
                        else step.args
                    ),
                )
                for step in plan.steps
            ]

            result = await self.orchestrator(settings).run_plan(
                self.task, plan_override=AgentPlan(steps=steps)
            )

        assert result.state["hydration"].is_ok
        persisted = result.state["persist_link"]
        assert persisted.url == "https://www.reddit.com/r/webdev/comments/abc123/my_project"
        assert persisted.title == "Sample Reddit Post"
        assert persisted.text == "Post body\n\nFirst comment\n\nSecond comment"

    @pytest.mark.asyncio
    async def test_missing_credentials_still_persists_shell(self, settings, sink):
        """Without a token hydration is skipped and the link is still drafted"""
        register_core_skills(self.registry, settings=settings)
        self.register_embedding()

        result = await self.orchestrator(settings).run_plan(self.task, logger=sink)

        assert result.state["hydration"].is_skipped
        assert "hydrated_content" not in result.state
        assert result.state["persist_link"].title is None
        assert "agent.step.skipped" in sink.messages("info")

    @pytest.mark.asyncio
    async def test_camel_case_request_keeps_link_id(self, settings):
        """A wire-form mapping carries linkId through to the persistence draft"""
        register_core_skills(self.registry, settings=settings)
        self.register_embedding()

        result = await self.orchestrator(settings).run_plan(
            {"kind": "hydrate", "linkId": "link-9", "url": REDDIT_URL, "note": "later"}
        )

        persisted = result.state["persist_link"]
        assert persisted.link_id == "link-9"
        assert persisted.note == "later"
        assert result.state["link_id"] == "link-9"

    @pytest.mark.asyncio
    async def test_unknown_domain_fails_at_upsert(self, settings):
        """Unknown providers halt the plan at upsert_link"""
        register_core_skills(self.registry, settings=settings)
        self.register_embedding()
        task = TaskRequest(kind=TaskKind.HYDRATE, url="https://example.com/article")

        with pytest.raises(ExecutionError) as exc_info:
            await self.orchestrator(settings).run_plan(task)

        assert exc_info.value.step.use == "upsert_link"
        assert exc_info.value.attempt == 3
        assert isinstance(exc_info.value.cause, ValueError)
        assert self.embedded == []
