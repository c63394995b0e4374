"""
Tests for the parse_url skill
"""

import pytest

from shelf.schemas.links import ParsedUrlInfo, Provider
from shelf.schemas.plan import TaskKind, TaskRequest
from shelf.skills.links.parse_url import ParseUrlSkill, infer_provider, parse_link_url


class TestParseLinkUrl:
    """Test URL parsing and provider detection"""

    def test_reddit_url(self):
        """Reddit posts are normalized onto www.reddit.com without trailing slash"""
        info = parse_link_url("https://reddit.com/r/python/comments/abc123/sample_post/")

        assert info.provider == Provider.REDDIT
        assert info.provider_id == "abc123"
        assert info.domain == "reddit.com"
        assert info.normalized == "https://www.reddit.com/r/python/comments/abc123/sample_post"
        assert info.raw == "https://reddit.com/r/python/comments/abc123/sample_post/"

    def test_reddit_post_on_www(self):
        """A www.reddit.com post keeps its path minus the trailing slash"""
        info = parse_link_url("https://www.reddit.com/r/webdev/comments/abc123/my_project/")

        assert info.provider == Provider.REDDIT
        assert info.provider_id == "abc123"
        assert info.domain == "reddit.com"
        assert info.normalized == "https://www.reddit.com/r/webdev/comments/abc123/my_project"

    def test_reddit_subdomain(self):
        """old.reddit.com is still Reddit"""
        info = parse_link_url("https://old.reddit.com/r/python/comments/XyZ9/title")

        assert info.provider == Provider.REDDIT
        assert info.provider_id == "XyZ9"
        assert info.domain == "old.reddit.com"

    @pytest.mark.parametrize(
        "url",
        [
            "https://x.com/someone/status/1234567890",
            "https://twitter.com/someone/status/1234567890?s=20",
            "https://mobile.twitter.com/someone/statuses/1234567890",
        ],
    )
    def test_x_urls(self, url):
        """X and Twitter status links share one canonical form"""
        info = parse_link_url(url)

        assert info.provider == Provider.X
        assert info.provider_id == "1234567890"
        assert info.normalized == "https://x.com/i/web/status/1234567890"

    @pytest.mark.parametrize(
        ("url", "expected_id"),
        [
            ("https://arxiv.org/abs/2301.12345", "2301.12345"),
            ("https://arxiv.org/abs/2301.12345v2", "2301.12345v2"),
            ("https://arxiv.org/pdf/2301.12345.pdf", "2301.12345"),
            ("https://export.arxiv.org/abs/hep-th/9901001", "hep-th/9901001"),
            ("2301.12345", "2301.12345"),
            ("arxiv:2301.12345", "2301.12345"),
        ],
    )
    def test_arxiv_forms(self, url, expected_id):
        """Abstract, PDF and bare identifiers all resolve to the abstract page"""
        info = parse_link_url(url)

        assert info.provider == Provider.ARXIV
        assert info.provider_id == expected_id
        assert info.normalized == f"https://arxiv.org/abs/{expected_id}"

    def test_unknown_domain(self):
        """Unrecognized hosts are kept with provider unknown"""
        info = parse_link_url("https://www.example.com/blog/post?utm_source=x#top")

        assert info.provider == Provider.UNKNOWN
        assert info.provider_id is None
        assert info.domain == "example.com"
        assert info.normalized == "https://www.example.com/blog/post"

    def test_lookalike_domain_is_unknown(self):
        """Hosts merely containing a provider name are not matched"""
        assert infer_provider("notreddit.com") == Provider.UNKNOWN
        assert infer_provider("box.com") == Provider.UNKNOWN

    @pytest.mark.parametrize("url", ["not a url", "/relative/path", "https://", "arxiv:"])
    def test_invalid_urls(self, url):
        """URLs without scheme or host are rejected"""
        with pytest.raises(ValueError, match="Invalid URL provided to parse_url"):
            parse_link_url(url)


class TestParseUrlSkill:
    """Test the parse_url skill against execution state"""

    def setup_method(self):
        self.skill = ParseUrlSkill()

    def test_skill_contract(self):
        """The skill is registered as parse_url and provides url_info"""
        assert self.skill.name == "parse_url"
        assert "url_info" in self.skill.provides

    @pytest.mark.asyncio
    async def test_writes_url_info_and_link_id(self, make_context):
        """The task URL is parsed into state together with the link id"""
        task = TaskRequest(
            kind=TaskKind.HYDRATE,
            link_id="link-1",
            url="https://www.reddit.com/r/webdev/comments/abc123/my_project/",
        )
        context = make_context(task=task)

        info = await self.skill.run(None, context)

        assert isinstance(info, ParsedUrlInfo)
        assert context.state["url_info"] is info
        assert context.state["link_id"] == "link-1"

    @pytest.mark.asyncio
    async def test_args_url_overrides_task(self, make_context):
        """A URL in step args takes precedence over the task URL"""
        task = TaskRequest(kind=TaskKind.HYDRATE, url="https://example.com/a")
        context = make_context(task=task)

        await self.skill.run({"url": "https://arxiv.org/abs/2301.12345"}, context)

        assert context.state["url_info"].provider == Provider.ARXIV
        assert "link_id" not in context.state

    @pytest.mark.asyncio
    async def test_unknown_provider_warns(self, make_context, sink):
        """Unknown providers are logged but do not fail"""
        task = TaskRequest(kind=TaskKind.HYDRATE, url="https://example.com/post")
        context = make_context(task=task)

        info = await self.skill.run(None, context)

        assert info.provider == Provider.UNKNOWN
        assert "agent.skill.parse_url.unknown_provider" in sink.messages("warning")

    @pytest.mark.asyncio
    async def test_missing_url_raises(self, make_context):
        """A task without any URL cannot be parsed"""
        with pytest.raises(ValueError, match="requires a URL"):
            await self.skill.run(None, make_context())
