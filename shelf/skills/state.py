"""
Execution state shared by the steps of one plan run

The state is an open key-value bag. Producer and consumer skills agree on
keys informally and each skill declares the keys it reads (``requires``)
and writes (``provides``). Keys currently in use:

    url_info          ParsedUrlInfo     parse_url -> hydrate_provider, upsert_link
    link_id           str               parse_url -> upsert_link
    credentials       dict              caller -> hydrate_provider
    hydration         HydrationResult   hydrate_provider
    hydrated_content  HydratedContent   hydrate_provider -> upsert_link (optional)
    note              str               caller -> upsert_link (optional)
    persist_link      PersistLinkInput  upsert_link -> upsert_embedding

Keys are only ever added; nothing in the engine removes them.
"""

from typing import Any


class StateKeyError(KeyError):
    """Raised when a skill's required input is missing from state"""

    def __init__(self, key: str, skill: str | None = None) -> None:
        self.key = key
        self.skill = skill
        if skill:
            self.message = f"{skill} requires '{key}' in state"
        else:
            self.message = f"Missing required state key '{key}'"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ExecutionState(dict[str, Any]):
    """Mutable state bag created once per plan run"""

    def require(self, key: str, *, skill: str | None = None) -> Any:
        """
        Return a required value, failing clearly when it is absent

        A key holding None counts as absent.

        Raises:
            StateKeyError: If the key is missing or None
        """
        value = self.get(key)
        if value is None:
            raise StateKeyError(key, skill)
        return value
