"""Configuration for vcflow."""

import os
from dataclasses import dataclass
from types import MappingProxyType


# Shorthand command names
ALIASES = MappingProxyType({
    "bd": "branch-delete",
    "br": "branch-rename",
    "c": "checkout",
    "ca": "commit-all",
    "cap": "commit-all-push",
    "capr": "commit-all-pull-request",
    "cb": "current-branch",
    "ch": "commit-history",
    "cn": "checkout-new",
    "d": "discard",
    "ma": "master",
    "me": "merge",
    "nb": "new-bug",
    "ni": "new-instant",
    "ns": "new-story",
    "p": "push",
    "pr": "pull-request",
    "s": "search",
    "sp": "sprint",
    "u": "update",
    "us": "update-sprint",
})


@dataclass(frozen=True)
class Settings:
    """Settings for a single vc invocation."""

    remote: str = "origin"
    main_branch: str = "master"
    ticket_prefix: str = "SS"
    ticket_url: str | None = None  # e.g. https://example.atlassian.net/browse/
    verbose: bool = False

    def release_branch(self, sprint: int | str) -> str:
        """Get the release branch name for a sprint."""
        return f"release/sprint_{sprint}"


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """Load settings from VC_* environment variables."""
    return Settings(
        remote=os.environ.get("VC_REMOTE") or "origin",
        main_branch=os.environ.get("VC_MAIN_BRANCH") or "master",
        ticket_prefix=os.environ.get("VC_TICKET_PREFIX") or "SS",
        ticket_url=os.environ.get("VC_TICKET_URL") or None,
        verbose=_env_flag("VC_VERBOSE"),
    )
