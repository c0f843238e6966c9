"""Pull request URLs for the supported repository hosts."""

import re
import shutil
import subprocess
import sys
from dataclasses import dataclass
from urllib.parse import quote


@dataclass(frozen=True)
class RepositoryHost:
    """A hosting provider recognized by the shape of its remote URL."""

    name: str
    pattern: re.Pattern
    endpoint: str  # Formatted with repository, base and branch

    def match(self, push_url: str) -> str | None:
        """Get the OWNER/REPO part of a push URL, None if it is not this host."""
        match = self.pattern.search(push_url.strip())
        return match.group("repository") if match else None


HOSTS = [
    RepositoryHost(
        name="github",
        pattern=re.compile(r"github\.com[:/](?P<repository>[^/]+/[^/]+?)\.git$"),
        endpoint="https://github.com/{repository}/compare/{base}...{branch}?expand=1",
    ),
    RepositoryHost(
        name="bitbucket",
        pattern=re.compile(r"bitbucket\.org/(?P<repository>[^/]+/[^/]+?)\.git$"),
        endpoint=(
            "https://bitbucket.org/{repository}/pull-requests/new"
            "?source={repository}:{branch}"
        ),
    ),
]

BODY_TEMPLATE = """### Ticket:
{ticket}

### Description:
Add your custom description

### How to test:
1. See code"""


def build_endpoint(push_url: str, base: str, branch: str) -> str | None:
    """Build the compare/new pull request URL, None for unknown hosts."""
    for host in HOSTS:
        repository = host.match(push_url)
        if repository:
            return host.endpoint.format(
                repository=repository,
                base=quote(base, safe="/"),
                branch=quote(branch, safe="/"),
            )
    return None


def build_body(ticket: int | None, ticket_prefix: str, ticket_url: str | None) -> str:
    """Build the URL-encoded pull request body parameter."""
    link = "None"
    if ticket is not None and ticket_url:
        link = f"{ticket_url}{ticket_prefix}-{ticket}"

    body = BODY_TEMPLATE.format(ticket=link)
    return f"{quote('pull_request[body]', safe='')}={quote(body, safe='')}"


def opener_command() -> list[str]:
    """Get the command that opens a URL with the system default handler."""
    if sys.platform == "win32":
        # start is a cmd builtin, the empty argument is the window title
        return ["cmd", "/c", "start", ""]
    if sys.platform != "darwin" and shutil.which("xdg-open"):
        return ["xdg-open"]
    return ["open"]


def open_url(url: str) -> bool:
    """Open a URL in the browser. Returns False if no opener could be run."""
    try:
        subprocess.run([*opener_command(), url], check=False)
    except FileNotFoundError:
        return False
    return True
