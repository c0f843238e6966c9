"""CLI for vcflow."""

import rich_click as click

from vcflow import display

# Configure rich-click for pretty help output
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running 'vc --help' for more information."
click.rich_click.MAX_WIDTH = 100
click.rich_click.STYLE_OPTION = "bold cyan"
click.rich_click.STYLE_ARGUMENT = "bold cyan"
click.rich_click.STYLE_COMMAND = "bold green"
click.rich_click.STYLE_SWITCH = "bold yellow"
click.rich_click.COMMAND_GROUPS = {
    "vc": [
        {
            "name": "General",
            "commands": [
                "aliases",
                "discard",
                "commit-all",
                "commit-all-push",
                "commit-all-pull-request",
                "commit-history",
                "push",
            ],
        },
        {
            "name": "Branching",
            "commands": [
                "current-branch",
                "checkout",
                "checkout-new",
                "search",
                "branch-exists",
                "branch-rename",
                "branch-delete",
                "merge",
                "sanitize-branch-name",
            ],
        },
        {
            "name": "Workflow",
            "commands": [
                "master",
                "sprint",
                "new-bug",
                "new-instant",
                "new-story",
                "pull-request",
                "update",
                "update-sprint",
            ],
        },
    ]
}
from vcflow.config import ALIASES
from vcflow.engine import create_engine
from vcflow.git import GitError, forward
from vcflow.models import Outcome
from vcflow.naming import sanitize_branch_name
from vcflow.resolver import resolve_command


class GitCommand(click.RichCommand):
    """Hands a command and all of its arguments to git untouched."""

    def __init__(self, name: str):
        super().__init__(name, add_help_option=False, help="Forwarded to git.")

    def parse_args(self, ctx, args):
        ctx.args = list(args)
        return ctx.args

    def invoke(self, ctx):
        ctx.exit(forward([self.name, *ctx.args]))


class VcGroup(click.RichGroup):
    """Command group that understands aliases and forwards unknown commands to git."""

    def get_command(self, ctx, cmd_name):
        name = resolve_command(cmd_name, self.commands, ALIASES)
        if name is None:
            return GitCommand(cmd_name)
        return self.commands[name]

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except GitError as e:
            display.print_error(str(e))
            ctx.exit(1)


@click.group(
    "vc",
    cls=VcGroup,
    invoke_without_command=True,
    context_settings={
        "help_option_names": ["-h", "--help"],
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
@click.pass_context
def cli(ctx):
    """**vc** - git with shorthand branch workflows.

    Any command vc doesn't know is handed to git as is, so `vc status`
    runs `git status`.

    **Examples:**

        vc search sprint_70             Find branches containing 'sprint_70'

        vc c login                      Checkout a branch, or pick one matching 'login'

        vc ns 70 "SS-1234 Login page"   New story branch from release/sprint_70

        vc me master release/sprint_70  Merge master into the sprint release branch

    **Branch conventions:**

        sprint_<N>/<TICKET>_<summary>          Story, based on release/sprint_<N>

        sprint_<N>/bug/<TICKET>_<summary>      Bug, based on master

        sprint_<N>/instant/<TICKET>_<summary>  Instant, based on master

    **Environment:**

        VC_REMOTE          Remote name (default: origin)

        VC_MAIN_BRANCH     Main branch (default: master)

        VC_TICKET_PREFIX   Ticket key prefix (default: SS)

        VC_TICKET_URL      Ticket browse URL prefix used in pull request bodies

        VC_VERBOSE         Echo every git command before it runs
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


@cli.result_callback()
def _exit_with_outcome(outcome, **kwargs):
    """Turn a workflow outcome into the process exit code."""
    if isinstance(outcome, Outcome):
        click.get_current_context().exit(outcome.exit_code)


@cli.command("aliases")
def aliases():
    """List the command shorthands."""
    display.print_lines([f"{short:<6}{name}" for short, name in sorted(ALIASES.items())])
    return Outcome.OK


# General


@cli.command()
def discard():
    """Discard all (un)staged local changes."""
    return create_engine().discard()


@cli.command("commit-all")
@click.argument("message")
def commit_all(message: str):
    """Commit all (un)staged changes."""
    return create_engine().commit_all(message)


@cli.command("commit-all-push")
@click.argument("message")
def commit_all_push(message: str):
    """Commit all (un)staged changes and push them."""
    return create_engine().commit_all_push(message)


@cli.command("commit-all-pull-request")
@click.argument("message")
def commit_all_pull_request(message: str):
    """Commit all (un)staged changes, push them and open a pull request."""
    return create_engine().commit_all_pull_request(message)


@cli.command("commit-history")
@click.argument("max_count", metavar="MAXCOUNT", type=int, default=5, required=False)
def commit_history(max_count: int):
    """Show a list of recent commits (default 5)."""
    return create_engine().commit_history(max_count)


@cli.command()
def push():
    """Push the current branch to the remote and track it."""
    return create_engine().push()


# Branching


@cli.command("current-branch")
def current_branch():
    """Display the currently active branch name."""
    display.print_message(create_engine().current_branch())
    return Outcome.OK


@cli.command()
@click.argument("branch")
def checkout(branch: str):
    """Checkout a branch that exists locally or remotely.

    If the branch doesn't exist the name is used as a search phrase instead.
    """
    return create_engine().checkout(branch)


@cli.command("checkout-new")
@click.argument("branch")
@click.argument("base", required=False)
def checkout_new(branch: str, base: str | None):
    """Checkout a new branch, optionally from a BASE other than the current branch."""
    return create_engine().checkout_new(branch, base)


@cli.command()
@click.argument("phrase")
@click.option(
    "--shallow", "-s", is_flag=True,
    help="Don't fetch from the remotes when nothing matches.",
)
def search(phrase: str, shallow: bool):
    """Search for branches containing PHRASE."""
    results = create_engine().search(phrase, shallow=shallow)
    display.print_lines(results)
    return Outcome.OK if results else Outcome.NOT_FOUND


@cli.command("branch-exists")
@click.argument("branch")
def branch_exists(branch: str):
    """Print whether a branch exists."""
    exists = create_engine().git.branch_exists(branch)
    display.print_message("true" if exists else "false")
    return Outcome.OK


@cli.command("branch-rename")
@click.argument("names", nargs=-1, required=True, metavar="[OLDNAME] NEWNAME")
@click.option(
    "--force", "-f", is_flag=True,
    help="Rename the branch on the remote as well.",
)
def branch_rename(names: tuple[str, ...], force: bool):
    """Rename the current branch, or a given branch."""
    if len(names) > 2:
        raise click.UsageError("Expected [OLDNAME] NEWNAME")

    engine = create_engine()
    if len(names) == 1:
        return engine.rename_branch(names[0], remote=force)
    return engine.rename_branch(names[1], old_name=names[0], remote=force)


@cli.command("branch-delete")
@click.argument("branch")
@click.option(
    "--force", "-f", is_flag=True,
    help="Delete the branch from the remote as well, use with caution!",
)
def branch_delete(branch: str, force: bool):
    """Delete a branch locally."""
    return create_engine().delete_branch(branch, remote=force)


@cli.command()
@click.argument("source", metavar="BRANCH")
@click.argument("target", metavar="INTO", required=False)
@click.option("--push", is_flag=True, help="Push INTO after a successful merge.")
def merge(source: str, target: str | None, push: bool):
    """Merge BRANCH into INTO.

    Behaves as a regular git merge into the current branch if INTO is omitted.
    Local changes are stashed during the merge and restored afterwards.
    """
    return create_engine().merge(source, target, push=push)


@cli.command("sanitize-branch-name")
@click.argument("text")
def sanitize(text: str):
    """Print TEXT as a valid branch name."""
    display.print_message(sanitize_branch_name(text))
    return Outcome.OK


# Workflow


@cli.command()
def master():
    """Checkout the main branch and pull it."""
    return create_engine().master()


@cli.command()
@click.argument("sprint")
def sprint(sprint: str):
    """Checkout the release branch of a sprint."""
    return create_engine().sprint(sprint)


@cli.command("new-bug")
@click.argument("sprint")
@click.argument("title")
def new_bug(sprint: str, title: str):
    """Checkout a new bug branch on a sprint, based on master."""
    return create_engine().new_bug(sprint, title)


@cli.command("new-instant")
@click.argument("sprint")
@click.argument("title")
def new_instant(sprint: str, title: str):
    """Checkout a new instant branch on a sprint, based on master."""
    return create_engine().new_instant(sprint, title)


@cli.command("new-story")
@click.argument("sprint")
@click.argument("title")
def new_story(sprint: str, title: str):
    """Checkout a new story branch on a sprint, based on its release branch."""
    return create_engine().new_story(sprint, title)


@cli.command("pull-request")
def pull_request():
    """Push the active branch and open a pull request for it."""
    return create_engine().pull_request()


@cli.command()
def update():
    """Merge the relevant base branch into the current branch.

    Ticket story branches are updated with their sprint release branch,
    everything else with master.
    """
    return create_engine().update()


@cli.command("update-sprint")
@click.argument("sprint")
def update_sprint(sprint: str):
    """Merge master into a sprint release branch and push it."""
    return create_engine().update_sprint(sprint)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
