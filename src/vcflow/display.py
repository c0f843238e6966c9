"""Rich terminal display for vcflow."""

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table


console = Console()


def print_command(args: list[str]) -> None:
    """Echo a git command before it runs."""
    console.print(f"[dim]$ {escape(' '.join(args))}[/dim]")


def print_lines(lines: list[str]) -> None:
    """Print plain lines, e.g. branch names, without markup."""
    for line in lines:
        console.print(line, markup=False, highlight=False)


def print_branch_menu(options: list[str]) -> None:
    """Print numbered branch options."""
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("No", style="bold cyan", justify="right")
    table.add_column("Branch")

    for i, option in enumerate(options):
        table.add_row(f"{i + 1})", escape(option))

    console.print(table)


def prompt_branch_choice(options: list[str]) -> int:
    """Ask the user to pick one of several branches, returns the 0-based index."""
    print_branch_menu(options)
    choice = Prompt.ask(
        f"Pick a number [1-{len(options)}]",
        choices=[str(i + 1) for i in range(len(options))],
        show_choices=False,
        console=console,
    )
    return int(choice) - 1


def print_switched(branch: str) -> None:
    """Print branch switch message."""
    console.print(f"Switched to branch '[bold]{escape(branch)}[/bold]'")


def print_created(branch: str, base: str) -> None:
    """Print branch creation message."""
    console.print(
        f"Created branch '[bold]{escape(branch)}[/bold]' from '[bold]{escape(base)}[/bold]'"
    )


def print_merged(source: str, target: str) -> None:
    """Print merge message."""
    console.print(f"Merged '[bold]{escape(source)}[/bold]' into '[bold]{escape(target)}[/bold]'")


def print_pull_request_url(url: str) -> None:
    """Print the URL being opened."""
    console.print(f"Opening pull request: [link={url}]{escape(url)}[/link]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")


def print_message(message: str) -> None:
    """Print a plain message."""
    console.print(message, markup=False, highlight=False)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")
