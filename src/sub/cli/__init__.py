"""sub CLI - find and replace from the command line."""

import typer

from sub.cli.replace import replace

app = typer.Typer(
    name="sub",
    help="Find and replace text in files or standard input",
    add_completion=False,
)

app.command("replace", help="Replace a pattern in files or standard input")(replace)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
