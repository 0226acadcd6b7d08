"""Command line entry point: `prflow`."""

import logging
import sys
from pathlib import Path

import click

from prflow import __version__
from prflow.client import GitHubClient
from prflow.config import FileCredentialProvider
from prflow.exceptions import ConfigurationError
from prflow.interaction import ConsolePrompter
from prflow.logging import configure_logging
from prflow.workflow import Workflow, WorkflowOptions


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON file holding githubToken (default: ./config.json, then $GITHUB_TOKEN)",
)
@click.option("--base-url", default=None, help="GitHub API base URL (for GitHub Enterprise)")
@click.option("--branch", default="test", show_default=True, help="Branch to create")
@click.option("--base", default="main", show_default=True, help="Branch to start from")
@click.option("--path", "file_path", default="Hello.txt", show_default=True, help="File to write")
@click.option("--content", default="Hello world", show_default=True, help="File content")
@click.option(
    "--content-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read the file content from a local file instead of --content",
)
@click.option("--title", default=None, help="Pull request title (default: 'Add <path>')")
@click.option("--body", default=None, help="Pull request body")
@click.option("--verbose", "-v", is_flag=True, help="Log every GitHub API call")
@click.version_option(__version__, prog_name="prflow")
def main(
    config_path: Path | None,
    base_url: str | None,
    branch: str,
    base: str,
    file_path: str,
    content: str,
    content_file: Path | None,
    title: str | None,
    body: str | None,
    verbose: bool,
) -> None:
    """Create a branch, add a file and open a pull request in one of your repositories."""
    configure_logging(level=logging.DEBUG if verbose else logging.WARNING)

    credentials = FileCredentialProvider(config_path)
    try:
        credentials.get_token()
    except ConfigurationError as e:
        click.secho(f"Failed to load configuration. Error: {e.message}", fg="red", err=True)
        sys.exit(1)

    config = credentials.config
    options = WorkflowOptions(
        branch_name=branch,
        base_branch=base,
        file_path=file_path,
        content=content_file.read_bytes() if content_file else content,
        title=title,
        body=body,
    )

    with GitHubClient(
        base_url=base_url or config.base_url,
        timeout=config.timeout,
    ) as client:
        result = Workflow(client, credentials, ConsolePrompter()).run(options)

    if not result.completed:
        click.echo("Exiting program.")
        sys.exit(1)


if __name__ == "__main__":
    main()
