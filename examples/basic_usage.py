#!/usr/bin/env python3
"""
Non-interactive prflow usage.

Opens a pull request adding a file to a repository without any prompts:
an existing branch is reused and an existing file is replaced.

Run with: GITHUB_TOKEN=... python examples/basic_usage.py octocat/demo
"""

import sys

from prflow import GitHubClient, PrflowError, load_config
from prflow.types import ExistingBranchDecision, PullRequestDescriptor


def main() -> None:
    if len(sys.argv) != 2 or "/" not in sys.argv[1]:
        print("Usage: basic_usage.py OWNER/REPO")
        sys.exit(2)
    owner, repo = sys.argv[1].split("/", 1)

    config = load_config()
    token = config.github_token

    with GitHubClient.from_config(config) as client:
        try:
            branch = client.refs.create_branch(
                owner,
                repo,
                "prflow-example",
                "main",
                token,
                on_exists=lambda name: ExistingBranchDecision.reuse(),
            )
            print(f"Branch {branch.branch_name}: {branch.status.value}")

            published = client.contents.publish_file(
                owner,
                repo,
                branch.branch_name,
                "Hello.txt",
                "Hello world",
                token,
                overwrite=lambda path, branch_name: True,
            )
            print(f"File {published.path}: {published.status.value}")

            result = client.pulls.create_pull_request(
                owner,
                repo,
                PullRequestDescriptor(
                    title="Add Hello.txt",
                    body="Added Hello.txt with Hello world",
                    head_branch=branch.branch_name,
                    base_branch="main",
                ),
                token,
            )
        except PrflowError as e:
            print(f"Failed: {e}")
            sys.exit(1)

    print(f"Pull request {result.status.value}: {result.html_url or 'link unavailable'}")


if __name__ == "__main__":
    main()
