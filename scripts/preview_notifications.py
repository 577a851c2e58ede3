#!/usr/bin/env python3
"""
Print what /noti commit and /noti blog would report, without Slack.
"""
import sys
import asyncio
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from docpulse.config import get_settings
from docpulse.log import setup_logging
from docpulse.notify.blogs import BlogNotifier
from docpulse.notify.commits import CommitNotifier
from docpulse.retrieval.fetch import Fetcher, build_http_client
from docpulse.retrieval.github import GitHubClient

setup_logging()


async def preview():
    settings = get_settings()
    async with build_http_client(timeout=15.0) as github_http, build_http_client() as blog_http:
        commits = CommitNotifier(
            GitHubClient(github_http, token=settings.GITHUB_TOKEN),
            settings.REPOS_FILE,
            docs_prefix=settings.DOCS_PATH_PREFIX,
            commits_per_repo=settings.COMMITS_PER_REPO,
        )
        blogs = BlogNotifier(Fetcher(blog_http, timeout=settings.BLOG_FETCH_TIMEOUT), settings.LINKS_FILE)

        print("--- commits ---")
        print(await commits.run())
        print("--- blogs ---")
        for post in await blogs.run():
            print(f"{post.title} [{post.source_host}] {post.link}")


if __name__ == "__main__":
    asyncio.run(preview())
