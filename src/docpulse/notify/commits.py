"""Documentation-change reports for configured GitHub repositories.

Lists the most recent commits of every repository in repos.json and reports
those touching files under the documentation prefix.
"""

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from ..config import load_url_list
from ..errors import ServiceError
from ..log import get_logger
from ..retrieval.github import GitHubClient, parse_repo_url
from ..schemas.notifications import CommitReport

logger = get_logger("commits")

NOT_CONFIGURED = "No repositories configured in repos.json"
NO_CHANGES = "No documentation changes found in recent commits."

def format_report(report: CommitReport) -> str:
    files = "\n".join(report.changed_files)
    return (
        f"*Repo:* {report.repository}\n"
        f"*Date:* {report.timestamp}\n"
        f"*URL:* {report.url}\n"
        f"*Changed files:*\n{files}"
    )

def format_reports(reports: List[CommitReport]) -> str:
    if not reports:
        return NO_CHANGES
    return "\n\n".join(format_report(r) for r in reports)

class CommitNotifier:
    def __init__(
        self,
        github: GitHubClient,
        repos_file: Union[str, Path],
        docs_prefix: str = "docs/",
        commits_per_repo: int = 3,
    ):
        self.github = github
        self.repos_file = repos_file
        self.docs_prefix = docs_prefix
        self.commits_per_repo = commits_per_repo

    async def _commit_report(self, owner: str, repo: str, commit: Dict[str, Any]) -> Optional[CommitReport]:
        sha = commit.get("sha")
        try:
            detail = await self.github.get_commit(owner, repo, sha)
            doc_files = [
                f for f in (detail.get("files") or [])
                if f.get("filename", "").startswith(self.docs_prefix)
            ]
            if not doc_files:
                return None
            return CommitReport(
                repository=repo,
                timestamp=commit["commit"]["author"]["date"],
                url=commit["html_url"],
                changed_files=[f"- {f['filename']} ({f.get('status')})" for f in doc_files],
            )
        except Exception:
            logger.exception(f"Error fetching commit details for {repo}/{sha}")
            return None

    async def _repo_reports(self, link: str) -> List[CommitReport]:
        parsed = parse_repo_url(link)
        if not parsed:
            logger.warning(f"Skipping non-GitHub repository link: {link}")
            return []

        owner, repo = parsed
        try:
            commits = await self.github.list_commits(owner, repo, per_page=self.commits_per_repo)
        except Exception:
            logger.exception(f"Error fetching commits for {owner}/{repo}")
            return []

        reports = await asyncio.gather(*(self._commit_report(owner, repo, c) for c in commits))
        return [r for r in reports if r is not None]

    async def collect(self, links: List[str]) -> List[CommitReport]:
        """
        Fetches every repository concurrently.
        Reports keep repository input order, then commit order.
        """
        per_repo = await asyncio.gather(*(self._repo_reports(link) for link in links))
        return [report for reports in per_repo for report in reports]

    async def run(self) -> str:
        """
        Returns the formatted report text, NOT_CONFIGURED or NO_CHANGES.
        """
        links = load_url_list(self.repos_file)
        if not links:
            return NOT_CONFIGURED

        try:
            reports = await self.collect(links)
        except Exception as e:
            logger.exception("Commit notification failed")
            raise ServiceError(
                "Failed to fetch GitHub commits. Please check your configuration and token."
            ) from e

        logger.info(f"Found {len(reports)} documentation commits across {len(links)} repositories")
        return format_reports(reports)
