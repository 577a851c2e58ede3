"""GitHub REST API access for the commit notifier."""

import re
import httpx
from typing import Any, Dict, List, Optional, Tuple

GITHUB_API_BASE = "https://api.github.com"

REPO_URL_RE = re.compile(r"github\.com/([^/]+)/([^/]+)")

def parse_repo_url(url: str) -> Optional[Tuple[str, str]]:
    """
    Returns (owner, repo) for URLs containing github.com/<owner>/<repo>, else None.
    """
    match = REPO_URL_RE.search(url)
    if not match:
        return None
    return match.group(1), match.group(2)

class GitHubClient:
    def __init__(self, http: httpx.AsyncClient, token: Optional[str] = None, base_url: str = GITHUB_API_BASE):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "docpulse/1.0",
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        resp = await self.http.get(f"{self.base_url}{path}", params=params, headers=self.headers)
        resp.raise_for_status()
        return resp.json()

    async def list_commits(self, owner: str, repo: str, per_page: int = 3) -> List[Dict[str, Any]]:
        return await self._get(f"/repos/{owner}/{repo}/commits", params={"per_page": per_page})

    async def get_commit(self, owner: str, repo: str, ref: str) -> Dict[str, Any]:
        """Full commit detail, including the `files` list."""
        return await self._get(f"/repos/{owner}/{repo}/commits/{ref}")
