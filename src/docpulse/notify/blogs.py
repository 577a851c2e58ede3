"""Newest-post lookup for the blogs listed in links.json."""

import asyncio
from pathlib import Path
from typing import List, Optional, Union
from ..config import read_url_list
from ..errors import ConfigurationMissing
from ..log import get_logger
from ..retrieval.blog import extract_first_post
from ..retrieval.fetch import Fetcher
from ..schemas.notifications import BlogPost

logger = get_logger("blogs")

class BlogNotifier:
    def __init__(self, fetcher: Fetcher, links_file: Union[str, Path]):
        self.fetcher = fetcher
        self.links_file = links_file

    async def _latest_post(self, link: str) -> Optional[BlogPost]:
        try:
            html = await self.fetcher.fetch_url(link)
            post = extract_first_post(html, link)
            if post is None:
                logger.info(f"No post found on {link}")
            return post
        except Exception as e:
            logger.error(f"Error fetching blog at {link}: {e}")
            return None

    async def collect(self, links: List[str]) -> List[BlogPost]:
        posts = await asyncio.gather(*(self._latest_post(link) for link in links))
        return [p for p in posts if p is not None]

    async def run(self) -> List[BlogPost]:
        """
        Returns the first post of every configured blog, in configuration order.
        Raises ConfigurationMissing if links.json cannot be read.
        """
        logger.info("Fetching the blog pages...")
        try:
            links = read_url_list(self.links_file)
        except ConfigurationMissing as e:
            logger.error(f"Error reading blog links: {e}")
            raise ConfigurationMissing("Failed to read blog configuration.") from e

        if not links:
            logger.info("No blog links configured in links.json")
            return []

        return await self.collect(links)
