# site_vectorizer/crawler/models.py
"""
Data models for the SiteVectorizer crawler.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Set, Tuple


@dataclass(slots=True)
class CrawlFrontier:
    """
    Working set of one crawl run.

    ``discovered`` keeps insertion (breadth-first) order and always contains
    every URL in ``visited``. ``queue`` may hold URLs that get visited through
    another path (or fail) before they are dequeued, so they are rechecked on pop.
    """

    visited: Set[str] = field(default_factory=set)
    queue: Deque[Tuple[str, int]] = field(default_factory=deque)
    discovered: List[str] = field(default_factory=list)
    failed: Set[str] = field(default_factory=set)

    def push(self, url: str, depth: int) -> None:
        self.queue.append((url, depth))

    def pop(self) -> Tuple[str, int]:
        return self.queue.popleft()

    def mark_visited(self, url: str) -> None:
        self.visited.add(url)
        self.discovered.append(url)

    def is_known(self, url: str) -> bool:
        """True if the URL was already fetched or already failed in this run."""
        return url in self.visited or url in self.failed
