"""Search logging: record what users searched for. Never fails the search itself."""

from __future__ import annotations

import logging

from doclibrary.application.interfaces.repositories import ISearchLogRepository
from doclibrary.domain.exceptions import DocLibraryException

logger = logging.getLogger(__name__)


class SearchLogService:
    def __init__(self, search_log_repo: ISearchLogRepository) -> None:
        self.search_log_repo = search_log_repo

    async def log_search(
        self,
        search_term: str,
        user_id: str | None,
        results_count: int,
        search_time: float,
    ) -> None:
        """Insert a search_logs row; failures are logged and swallowed."""
        try:
            await self.search_log_repo.insert(
                search_term, user_id, results_count, search_time
            )
        except DocLibraryException as e:
            logger.error("Error logging search %r: %s", search_term, e.message)
