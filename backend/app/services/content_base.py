"""
ButtonUp Backend — Abstract Content Gateway
=============================================

What:  Contract for the content database behind /api/tags.
Why:   Keeps the tags route independent of the Notion SDK and testable with fakes.
"""

from abc import ABC, abstractmethod
from typing import List


class ContentGateway(ABC):

    @abstractmethod
    async def get_all_tags(self) -> List[str]:
        """
        Aggregate tags across all published content records.

        Returns:
            Each tag exactly once, sorted. Empty list when no record is tagged.

        Raises:
            ContentError: remote call failed or the database is not configured.
                All-or-nothing: a failure never yields a partial tag list.
        """
        ...
