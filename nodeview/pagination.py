import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGES = 10_000
DEFAULT_MAX_ITEMS = 1_000_000

ENV_MAX_PAGES = "NODEVIEW_MAX_PAGINATION_PAGES"
ENV_MAX_ITEMS = "NODEVIEW_MAX_PAGINATION_ITEMS"


class PaginationLimitExceeded(RuntimeError):
    """Raised when a listing needs more pages or items than allowed."""


def _limit_from_env(name: str, default: int) -> int:
    raw_value = os.getenv(name, "")
    if raw_value == "":
        return default
    try:
        value = int(raw_value)
    except ValueError:
        logger.warning("Ignoring %s=%r, not an integer.", name, raw_value)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%d, must be positive.", name, value)
        return default
    return value


@dataclass(frozen=True)
class PaginationLimits:
    """
    Upper bounds on a single paginated listing.

    A listing that would cross either bound is abandoned rather than
    truncated: a partial node or pod collection can't be correlated safely.
    """

    max_pages: int = DEFAULT_MAX_PAGES
    max_items: int = DEFAULT_MAX_ITEMS

    @classmethod
    def from_env(cls) -> "PaginationLimits":
        return cls(
            max_pages=_limit_from_env(ENV_MAX_PAGES, DEFAULT_MAX_PAGES),
            max_items=_limit_from_env(ENV_MAX_ITEMS, DEFAULT_MAX_ITEMS),
        )

    def check(self, pages: int, items: int) -> None:
        """Raise if another page would be needed past either limit."""
        if pages >= self.max_pages:
            raise PaginationLimitExceeded(
                f"pagination limit of {self.max_pages} pages exceeded ({items} items read)"
            )
        if items >= self.max_items:
            raise PaginationLimitExceeded(
                f"pagination limit of {self.max_items} items exceeded ({items} items read)"
            )
