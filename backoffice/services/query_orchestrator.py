"""Query Orchestrator — composes search and pagination into one paged view.

Invariants:
    - Pagination operates on the filtered sequence, never on the unfiltered set
    - Blank search query means "all records"
    - Out-of-range pages yield an empty page, not an error
"""

import logging

from backoffice.core.pagination import PagedResult, paginate
from backoffice.core.repository_protocols import ResourceRepository

logger = logging.getLogger(__name__)


async def fetch_page(
    repository: ResourceRepository,
    search_query: str | None,
    page_number: int,
    page_size: int,
) -> PagedResult:
    query = (search_query or "").strip()
    if query:
        records = await repository.search(query)
    else:
        records = await repository.get_all()
    page = paginate(records, page_number, page_size)
    logger.debug(
        f"Listed {repository.kind.value} page {page.page_number}/{page.total_pages}",
        extra={
            "resource_kind": repository.kind.value,
            "total_count": page.total_count,
            "page_number": page.page_number,
        },
    )
    return page
