"""
Pagination over the candidates listing.

Pages are fetched strictly one after another: the next page is only known
to exist once the current response is in, and Teamtailor's rate limit is
shared across requests.
"""

import math
from typing import Callable, List, Optional

from .client import TeamtailorClient
from .config import ExportConfig
from .errors import PaginationLimitExceeded
from .flatten import candidate_to_rows, index_included
from .logger import get_logger
from .models import CsvRow, Page


def total_pages_from_meta(page: Page, page_size: int) -> Optional[int]:
    """
    Estimate the page count from a page's meta block.

    Only used to label progress; the loop ends on the missing next link.
    """
    if page.record_count:
        return math.ceil(page.record_count / page_size)
    if page.page_count:
        return page.page_count
    return None


def page_label(current_page: int, total_pages: Optional[int]) -> str:
    return f"{current_page}/{total_pages}" if total_pages else str(current_page)


def fetch_all_candidates(
    config: ExportConfig,
    client_factory: Callable[[ExportConfig], TeamtailorClient] = TeamtailorClient,
) -> List[CsvRow]:
    """
    Fetch every candidates page and flatten it into CSV rows.

    Args:
        config: Export settings, including the API key
        client_factory: Builds the page client (override in tests)

    Returns:
        Rows for all candidates, in page and payload order

    Raises:
        ExportError: The first failure from any page; nothing partial is returned
    """
    logger = get_logger()
    all_rows: List[CsvRow] = []
    current_page = 1
    total_pages: Optional[int] = None

    with client_factory(config) as client:
        while True:
            logger.info(f"  Fetching page {page_label(current_page, total_pages)}...")
            page = client.fetch_page(current_page)
            logger.record_page()

            if total_pages is None and page.has_meta:
                total_pages = total_pages_from_meta(page, config.page_size)

            job_apps = index_included(page.included)
            for candidate in page.data:
                rows = candidate_to_rows(candidate, job_apps)
                all_rows.extend(rows)
                logger.record_rows(len(rows))

            if not page.has_next:
                break
            if config.max_pages is not None and current_page >= config.max_pages:
                logger.error(
                    "Upstream still paginating at page limit",
                    max_pages=config.max_pages,
                    next_link=page.next_link,
                )
                raise PaginationLimitExceeded(config.max_pages)
            current_page += 1

    logger.debug("Pagination finished", pages=current_page, rows=len(all_rows))
    return all_rows
