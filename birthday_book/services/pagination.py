from dataclasses import dataclass

from birthday_book.core.config import settings


@dataclass(frozen=True)
class PageSizePreference:
    """Per-session choice of how many friends to list per page."""

    selected_index: int | None = None

    @property
    def effective_index(self) -> int:
        if self.selected_index is None:
            return settings.default_per_page_index
        return self.selected_index

    @property
    def limit(self) -> int:
        if self.selected_index is None:
            return settings.default_limit
        return settings.per_page_options[self.selected_index]


def normalize_option_index(index: int) -> int:
    """Out-of-range indexes fall back to the default option."""
    if 0 <= index < len(settings.per_page_options):
        return index
    return settings.default_per_page_index


def compute_offset(page: int, limit: int) -> int:
    return (page - 1) * limit if page > 1 else 0


@dataclass(frozen=True)
class PaginationData:
    total_rows: int
    limit: int
    current_page: int
    pagination_root: str
    record_name_plural: str = "friends"
    include_showing_statement: bool = True

    @property
    def total_pages(self) -> int:
        if self.total_rows <= 0:
            return 0
        return (self.total_rows + self.limit - 1) // self.limit

    @property
    def first_row(self) -> int:
        if self.total_rows == 0:
            return 0
        return compute_offset(self.current_page, self.limit) + 1

    @property
    def last_row(self) -> int:
        return min(compute_offset(self.current_page, self.limit) + self.limit, self.total_rows)
