from birthday_book.services.pagination import PaginationData
from birthday_book.views.helpers import anchor, out


def showing_statement(data: PaginationData) -> str:
    return (
        f"Showing {data.first_row} to {data.last_row} "
        f"of {data.total_rows} {out(data.record_name_plural)}."
    )


def render_pagination(data: PaginationData) -> str:
    parts: list[str] = []
    if data.include_showing_statement:
        parts.append(f"<p>{showing_statement(data)}</p>")

    total_pages = data.total_pages
    if total_pages > 1:
        links: list[str] = []
        if data.current_page > 1:
            links.append(anchor(f"{data.pagination_root}/{data.current_page - 1}", "Prev"))
        for page in range(1, total_pages + 1):
            if page == data.current_page:
                links.append(f'<span class="current">{page}</span>')
            else:
                links.append(anchor(f"{data.pagination_root}/{page}", str(page)))
        if data.current_page < total_pages:
            links.append(anchor(f"{data.pagination_root}/{data.current_page + 1}", "Next"))
        parts.append(f'<div class="pagination">{"".join(links)}</div>')

    return "".join(parts)
