from birthday_book.core.config import settings
from birthday_book.views.helpers import out


STYLES = """
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; margin: 2rem; color: #1e293b; }
.button { display: inline-block; padding: 0.4rem 1rem; background: #3b82f6; color: #fff; border: 0; border-radius: 0.25rem; text-decoration: none; cursor: pointer; }
.button.alt { background: #e2e8f0; color: #1e293b; }
.button.danger { background: #dc2626; }
.card { border: 1px solid #cbd5e1; border-radius: 0.5rem; max-width: 640px; }
.card-heading { padding: 0.75rem 1rem; background: #f1f5f9; font-weight: 600; }
.card-body { padding: 1rem; }
.records-table { border-collapse: collapse; width: 100%; }
.records-table th, .records-table td { border: 1px solid #cbd5e1; padding: 0.4rem 0.6rem; text-align: left; }
.flash { padding: 0.75rem 1rem; background: #dcfce7; border-radius: 0.25rem; margin-bottom: 1rem; }
.validation-error { color: #dc2626; font-size: 0.875rem; margin-bottom: 0.5rem; }
.detail-row { display: flex; padding: 0.4rem 0; border-bottom: 1px solid #e2e8f0; }
.detail-label { width: 10rem; font-weight: 600; }
.pagination a, .pagination span { margin-right: 0.4rem; }
.text-center { text-align: center; }
.text-right { text-align: right; }
label, input { display: block; margin-bottom: 0.5rem; }
"""


def flash_block(message: str | None) -> str:
    if not message:
        return ""
    return f'<p class="flash">{out(message)}</p>'


def render_page(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{out(title)} | {out(settings.project_name)}</title>
    <style>{STYLES}</style>
</head>
<body>
{body}
</body>
</html>
"""


def render_error_page() -> str:
    body = (
        "<h1>Something went wrong</h1>"
        "<p>The request could not be completed. Please try again later.</p>"
    )
    return render_page("Error", body)
