import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse
from starlette.middleware.sessions import SessionMiddleware

from birthday_book.api import friends as friends_router
from birthday_book.core.config import settings
from birthday_book.core.logging import configure_logging
from birthday_book.db.base import Base
from birthday_book.db.session import engine
from birthday_book.repositories.friend_repository import StorageError
from birthday_book.views.layout import render_error_page


configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.project_name)


app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret_key,
    same_site="lax",
)


@app.on_event("startup")
def on_startup() -> None:
    Base.metadata.create_all(bind=engine)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> HTMLResponse:
    logger.error("Request to %s failed: %s", request.url.path, exc)
    return HTMLResponse(render_error_page(), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(friends_router.index_router)
app.include_router(friends_router.router)
