# booksearch/main.py
import logging

from fastapi import FastAPI

from . import __version__
from .catalog import api_router, ui_router
from .config import LOG_FORMAT, LOG_LEVEL


logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

app = FastAPI(
    title="Open Library Search",
    description=(
        "Browser search over the Open Library catalogue by title, author, "
        "subject and ISBN, with paginated result cards and a detail view."
    ),
    version=__version__,
)

app.include_router(ui_router)
app.include_router(api_router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
