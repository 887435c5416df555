# booksearch/config.py
"""
Hardcoded settings for the search interface.

Open Library needs no credentials and the endpoints never change
between deployments, so everything lives here as plain constants.
"""

import logging

OPENLIBRARY_BASE_URL = "https://openlibrary.org"
SEARCH_URL = f"{OPENLIBRARY_BASE_URL}/search.json"
AUTHORS_URL = f"{OPENLIBRARY_BASE_URL}/authors"
COVERS_BASE_URL = "https://covers.openlibrary.org/b"
AMAZON_SEARCH_URL = "https://www.amazon.com/s"

# Records requested per query and the last page the UI lets you reach.
PAGE_SIZE = 20
PAGE_CAP = 50

COVER_SIZES = ("S", "M", "L")

REQUEST_HEADERS = {
    "User-Agent": "booksearch/1.0 (+https://openlibrary.org/developers/api)",
    "Accept": "application/json",
}

SESSION_COOKIE = "booksearch_session"
MAX_SESSIONS = 1000

LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
