"""
Catalog package for the search interface.

Query construction, link derivation, the Open Library client, the
search state machine and the routes that expose it all live here. The
HTML routes keep one controller per browser session; the JSON routes
are stateless.
"""

from .router import api_router, ui_router  # noqa: F401
