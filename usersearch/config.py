import os

# base address of the search endpoint; SearchClient(url=...) takes precedence
SEARCH_SERVICE_URL = os.getenv("USER_SEARCH_URL")

# seconds; a slower answer fails the call with a transport timeout
SEARCH_TIMEOUT = float(os.getenv("USER_SEARCH_TIMEOUT", "1.0"))

MAX_PAGE_SIZE = int(os.getenv("USER_SEARCH_MAX_LIMIT", "25"))
if MAX_PAGE_SIZE <= 0:
    raise RuntimeError("USER_SEARCH_MAX_LIMIT must be > 0")
