import os
import sys
from pathlib import Path

import httpx
import pytest
import structlog
from fastapi.testclient import TestClient

_ROOT_DIR = Path(__file__).resolve().parents[1]
if str(_ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(_ROOT_DIR))

os.environ.setdefault("USER_SEARCH_URL", "http://user-search.local/search")
os.environ.setdefault("USER_SEARCH_TIMEOUT", "1.0")
os.environ.setdefault("USER_SEARCH_MAX_LIMIT", "25")

from usersearch.services.search_client import SearchClient  # noqa: E402

from search_server import ACCESS_TOKEN, SEARCH_URL, Dataset, create_app  # noqa: E402

DATASET_PATH = Path(__file__).parent / "data" / "dataset.json"


@pytest.fixture(autouse=True)
def configure_structlog():
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture(scope="session")
def dataset():
    return Dataset.from_file(DATASET_PATH)


@pytest.fixture()
def search_server(dataset):
    app = create_app(dataset, access_token=ACCESS_TOKEN)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def client(search_server):
    return SearchClient(ACCESS_TOKEN, SEARCH_URL, http_client=search_server)


@pytest.fixture()
def mock_client():
    """Build a SearchClient whose requests are answered by ``handler``."""
    opened = []

    def _make(handler, access_token=ACCESS_TOKEN):
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        opened.append(http_client)
        return SearchClient(access_token, SEARCH_URL, http_client=http_client)

    yield _make
    for http_client in opened:
        http_client.close()
