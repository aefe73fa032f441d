import json
import pytest
import yaml
from vidgal.config.models import AppConfig
from vidgal.domain.errors import FetchError
from vidgal.domain.normalizer import EntryNormalizer
from vidgal.domain.paths import PathResolver
from vidgal.infrastructure.event_bus import EventBus
from vidgal.infrastructure.http_fetcher import FetchResponse

# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def sample_config(tmp_path):
    """Returns a sample AppConfig object for testing."""
    return AppConfig(
        source={
            "base_url": "http://gallery.test/",
            "videos_dir": "videos/",
            "manifest_name": "videos.json",
            "timeout_s": 5.0,
        },
        general={
            "extensions": [".mp4"],
            "sensitive_pattern": "nsfw",
            "log_path": str(tmp_path / "logs" / "discovery.log"),
            "debug": False,
        },
    )

@pytest.fixture
def config_yaml_path(tmp_path):
    """Creates a temporary YAML config file."""
    conf_dir = tmp_path / "conf"
    conf_dir.mkdir()
    conf_file = conf_dir / "vidgal.yaml"

    content = {
        'source': {
            'base_url': 'http://gallery.test',
            'videos_dir': '/media/',
            'manifest_name': 'index.json',
        },
        'general': {
            'extensions': ['mp4', 'WEBM'],
            'log_path': str(tmp_path / 'vidgal.log'),
        },
    }

    with open(conf_file, 'w') as f:
        yaml.dump(content, f)

    return conf_file

# ============================================================================
# EventBus Fixtures
# ============================================================================

@pytest.fixture
def event_bus():
    """Returns a fresh EventBus instance."""
    return EventBus()

# ============================================================================
# Fetch Fixtures
# ============================================================================

class FakeFetcher:
    """In-memory fetcher. Unknown URLs answer 404; failures map URL -> exception to raise."""

    def __init__(self, responses=None, failures=None):
        self.responses = dict(responses or {})
        self.failures = dict(failures or {})
        self.requests = []

    def _lookup(self, url):
        self.requests.append(url)
        if url in self.failures:
            raise self.failures[url]
        status, body = self.responses.get(url, (404, "Not Found"))
        if not isinstance(body, str):
            body = json.dumps(body)
        return status, body

    def fetch_text(self, url):
        status, body = self._lookup(url)
        return FetchResponse(status=status, body=body)

    def fetch_json(self, url):
        status, body = self._lookup(url)
        if not 200 <= status < 300:
            return status, None
        return status, json.loads(body)


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def unreachable():
    """Builds the FetchError a transport failure produces."""
    def _make(url):
        return FetchError(f"Request to {url} failed: connection refused", url=url)
    return _make


@pytest.fixture
def normalizer():
    return EntryNormalizer(PathResolver("videos/"))


@pytest.fixture
def listing_html():
    """Builds an Apache-style autoindex page linking to the given hrefs."""
    def _build(*hrefs):
        rows = "\n".join(f'<tr><td><a href="{href}">{href}</a></td></tr>' for href in hrefs)
        return (
            "<html><head><title>Index of /videos</title></head><body>"
            "<h1>Index of /videos</h1><table>"
            '<tr><th><a href="?C=N;O=D">Name</a></th></tr>'
            f"{rows}</table></body></html>"
        )
    return _build


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
