import sys
from pathlib import Path
from typing import Generator

import pytest

from httpatch import Client
from tests.utils.doers import StubDoer

# Ensure local source package (src/httpatch) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    monkeypatch.delenv("HTTPATCH_BASE_URL", raising=False)
    monkeypatch.delenv("HTTPATCH_TIMEOUT", raising=False)


@pytest.fixture
def base_url() -> str:
    return "https://test.example.com/api/"


@pytest.fixture
def client(base_url: str) -> Generator[Client, None, None]:
    with Client(base_url=base_url) as client:
        yield client


@pytest.fixture
def doer() -> StubDoer:
    return StubDoer(
        status_code=200,
        content=b'{"id": 1, "name": "Ada"}',
        headers={"Content-Type": "application/json"},
    )


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
