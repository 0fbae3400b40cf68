import json
from pathlib import Path

import pytest
from tracker_mcp.client import TrackerClient

FIXTURES = Path(__file__).parent / "fixtures"
BASE_URL = "https://tracker.test"
API = BASE_URL + "/services/v5"


def read_fixture(name: str):
    with open(FIXTURES / name, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def load_fixture():
    return read_fixture


@pytest.fixture
def client():
    return TrackerClient("api-token", base_url=BASE_URL)
