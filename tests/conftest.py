# tests/conftest.py

from typing import Dict

import pytest

from application.services import PracticeService
from domain.entities import Player
from infrastructure.persistence import Database
from tests.helpers import FakeMatchSource


@pytest.fixture
def db(tmp_path):
    """Fresh practice database in a temporary directory."""
    database = Database(tmp_path / "practice.sqlite")
    yield database
    database.close()


@pytest.fixture
def source():
    return FakeMatchSource()


@pytest.fixture
def service(db, source):
    return PracticeService(
        db,
        source,
        scan_options={"list_delay_s": 0, "detail_delay_s": 0, "start_time": None},
    )


@pytest.fixture
def roster(service) -> Dict[str, Player]:
    """Three linked players and one without a Riot account."""
    return {
        "top": service.add_player("Alpha", account_handle="puuid-a", role="Top", region_code="euw"),
        "jungle": service.add_player("Bravo", account_handle="puuid-b", role="Jungle", region_code="euw"),
        "mid": service.add_player("Charlie", account_handle="puuid-c", role="Mid", region_code="na"),
        "support": service.add_player("Delta", role="Support", region_code="euw"),
    }
