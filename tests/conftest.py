"""Pytest fixtures: a fake Challonge API and a controllable clock."""

import pytest
from fake_challonge import (
    FIXTURE_DATE,
    FIXTURE_TOURNAMENTS,
    FakeChallonge,
    FakeClock,
    fixture_roster_size,
    roster_pages,
    tournaments_page,
)


@pytest.fixture
def fake() -> FakeChallonge:
    fake = FakeChallonge()
    items = list(FIXTURE_TOURNAMENTS.items())
    fake.tournament_pages[FIXTURE_DATE] = [
        tournaments_page(*items[0:2]),
        tournaments_page(*items[2:4]),
        tournaments_page(*items[4:6]),
    ]
    for tournament_id in FIXTURE_TOURNAMENTS:
        fake.participant_pages[tournament_id] = roster_pages(fixture_roster_size(tournament_id))
    return fake


@pytest.fixture
def client(fake):
    client = fake.client()
    yield client
    client.close()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
