"""Tests for the in-memory refresh cache."""

import time

import pytest

from pendingmatches.consumers.cache import RefreshCache
from pendingmatches.core import CacheKey, Organizer, TournamentSnapshot

UPDATE_TTL = 5 * 60
CLEAR_TTL = 5 * 60 * 60

KEY = CacheKey(Organizer.TRAVELING_CONTROLLER, "2006-01-02")


def snapshot(tournament_id: str, game_name: str) -> TournamentSnapshot:
    return TournamentSnapshot(
        game_name=game_name,
        tournament_id=tournament_id,
        participants={"1": "testName1", "2": "testName2"},
    )


@pytest.fixture
def cache(clock) -> RefreshCache:
    return RefreshCache(update_ttl=UPDATE_TTL, clear_ttl=CLEAR_TTL, clock=clock)


class TestCreateCache:
    def test_starts_empty(self, cache):
        assert len(cache) == 0
        assert cache.keys() == []
        assert cache.update_ttl == UPDATE_TTL
        assert cache.clear_ttl == CLEAR_TTL


class TestShouldUpdate:
    """Staleness is computed on read from the entry's publish time."""

    def test_absent_key(self, cache):
        assert cache.should_update(KEY) is True

    def test_fresh_entry(self, cache, clock):
        cache.store(KEY, [snapshot("1", "test")])
        clock.advance(UPDATE_TTL / 2)

        assert cache.should_update(KEY) is False

    def test_stale_entry(self, cache, clock):
        cache.store(KEY, [snapshot("1", "test")])
        clock.advance(UPDATE_TTL + 1)

        assert cache.should_update(KEY) is True

    def test_exactly_at_ttl_is_stale(self, cache, clock):
        cache.store(KEY, [snapshot("1", "test")])
        clock.advance(UPDATE_TTL)

        assert cache.should_update(KEY) is True

    def test_with_real_clock(self):
        cache = RefreshCache(update_ttl=0.002, clear_ttl=CLEAR_TTL)
        cache.store(KEY, [snapshot("1", "test")])
        time.sleep(0.005)

        assert cache.should_update(KEY) is True


class TestIsEmptyAt:
    def test_absent_key(self, cache):
        assert cache.is_empty_at(KEY) is True

    def test_entry_with_snapshots(self, cache):
        cache.store(KEY, [snapshot("1", "test")])
        assert cache.is_empty_at(KEY) is False

    def test_entry_without_snapshots(self, cache):
        cache.store(KEY, [])

        assert cache.is_empty_at(KEY) is True
        # Stored but empty is still a cached answer
        assert cache.should_update(KEY) is False


class TestRead:
    """Tests for filtered reads."""

    @pytest.fixture(autouse=True)
    def populated(self, cache):
        cache.store(
            KEY,
            [snapshot("1", "test"), snapshot("2", "test2"), snapshot("3", "test3")],
        )

    def test_no_filter(self, cache):
        assert [s.tournament_id for s in cache.read(KEY)] == ["1", "2", "3"]

    def test_empty_filter_keeps_everything(self, cache):
        assert len(cache.read(KEY, [])) == 3

    def test_filter_by_membership(self, cache):
        result = cache.read(KEY, ["test", "test3"])
        assert [s.game_name for s in result] == ["test", "test3"]

    def test_filter_is_not_prefix_match(self, cache):
        # "test" must not pull in "test2" or "test3"
        assert [s.game_name for s in cache.read(KEY, ["test"])] == ["test"]

    def test_filter_without_matches(self, cache):
        assert cache.read(KEY, ["Tekken 8"]) == []

    def test_absent_key_reads_empty_list(self, cache):
        other = CacheKey(Organizer.TRAVELING_CONTROLLER, "2020-01-01")
        assert cache.read(other) == []

    def test_read_returns_a_copy(self, cache):
        result = cache.read(KEY)
        result.clear()
        assert len(cache.read(KEY)) == 3


class TestStore:
    def test_replaces_wholesale(self, cache, clock):
        cache.store(KEY, [snapshot("1", "test"), snapshot("2", "test2")])
        clock.advance(10)
        entry = cache.store(KEY, [snapshot("3", "test3")])

        assert [s.tournament_id for s in cache.read(KEY)] == ["3"]
        assert entry.fetched_at == clock.now
        assert len(cache) == 1

    def test_organizers_do_not_collide(self, cache):
        sns_key = CacheKey(Organizer.SNS, KEY.date)
        cache.store(KEY, [snapshot("1", "test")])
        cache.store(sns_key, [snapshot("9", "test9")])

        assert [s.tournament_id for s in cache.read(KEY)] == ["1"]
        assert [s.tournament_id for s in cache.read(sns_key)] == ["9"]
        assert len(cache) == 2

    def test_entry_snapshots_are_immutable(self, cache):
        entry = cache.store(KEY, [snapshot("1", "test")])
        assert isinstance(entry.snapshots, tuple)


class TestClearAll:
    """should_clear_all / clear_all round trip."""

    def test_should_clear_before_first_clear(self, cache):
        assert cache.should_clear_all() is True

    def test_clear_resets_clock(self, cache, clock):
        cache.store(KEY, [snapshot("1", "test")])
        cache.store(CacheKey(Organizer.SNS, "2023-01-01"), [])

        cache.clear_all()

        assert len(cache) == 0
        assert cache.read(KEY) == []
        assert cache.should_update(KEY) is True
        assert cache.should_clear_all() is False

    def test_should_clear_after_ttl(self, cache, clock):
        cache.clear_all()
        clock.advance(CLEAR_TTL - 1)
        assert cache.should_clear_all() is False

        clock.advance(1)
        assert cache.should_clear_all() is True

    def test_clear_is_unconditional(self, cache, clock):
        cache.clear_all()
        cache.store(KEY, [snapshot("1", "test")])

        # Clear interval has not elapsed, clear_all still wipes
        cache.clear_all()

        assert cache.is_empty_at(KEY) is True


class TestStats:
    def test_stats(self, cache, clock):
        cache.store(KEY, [snapshot("1", "test"), snapshot("2", "test2")])
        clock.advance(UPDATE_TTL + 5)
        sns_key = CacheKey(Organizer.SNS, "2023-01-01")
        cache.store(sns_key, [])

        stats = cache.get_stats()

        assert stats.entries_count == 2
        assert stats.seconds_since_clear is None
        by_key = {entry.key: entry for entry in stats.entries}
        assert by_key[KEY].tournaments_count == 2
        assert by_key[KEY].is_stale is True
        assert by_key[KEY].age_seconds == UPDATE_TTL + 5
        assert by_key[sns_key].tournaments_count == 0
        assert by_key[sns_key].is_stale is False
