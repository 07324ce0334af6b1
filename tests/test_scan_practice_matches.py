# tests/test_scan_practice_matches.py

import asyncio
import sqlite3
import time

import pytest

from application.services import PracticeService
from domain.enums import Region
from domain.exceptions import (
    AuthFailure,
    ConfigurationError,
    InsufficientRosterError,
    NotFoundError,
    RateLimitedError,
    ScanInProgressError,
    TransientError,
)
from tests.helpers import fillers, line, run_scan


def _games_by_champion(service, player_id):
    return {c.champion: c for c in service.stats_repo.list_for_player(player_id)}


class TestPracticeDetection:
    """Candidate discovery, classification and aggregation."""

    def test_two_roster_players_make_a_practice_match(self, service, source, roster):
        source.add_match("EUW1_100", [
            line("puuid-a", "Ahri", win=True),
            line("puuid-b", "Lee Sin", win=True),
            *fillers(3),
        ])

        report = run_scan(service)

        assert report.matches_scanned == 1
        assert report.practice_matches_found == 1
        assert report.players_updated == 2
        assert report.success

        a = _games_by_champion(service, roster["top"].id)["Ahri"]
        b = _games_by_champion(service, roster["jungle"].id)["Lee Sin"]
        assert (a.games, a.wins) == (1, 1)
        assert (b.games, b.wins) == (1, 1)

        stored = service.match_repo.get("EUW1_100")
        assert stored.roster_player_count == 2
        assert stored.winning_team == 100
        assert len(stored.participants) == 5
        assert stored.roster_player_ids == [roster["top"].id, roster["jungle"].id]

    def test_single_roster_player_is_never_persisted(self, service, source, roster):
        source.add_match("EUW1_200", [line("puuid-a", "Ahri"), *fillers(9)])

        report = run_scan(service)

        assert report.matches_scanned == 1
        assert report.practice_matches_found == 0
        assert service.match_repo.count() == 0
        assert service.stats_repo.list_all() == []

    def test_non_practice_match_is_evaluated_again_next_scan(self, service, source, roster):
        source.add_match("EUW1_200", [line("puuid-a", "Ahri"), *fillers(9)])

        run_scan(service)
        second = run_scan(service)

        assert second.matches_scanned == 1
        assert source.detail_calls_for("EUW1_200") == 2

    def test_counters_add_every_stat_line(self, service, source, roster):
        source.add_match("EUW1_1", [
            line("puuid-a", "Ahri", win=True, kills=10, deaths=1, assists=5, cs=200, damage=30_000, damage_taken=12_000),
            line("puuid-b", "Lee Sin", win=True),
        ], offset=0)
        source.add_match("EUW1_2", [
            line("puuid-a", "Ahri", win=False, team=200, kills=2, deaths=6, assists=3, cs=150, damage=10_000, damage_taken=20_000),
            line("puuid-b", "Lee Sin", win=False, team=200),
            line("stranger-1", "Garen", team=100, win=True),
        ], offset=1)

        run_scan(service)

        ahri = _games_by_champion(service, roster["top"].id)["Ahri"]
        assert ahri.games == 2
        assert ahri.wins == 1
        assert (ahri.kills, ahri.deaths, ahri.assists) == (12, 7, 8)
        assert ahri.cs == 350
        assert ahri.damage == 40_000
        assert ahri.damage_taken == 32_000
        assert service.match_repo.get("EUW1_2").winning_team == 100

    def test_match_listed_by_several_players_is_fetched_once(self, service, source, roster):
        source.add_match("EUW1_100", [
            line("puuid-a", "Ahri"),
            line("puuid-b", "Lee Sin"),
            line("puuid-c", "Orianna"),
        ])

        report = run_scan(service)

        assert report.candidates == 1
        assert source.detail_calls_for("EUW1_100") == 1
        assert report.players_updated == 3

    def test_unlinked_players_are_not_listed(self, service, source, roster):
        run_scan(service)

        listed = [handle for handle, _ in source.list_calls]
        assert listed == ["puuid-a", "puuid-b", "puuid-c"]

    def test_candidates_processed_in_ascending_id_order(self, service, source, roster):
        for mid in ("EUW1_30", "EUW1_10", "EUW1_20"):
            source.add_match(mid, [line("puuid-a", "Ahri"), line("puuid-b", "Lee Sin")])

        run_scan(service)

        assert [mid for mid, _ in source.detail_calls] == ["EUW1_10", "EUW1_20", "EUW1_30"]

    def test_detail_fetched_in_region_of_first_player_listing_it(self, service, source, roster):
        source.add_match(
            "NA1_5",
            [line("puuid-a", "Ahri"), line("puuid-c", "Orianna")],
            listed_by=["puuid-c"],
        )

        run_scan(service)

        assert source.detail_calls == [("NA1_5", Region.NA1)]
        assert ("puuid-a", Region.EUW1) in source.list_calls

    def test_list_is_bounded_by_match_window(self, db, source, roster):
        svc = PracticeService(db, source, scan_options={
            "list_delay_s": 0, "detail_delay_s": 0, "start_time": None, "match_window": 2,
        })
        for i in range(4):
            source.add_match(f"EUW1_{i}", [line("puuid-a", "Ahri"), line("puuid-b", "Lee Sin")], offset=i)
        source.histories["puuid-b"] = []

        report = asyncio.run(svc.run_scan())

        assert report.candidates == 2
        assert sorted(svc.match_repo.get_processed_match_ids()) == ["EUW1_2", "EUW1_3"]


class TestIdempotence:
    def test_second_scan_without_new_data_changes_nothing(self, service, source, roster):
        source.add_match("EUW1_100", [
            line("puuid-a", "Ahri", win=True),
            line("puuid-b", "Lee Sin", win=True),
            *fillers(3),
        ])
        run_scan(service)
        before = [c.to_dict() for c in service.stats_repo.list_all()]

        second = run_scan(service)

        assert second.matches_scanned == 0
        assert second.practice_matches_found == 0
        assert second.candidates == 0
        assert [c.to_dict() for c in service.stats_repo.list_all()] == before
        assert source.detail_calls_for("EUW1_100") == 1

    def test_games_equal_practice_matches_per_player(self, service, source, roster):
        source.add_match("EUW1_1", [line("puuid-a", "Ahri"), line("puuid-b", "Lee Sin")], offset=1)
        source.add_match("EUW1_2", [line("puuid-a", "Zed"), line("puuid-c", "Orianna")], offset=2)
        source.add_match("EUW1_3", [line("puuid-a", "Ahri"), line("puuid-b", "Vi"), line("puuid-c", "Syndra")], offset=3)
        source.add_match("EUW1_4", [line("puuid-b", "Vi"), *fillers(4)], offset=4)

        run_scan(service)
        run_scan(service)

        for player in (roster["top"], roster["jungle"], roster["mid"]):
            games = sum(c.games for c in service.stats_repo.list_for_player(player.id))
            assert games == service.match_repo.count(player_id=player.id)

    def test_already_stored_match_counts_as_duplicate(self, service, source, roster):
        source.add_match("EUW1_1", [line("puuid-a", "Ahri"), line("puuid-b", "Lee Sin")])
        run_scan(service)
        # Simulate a second writer by hiding the stored id from the snapshot
        service.match_repo.get_processed_match_ids = lambda: set()

        report = run_scan(service)

        assert report.duplicates == 1
        assert report.practice_matches_found == 0
        assert _games_by_champion(service, roster["top"].id)["Ahri"].games == 1


class TestFailures:
    def test_failed_detail_stays_a_candidate(self, service, source, roster):
        for i in (1, 2, 3):
            source.add_match(f"EUW1_{i}", [line("puuid-a", "Ahri"), line("puuid-b", "Lee Sin")], offset=i)
        source.detail_errors["EUW1_2"] = TransientError("Timeout", status_code=None)

        first = run_scan(service)

        assert first.candidates == 3
        assert first.matches_scanned == 2
        assert first.practice_matches_found == 2
        assert first.match_failures == 1
        assert first.degraded
        assert "EUW1_2" not in service.match_repo.get_processed_match_ids()

        del source.detail_errors["EUW1_2"]
        second = run_scan(service)

        assert second.candidates == 1
        assert second.practice_matches_found == 1
        assert source.detail_calls_for("EUW1_2") == 2

    @pytest.mark.parametrize("error", [
        NotFoundError("Riot API: 404", status_code=404),
        RateLimitedError("Riot API: 429", retry_after=1.0),
        TransientError("Riot API: 503", status_code=503),
    ])
    def test_player_listing_failure_is_recovered(self, service, source, roster, error):
        source.add_match("EUW1_1", [line("puuid-b", "Lee Sin"), line("puuid-c", "Orianna")])
        source.list_errors["puuid-a"] = error

        report = run_scan(service)

        assert report.player_failures == 1
        assert report.practice_matches_found == 1
        assert not report.aborted
        assert service.get_settings().last_scan_at is not None

    def test_auth_failure_aborts_but_keeps_committed_work(self, service, source, roster):
        service.set_auto_pool_threshold(1)
        for i in (1, 2, 3):
            source.add_match(f"EUW1_{i}", [line("puuid-a", "Ahri"), line("puuid-b", "Lee Sin")], offset=i)
        source.detail_errors["EUW1_2"] = AuthFailure("Riot API: 403", status_code=403)

        report = run_scan(service)

        assert report.aborted
        assert not report.success
        assert "expired or invalid" in report.abort_reason
        assert report.matches_scanned == 1
        assert report.practice_matches_found == 1
        assert source.detail_calls_for("EUW1_3") == 0
        assert service.match_repo.get_processed_match_ids() == {"EUW1_1"}
        assert report.pools_updated == 2
        assert service.roster_repo.get_player(roster["top"].id).champion_pool == ["Ahri"]
        assert service.get_settings().last_scan_at is None

    def test_auth_failure_while_listing_stops_remaining_calls(self, service, source, roster):
        source.list_errors["puuid-a"] = AuthFailure("Riot API: 401", status_code=401)

        report = run_scan(service)

        assert report.aborted
        assert [h for h, _ in source.list_calls] == ["puuid-a"]
        assert source.detail_calls == []

    def test_storage_failure_rolls_back_the_whole_match(self, service, source, roster):
        source.add_match("EUW1_1", [line("puuid-a", "Ahri"), line("puuid-b", "Lee Sin")])
        original = service.stats_repo.record_appearance
        calls = []

        def flaky(player_id, snapshot, updated_at):
            calls.append(player_id)
            if len(calls) == 2:
                raise sqlite3.OperationalError("disk I/O error")
            original(player_id, snapshot, updated_at)

        service.stats_repo.record_appearance = flaky

        with pytest.raises(sqlite3.OperationalError):
            run_scan(service)

        assert service.match_repo.count() == 0
        assert service.stats_repo.list_all() == []
        assert service.settings_repo.try_acquire_scan_lock(time.time(), 1800)


class TestPreconditions:
    def test_needs_two_linked_players(self, service, source):
        service.add_player("Solo", account_handle="puuid-solo", role="Top")
        service.add_player("Unlinked", role="Mid")

        with pytest.raises(InsufficientRosterError) as exc:
            run_scan(service)

        assert isinstance(exc.value, ConfigurationError)
        assert source.list_calls == []

    def test_live_source_requires_api_key(self, db, monkeypatch):
        from config import settings

        monkeypatch.setattr(type(settings), "RIOT_API_KEY", "")
        svc = PracticeService(db)

        with pytest.raises(ConfigurationError):
            asyncio.run(svc.run_scan())

    def test_concurrent_scan_is_rejected(self, service, source, roster):
        assert service.settings_repo.try_acquire_scan_lock(time.time(), 1800)

        with pytest.raises(ScanInProgressError):
            run_scan(service)

        assert source.list_calls == []

    def test_stale_lock_is_taken_over(self, service, source, roster):
        service.settings_repo.try_acquire_scan_lock(time.time() - 7200, 1800)

        report = run_scan(service)

        assert report.success

    def test_lock_released_after_scan(self, service, source, roster):
        run_scan(service)

        assert service.settings_repo.try_acquire_scan_lock(time.time(), 1800)

    def test_late_finish_keeps_a_takeover_lease(self, db, source, roster):
        started = time.time() - 7200
        taken_over = []

        async def take_over(_delay):
            if not taken_over:
                taken_over.append(svc.settings_repo.try_acquire_scan_lock(time.time(), 1800))

        svc = PracticeService(
            db, source,
            scan_options={"list_delay_s": 1, "detail_delay_s": 0, "start_time": None,
                          "sleep": take_over, "clock": lambda: started},
        )
        report = run_scan(svc)

        assert report.success
        assert taken_over == [True]
        assert svc.settings_repo.is_scan_locked(time.time(), 1800)
        assert not svc.settings_repo.try_acquire_scan_lock(time.time(), 1800)


class TestPacing:
    def test_fixed_delay_after_every_external_call(self, db, source, roster):
        pauses = []

        async def record(delay):
            pauses.append(delay)

        source.add_match("EUW1_1", [line("puuid-a", "Ahri"), line("puuid-b", "Lee Sin")], offset=1)
        source.add_match("EUW1_2", [line("puuid-b", "Vi"), line("puuid-c", "Orianna")], offset=2)
        svc = PracticeService(
            db, source,
            scan_options={"list_delay_s": 0.1, "detail_delay_s": 0.15, "start_time": None, "sleep": record},
        )

        report = run_scan(svc)

        assert report.practice_matches_found == 2
        assert len(source.list_calls) == 3
        assert pauses == [0.1] * 3 + [0.15] * 2

    def test_failed_fetches_are_paced_too(self, db, source, roster):
        pauses = []

        async def record(delay):
            pauses.append(delay)

        source.add_match("EUW1_1", [line("puuid-a", "Ahri"), line("puuid-b", "Lee Sin")])
        source.list_errors["puuid-c"] = TransientError("upstream 503")
        source.detail_errors["EUW1_1"] = TransientError("upstream 503")
        svc = PracticeService(
            db, source,
            scan_options={"list_delay_s": 0.1, "detail_delay_s": 0.15, "start_time": None, "sleep": record},
        )

        report = run_scan(svc)

        assert report.player_failures == 1
        assert report.match_failures == 1
        assert pauses == [0.1] * 3 + [0.15]


class TestPromotionAndBookkeeping:
    def test_champion_promoted_on_third_game(self, service, source, roster):
        assert service.get_settings().auto_pool_threshold == 3
        for i in (1, 2):
            source.add_match(f"EUW1_{i}", [line("puuid-a", "Ahri"), line("puuid-b", "Lee Sin")], offset=i)

        run_scan(service)

        assert _games_by_champion(service, roster["top"].id)["Ahri"].games == 2
        assert service.roster_repo.get_player(roster["top"].id).champion_pool == []

        source.add_match("EUW1_3", [line("puuid-a", "Ahri"), line("puuid-b", "Lee Sin")], offset=3)
        report = run_scan(service)

        assert report.pools_updated == 2
        assert service.roster_repo.get_player(roster["top"].id).champion_pool == ["Ahri"]
        assert service.roster_repo.get_player(roster["jungle"].id).champion_pool == ["Lee Sin"]

    def test_raising_threshold_never_removes_from_pool(self, service, source, roster):
        service.set_auto_pool_threshold(1)
        source.add_match("EUW1_1", [line("puuid-a", "Ahri"), line("puuid-b", "Lee Sin")], offset=1)
        run_scan(service)

        service.set_auto_pool_threshold(20)
        source.add_match("EUW1_2", [line("puuid-a", "Zed"), line("puuid-b", "Vi")], offset=2)
        report = run_scan(service)

        assert report.pools_updated == 0
        assert service.roster_repo.get_player(roster["top"].id).champion_pool == ["Ahri"]

    def test_last_scan_stamped_with_finish_time(self, service, source, roster):
        report = run_scan(service)

        assert report.finished_at is not None
        assert service.get_settings().last_scan_at == report.finished_at

    def test_report_serializes_for_callers(self, service, source, roster):
        source.add_match("EUW1_1", [line("puuid-a", "Ahri"), line("puuid-b", "Lee Sin")])

        data = run_scan(service).to_dict()

        assert data["success"] is True
        assert data["matchesScanned"] == 1
        assert data["practiceMatchesFound"] == 1
        assert data["playersUpdated"] == 2
        assert data["poolsUpdated"] == 0
