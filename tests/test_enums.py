# tests/test_enums.py

import math

import pytest

from domain.entities import ChampionAggregate
from domain.enums import FetchErrorKind, Region, Role, StatMetric
from domain.enums.stat_metric import round_half_up


class TestRegion:
    @pytest.mark.parametrize("label,region", [
        ("euw", Region.EUW1),
        ("EUW1", Region.EUW1),
        ("na", Region.NA1),
        ("lan", Region.LA1),
        ("oce", Region.OC1),
        ("kr", Region.KR),
        (" eune ", Region.EUN1),
    ])
    def test_roster_labels(self, label, region):
        assert Region.from_string(label) is region

    @pytest.mark.parametrize("label", [None, "", "atlantis"])
    def test_unknown_falls_back_to_na(self, label):
        assert Region.from_string(label) is Region.NA1
        assert Region.lookup(label) is None

    def test_regional_routes(self):
        assert Region.EUW1.regional_route == "europe"
        assert Region.NA1.regional_route == "americas"
        assert Region.KR.regional_route == "asia"
        assert Region.OC1.regional_route == "sea"


class TestRole:
    def test_roster_order(self):
        labels = ["Support", None, "Mid", "ADC", "Top", "Jungle", "Coach"]

        ordered = sorted(labels, key=Role.roster_sort_key)

        assert ordered[:5] == ["Top", "Jungle", "Mid", "ADC", "Support"]
        assert set(ordered[5:]) == {None, "Coach"}

    @pytest.mark.parametrize("label,role", [
        ("top", Role.TOP), ("JG", Role.JUNGLE), ("middle", Role.MIDDLE),
        ("bot", Role.BOTTOM), ("UTILITY", Role.UTILITY), ("sup", Role.UTILITY),
    ])
    def test_aliases(self, label, role):
        assert Role.from_string(label) is role


class TestFetchErrorKind:
    @pytest.mark.parametrize("status,kind", [
        (404, FetchErrorKind.NOT_FOUND),
        (401, FetchErrorKind.AUTH_FAILURE),
        (403, FetchErrorKind.AUTH_FAILURE),
        (429, FetchErrorKind.RATE_LIMITED),
        (502, FetchErrorKind.TRANSIENT),
        (400, FetchErrorKind.UNKNOWN),
    ])
    def test_from_status(self, status, kind):
        assert FetchErrorKind.from_status(status) is kind

    def test_only_auth_is_fatal(self):
        assert [k for k in FetchErrorKind if k.is_fatal] == [FetchErrorKind.AUTH_FAILURE]


class TestStatMath:
    @pytest.mark.parametrize("value,expected", [(0.5, 1), (2.5, 3), (2.4999, 2), (66.6667, 67), (0, 0)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_perfect_kda(self):
        row = ChampionAggregate(player_id=1, champion="Janna", games=2, kills=1, deaths=0, assists=30)

        assert row.kda == math.inf
        assert row.kda_display == "Perfect"

    def test_averages_per_game(self):
        row = ChampionAggregate(player_id=1, champion="Ahri", games=4, cs=722, damage=90_001)

        assert row.average(StatMetric.CS) == pytest.approx(180.5)
        assert StatMetric.CS.format_value(row.average(StatMetric.CS)) == "181"
        assert StatMetric.DAMAGE.format_value(row.average(StatMetric.DAMAGE)) == "22,500"
