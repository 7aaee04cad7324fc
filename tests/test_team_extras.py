"""Tests for kit grouping, lineup organization, team records and name matching."""

from datetime import date, datetime

from sportsdeck.core import Event, Kit
from sportsdeck.providers.thesportsdb.normalizer import parse_kit
from sportsdeck.services.equipment import organize_kits_by_season, season_sort_key
from sportsdeck.services.lineup import organize_lineup
from sportsdeck.services.statistics import available_seasons, calculate_record, is_event_in_past
from sportsdeck.utilities.names import normalize_name, same_team, team_similarity


def kit(season, kit_type, kit_id="1", when=None) -> Kit:
    return parse_kit(
        {
            "idEquipment": kit_id,
            "strSeason": season,
            "strEquipment": f"https://img.test/{season}/{kit_type}/{kit_id}.png",
            "strType": kit_type,
            "date": when,
        }
    )


class TestKits:
    def test_home_kit_normalized_to_first(self):
        assert kit("2024-2025", "Home").normalized_type == "1st"
        assert kit("2024-2025", "2nd").normalized_type == "2nd"

    def test_items_without_image_or_season_skipped(self):
        assert parse_kit({"strSeason": "2024-2025", "strType": "Home"}) is None
        assert parse_kit({"strEquipment": "https://img.test/x.png"}) is None

    def test_seasons_newest_first_and_types_ordered(self):
        seasons = organize_kits_by_season(
            [
                kit("2022-2023", "Home"),
                kit("2024-2025", "3rd"),
                kit("2024-2025", "Home"),
                kit("2023", "2nd"),
                kit("2024-2025", "2nd"),
            ]
        )

        # Same end year keeps input order
        assert [s.season for s in seasons] == ["2024-2025", "2022-2023", "2023"]
        assert [k.normalized_type for k in seasons[0].kits] == ["1st", "2nd", "3rd"]

    def test_latest_kit_per_type_kept(self):
        seasons = organize_kits_by_season(
            [
                kit("2024-2025", "Home", kit_id="old", when="2024-06-01 10:00:00"),
                kit("2024-2025", "Home", kit_id="new", when="2024-07-15 10:00:00"),
            ]
        )
        assert [k.id for k in seasons[0].kits] == ["new"]

    def test_season_sort_key(self):
        labels = ["2021-2022", "Classic", "2024", "2023-2024"]
        assert sorted(labels, key=season_sort_key) == ["2024", "2023-2024", "2021-2022", "Classic"]


class TestLineup:
    def line(self, name, team, number="", substitute="No", **extra):
        data = {
            "idPlayer": name.lower(),
            "strPlayer": name,
            "strTeam": team,
            "intSquadNumber": number,
            "strSubstitute": substitute,
        }
        data.update(extra)
        return data

    def test_explicit_side_wins(self):
        lineup = organize_lineup(
            [
                self.line("Saka", "Whoever", "7", strTeamSide="Away"),
                self.line("Rice", "Whoever", "41", strTeamSide="Home"),
            ],
            "Arsenal",
            "Chelsea",
        )
        assert [e.name for e in lineup.home.starters] == ["Rice"]
        assert [e.name for e in lineup.away.starters] == ["Saka"]

    def test_team_names_matched_ignoring_accents_and_affixes(self):
        lineup = organize_lineup(
            [
                self.line("Oblak", "Atlético Madrid", "13"),
                self.line("Griezmann", "Atletico Madrid", "7"),
                self.line("Courtois", "Real Madrid CF", "1"),
            ],
            "Atletico de Madrid",
            "Real Madrid",
        )
        assert [e.name for e in lineup.home.starters] == ["Griezmann", "Oblak"]
        assert [e.name for e in lineup.away.starters] == ["Courtois"]

    def test_falls_back_to_list_halves(self):
        lineup = organize_lineup(
            [
                self.line("A", "", "2"),
                self.line("B", "", "1"),
                self.line("C", ""),
                self.line("D", "", "9"),
            ]
        )
        assert [e.name for e in lineup.home.starters] == ["B", "A"]
        assert [e.name for e in lineup.away.starters] == ["D", "C"]

    def test_substitutes_separated_and_sorted(self):
        lineup = organize_lineup(
            [
                self.line("Saka", "Arsenal", "7"),
                self.line("Trossard", "Arsenal", "19", substitute="Yes"),
                self.line("Jesus", "Arsenal", "9", substitute="Yes"),
                self.line("Palmer", "Chelsea", "20"),
            ],
            "Arsenal",
            "Chelsea",
        )
        assert [e.name for e in lineup.home.substitutes] == ["Jesus", "Trossard"]
        assert [e.name for e in lineup.away.starters] == ["Palmer"]

    def test_empty_lineup(self):
        lineup = organize_lineup([])
        assert lineup.home.starters == [] and lineup.away.substitutes == []


class TestRecord:
    def test_unfinished_and_unrelated_events_skipped(self):
        events = [
            Event(id="1", name="", home_team_id="1", away_team_id="2", home_score=3, away_score=1),
            Event(id="2", name="", home_team_id="2", away_team_id="1", home_score=2, away_score=2),
            Event(id="3", name="", home_team_id="1", away_team_id="3"),
            Event(id="4", name="", home_team_id="8", away_team_id="9", home_score=1, away_score=0),
        ]
        record = calculate_record("1", events)

        assert (record.played, record.wins, record.draws, record.losses) == (2, 1, 1, 0)
        assert (record.goals_for, record.goals_against, record.goal_difference) == (5, 3, 2)

    def test_event_in_past(self):
        now = datetime(2024, 9, 1, 15, 0)
        assert is_event_in_past(date(2024, 9, 1), "14:30:00", now=now)
        assert not is_event_in_past(date(2024, 9, 1), "17:30:00", now=now)
        assert not is_event_in_past(None, now=now)

    def test_available_seasons(self):
        seasons = available_seasons(2021)
        assert seasons == ["2021-2022", "2021", "2020-2021", "2020"]


class TestNames:
    def test_normalize_name(self):
        assert normalize_name("  Atlético   Madrid ") == "atletico madrid"
        assert normalize_name(None) == ""

    def test_same_team(self):
        assert same_team("Arsenal FC", "arsenal")
        assert not same_team("Arsenal", "Chelsea")
        assert not same_team("", "Arsenal")

    def test_similarity(self):
        assert team_similarity("Manchester United", "Man United") < 100
        assert team_similarity("Bayern München", "FC Bayern Munchen") == 100
