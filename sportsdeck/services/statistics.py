"""Team record computation from finished events."""

from datetime import date, datetime

from sportsdeck.core import Event, TeamRecord

# First season offered by available_seasons()
FIRST_SEASON_YEAR = 2020


def calculate_record(team_id: str, events: list[Event]) -> TeamRecord:
    """Aggregate wins/draws/losses and goals for one team.

    Events without both scores, or not involving the team, are skipped.
    """
    record = TeamRecord()

    for event in events:
        if not event.is_finished:
            continue
        if event.home_team_id == team_id:
            scored, conceded = event.home_score, event.away_score
        elif event.away_team_id == team_id:
            scored, conceded = event.away_score, event.home_score
        else:
            continue

        record.played += 1
        record.goals_for += scored
        record.goals_against += conceded
        if scored > conceded:
            record.wins += 1
        elif scored == conceded:
            record.draws += 1
        else:
            record.losses += 1

    return record


def is_event_in_past(
    event_date: date | None,
    event_time: str | None = None,
    now: datetime | None = None,
) -> bool:
    """True if the event started before now. Unknown dates are never past."""
    if event_date is None:
        return False

    hours, minutes = 0, 0
    if event_time:
        parts = event_time.split(":")
        try:
            hours, minutes = int(parts[0]), int(parts[1])
        except (IndexError, ValueError):
            hours, minutes = 0, 0

    start = datetime(event_date.year, event_date.month, event_date.day, hours, minutes)
    return start < (now or datetime.now())


def available_seasons(current_year: int | None = None) -> list[str]:
    """Season labels from the current year back to 2020, newest first.

    Both split-year ('2024-2025') and single-year ('2024') labels are listed.
    """
    year = current_year or date.today().year
    seasons = []
    for y in range(year, FIRST_SEASON_YEAR - 1, -1):
        seasons.append(f"{y}-{y + 1}")
        seasons.append(str(y))
    return seasons
