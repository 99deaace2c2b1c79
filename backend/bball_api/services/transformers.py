"""
Transforms for the sync pipeline.

Upstream EuroLeague payloads -> flat rows for the live_games and
player_stats tables. Upstream fields are optional and renamed between
endpoints, so every column group is read through an ordered fallback
resolver (first key present wins, then a computed default).
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from bball_api.core.constants import ELIGIBLE_GAME_STATUSES
from bball_api.core.errors import UpstreamError
from bball_api.services.response import utc_now_iso

logger = logging.getLogger(__name__)

# keys that may hold the game list when the upstream wraps it in an object
GAME_LIST_KEYS = ("data", "games")

# person "type" values that mark a coach rather than a player
COACH_ROLES = frozenset({"e", "c", "coach", "headcoach", "head coach", "assistant coach"})

# ---------------------------------------------------------------------------
# Fallback helpers
# ---------------------------------------------------------------------------


def first_present(source: dict | None, *keys: str, default=None):
    """First value that is not None."""
    if not source:
        return default
    for key in keys:
        value = source.get(key)
        if value is not None:
            return value
    return default


def first_non_empty(source: dict | None, *keys: str, default=None):
    """First truthy value (skips None, "" and 0). Used for codes and names."""
    if not source:
        return default
    for key in keys:
        value = source.get(key)
        if value:
            return value
    return default


def dig(source: Any, *path: str):
    """Walk nested dicts, returning None as soon as a level is missing."""
    for key in path:
        if not isinstance(source, dict):
            return None
        source = source.get(key)
    return source


# ---------------------------------------------------------------------------
# Games
# ---------------------------------------------------------------------------


def extract_game_list(payload) -> list[dict]:
    """Accept a bare list or an object exposing the list under a known key."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in GAME_LIST_KEYS:
            if isinstance(payload.get(key), list):
                return payload[key]
    raise UpstreamError("Unexpected API response format", status_code=500)


def parse_game_filter(games_filter: str | None) -> set[int] | None:
    """ "1, 3,x" -> {1, 3}. Tokens that aren't integers are dropped."""
    if not games_filter:
        return None
    numbers = set()
    for token in games_filter.split(","):
        token = token.strip()
        try:
            numbers.add(int(token))
        except ValueError:
            continue
    return numbers


def _game_number(game: dict) -> int | None:
    try:
        return int(game.get("gameCode"))
    except (TypeError, ValueError):
        return None


def filter_games(games: list[dict], games_filter: str | None) -> list[dict]:
    wanted = parse_game_filter(games_filter)
    if wanted is None:
        return games
    return [g for g in games if _game_number(g) in wanted]


def is_eligible(game: dict) -> bool:
    """Play has started or finished, so a boxscore exists."""
    return game.get("played") is True or game.get("gameStatus") in ELIGIBLE_GAME_STATUSES


def _team_result_columns(game: dict, side: str) -> dict:
    team = game.get(side) or {}
    club = team.get("club") or {}
    partials = team.get("partials") or {}
    return {
        f"{side}_code": club.get("code") or None,
        f"{side}_name": first_non_empty(club, "editorialName", "abbreviatedName"),
        f"{side}_full_name": club.get("name") or None,
        f"{side}_tv_code": club.get("tvCode") or None,
        f"{side}_logo": dig(club, "images", "crest") or None,
        f"{side}_score": first_present(team, "score", default=0),
        f"{side}_q1": partials.get("partials1"),
        f"{side}_q2": partials.get("partials2"),
        f"{side}_q3": partials.get("partials3"),
        f"{side}_q4": partials.get("partials4"),
        f"{side}_ot": partials.get("extraPeriods") or {},
    }


def transform_game(game: dict, season_code: str, competition: str) -> dict:
    """Game -> live_games row. The untouched upstream game is kept in raw_data."""
    played = game.get("played") or False
    return {
        "game_code": game.get("gameCode"),
        "season_code": season_code,
        "competition": competition,
        "identifier": game.get("identifier") or f"{season_code}_{game.get('gameCode')}",
        "round": game.get("round") or None,
        "round_alias": game.get("roundAlias") or None,
        "game_status": game.get("gameStatus") or ("Played" if played else "Scheduled"),
        "played": played,
        "game_date": first_non_empty(game, "utcDate", "date"),
        **_team_result_columns(game, "local"),
        **_team_result_columns(game, "road"),
        "venue_name": dig(game, "venue", "name") or None,
        "audience": game.get("audience") or None,
        "raw_data": game,
        "synced_at": utc_now_iso(),
    }


# ---------------------------------------------------------------------------
# Player stat lines
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GameInfo:
    game_code: Any
    season_code: str
    competition: str
    round: Any = None
    game_date: str | None = None

    @classmethod
    def from_game(cls, game: dict, season_code: str, competition: str) -> "GameInfo":
        return cls(
            game_code=game.get("gameCode"),
            season_code=season_code,
            competition=competition,
            round=game.get("round"),
            game_date=first_non_empty(game, "utcDate", "date"),
        )


@dataclass(frozen=True)
class TeamInfo:
    code: str | None = None
    name: str | None = None
    tv_code: str | None = None


def normalize_player_entry(entry: dict) -> dict:
    """
    Bring both boxscore player shapes to the flat one.

    Flat:   {"personCode": ..., "name": ..., "points": ..., ...}
    Nested: {"player": {"person": {"code", "name", "alias"}, "dorsal",
             "positionName", "club"}, "stats": {"points": ..., ...}}
    """
    player = entry.get("player")
    stats = entry.get("stats")
    if not (isinstance(player, dict) and isinstance(stats, dict)):
        return entry

    person = player.get("person") or {}
    identity = {
        "personCode": first_non_empty(person, "code") or first_non_empty(player, "personCode", "code"),
        "name": first_non_empty(person, "name") or player.get("name"),
        "alias": first_non_empty(person, "alias", "passportName") or player.get("alias"),
        "dorsal": first_non_empty(player, "dorsal"),
        "position": first_non_empty(player, "position", "positionName"),
        "type": first_non_empty(player, "type", "personType"),
        "club": player.get("club"),
    }
    return {**stats, **{k: v for k, v in identity.items() if v is not None}}


def is_player_entry(player: dict) -> bool:
    """Players only (no coaches), and only when a person code is present."""
    if player.get("isCoach"):
        return False
    role = first_non_empty(player, "type", "personType", "role")
    if role is not None and str(role).strip().lower() in COACH_ROLES:
        return False
    return resolve_person_code(player) is not None


def parse_minutes(value) -> float:
    """
    Decimal minutes from either upstream form.

    "25:30" -> 25.5 (MM + SS/60); 25.5 -> 25.5 (already decimal).
    Anything unparseable counts as 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str) or not value.strip():
        return 0.0

    parts = value.strip().split(":")
    try:
        if len(parts) == 2:
            return float(parts[0]) + float(parts[1]) / 60
        return float(value)
    except ValueError:
        return 0.0


def format_minutes(decimal_minutes: float) -> str:
    """25.5 -> "25:30" """
    total_seconds = int(round(decimal_minutes * 60))
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def resolve_person_code(player: dict):
    # personCode -> code
    return first_non_empty(player, "personCode", "code")


def resolve_identity(player: dict) -> dict:
    """
    person_code: personCode -> code
    position:    position -> positionName
    is_starter:  isStarter -> startFive -> False
    """
    return {
        "person_code": resolve_person_code(player),
        "player_name": player.get("name") or None,
        "player_alias": player.get("alias") or None,
        "dorsal": player.get("dorsal") or None,
        "position": first_non_empty(player, "position", "positionName"),
        "is_starter": bool(first_present(player, "isStarter", "startFive", default=False)),
    }


def resolve_playing_time(player: dict) -> dict:
    """
    minutes -> timePlayed, as a "MM:SS" string or as decimal minutes.

    The display string and minutes_decimal always describe the same time:
    a string is parsed, a number is formatted.
    """
    raw = first_present(player, "minutes", "timePlayed")
    if raw == "":
        raw = first_present(player, "timePlayed")
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        decimal = float(raw)
        return {"minutes": format_minutes(decimal), "minutes_decimal": decimal}
    return {"minutes": raw or None, "minutes_decimal": parse_minutes(raw)}


def resolve_shooting(player: dict) -> dict:
    """
    2pt: fieldGoalsMade2 -> twoPointsMade (attempted likewise)
    3pt: fieldGoalsMade3 -> threePointsMade (attempted likewise)
    field goals: 2pt + 3pt; only when neither split is supplied,
                 fieldGoalsMade -> fieldGoalsMadeTotal -> 0
    free throws: freeThrowsMade, freeThrowsAttempted
    """
    two_made = first_present(player, "fieldGoalsMade2", "twoPointsMade")
    two_att = first_present(player, "fieldGoalsAttempted2", "twoPointsAttempted")
    three_made = first_present(player, "fieldGoalsMade3", "threePointsMade")
    three_att = first_present(player, "fieldGoalsAttempted3", "threePointsAttempted")

    if two_made is None and three_made is None:
        fg_made = first_present(player, "fieldGoalsMade", "fieldGoalsMadeTotal", default=0)
    else:
        fg_made = (two_made or 0) + (three_made or 0)

    if two_att is None and three_att is None:
        fg_att = first_present(player, "fieldGoalsAttempted", "fieldGoalsAttemptedTotal", default=0)
    else:
        fg_att = (two_att or 0) + (three_att or 0)

    return {
        "field_goals_made": fg_made,
        "field_goals_attempted": fg_att,
        "two_points_made": two_made or 0,
        "two_points_attempted": two_att or 0,
        "three_points_made": three_made or 0,
        "three_points_attempted": three_att or 0,
        "free_throws_made": first_present(player, "freeThrowsMade", default=0),
        "free_throws_attempted": first_present(player, "freeThrowsAttempted", default=0),
    }


def resolve_rebounds(player: dict) -> dict:
    """totalRebounds when supplied, else offensive + defensive."""
    offensive = first_present(player, "offensiveRebounds", default=0)
    defensive = first_present(player, "defensiveRebounds", default=0)
    return {
        "offensive_rebounds": offensive,
        "defensive_rebounds": defensive,
        "total_rebounds": first_present(player, "totalRebounds", default=offensive + defensive),
    }


# column -> upstream keys, in fallback order (default 0)
COUNTING_STAT_FALLBACKS = {
    "points": ("score", "points"),
    "assists": ("assists", "assistances"),
    "turnovers": ("turnovers",),
    "steals": ("steals",),
    "blocks_favour": ("blocksFavour", "blocks"),
    "blocks_against": ("blocksAgainst",),
    "fouls_committed": ("foulsCommitted",),
    "fouls_received": ("foulsReceived",),
    "pir": ("valuation", "pir"),
    "plus_minus": ("plusMinus",),
}


def resolve_counting_stats(player: dict) -> dict:
    return {
        column: first_present(player, *keys, default=0)
        for column, keys in COUNTING_STAT_FALLBACKS.items()
    }


def transform_player_stats(player: dict, game_info: GameInfo, team_info: TeamInfo, is_local: bool, raw: dict | None = None) -> dict:
    """Flat player entry -> player_stats row."""
    return {
        "game_code": game_info.game_code,
        "season_code": game_info.season_code,
        "competition": game_info.competition,
        "round": game_info.round or None,
        "game_date": game_info.game_date or None,
        "team_code": team_info.code,
        "team_name": team_info.name,
        "team_tv_code": team_info.tv_code,
        "is_local": is_local,
        **resolve_identity(player),
        **resolve_playing_time(player),
        **resolve_shooting(player),
        **resolve_rebounds(player),
        **resolve_counting_stats(player),
        "raw_data": raw if raw is not None else player,
        "synced_at": utc_now_iso(),
    }


def resolve_team(side: dict, players: Iterable[dict] = ()) -> TeamInfo:
    """
    code:    club.code -> team.code
    name:    club.editorialName -> team.name -> club.name
    tv_code: club.tvCode -> team.tvCode
    Falls back to the club on the first nested player entry that carries one.
    """
    club = side.get("club") or {}
    team = side.get("team") or {}
    if not club and not team:
        for entry in players:
            player_club = dig(entry, "player", "club")
            if isinstance(player_club, dict):
                club = player_club
                break

    return TeamInfo(
        code=club.get("code") or team.get("code") or None,
        name=club.get("editorialName") or team.get("name") or club.get("name") or None,
        tv_code=club.get("tvCode") or team.get("tvCode") or None,
    )


def extract_players(boxscore: dict, game_info: GameInfo) -> list[dict]:
    """
    All player_stats rows for one game.

    Accepted envelopes:
      {"local": {"players": [...]}, "road": {...}}
      {"stats": {"local": ..., "road": ...}}
    with the team's list under "players" or "playersStats", each entry in
    either the flat or the nested player shape.
    """
    if not isinstance(boxscore, dict):
        return []
    data = boxscore.get("stats") if isinstance(boxscore.get("stats"), dict) else boxscore
    rows = []

    for side, is_local in (("local", True), ("road", False)):
        team_data = data.get(side)
        if not isinstance(team_data, dict):
            continue
        entries = team_data.get("players") or team_data.get("playersStats") or []
        if not isinstance(entries, list):
            continue
        entries = [e for e in entries if isinstance(e, dict)]
        team_info = resolve_team(team_data, entries)

        for entry in entries:
            player = normalize_player_entry(entry)
            if not is_player_entry(player):
                continue
            rows.append(transform_player_stats(player, game_info, team_info, is_local, raw=entry))

    logger.debug(f"Extracted {len(rows)} player rows for game {game_info.game_code}")
    return rows
