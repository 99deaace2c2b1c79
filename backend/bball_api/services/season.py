"""
Season code resolution.

Standard competitions build the code from competition + year:
    "E2025" (EuroLeague), "U2025" (EuroCup)

NextGen tournaments have codes that can't be built that way and must be
passed explicitly as seasonCode:
    "JA25" (Abu Dhabi), "JU25" (qualifier), "JBO25" (Bologna), "JB25" (Belgrade)
"""

from typing import Mapping

from bball_api.core.config import settings
from bball_api.core.errors import ValidationError


def build_season_code(
    code: str | None = None,
    season: str | None = None,
    season_code_override: str | None = None,
) -> str:
    """Return the override verbatim when given, else upper(code) + season."""
    if season_code_override:
        return season_code_override
    code = code or settings.DEFAULT_COMPETITION
    season = season or settings.DEFAULT_SEASON
    return f"{code.upper()}{season}"


def get_season_code(params: Mapping[str, str | None]) -> str:
    """Resolve the season code from request params (seasonCode first, then code + season)."""
    return build_season_code(
        params.get("code"),
        params.get("season"),
        params.get("seasonCode") or None,
    )


def resolve_competition(code: str | None) -> str:
    """Uppercase competition code, checked against the configured allow-list."""
    competition = (code or settings.DEFAULT_COMPETITION).upper()
    allowed = {c.upper() for c in settings.ALLOWED_COMPETITION_CODES}
    if allowed and competition not in allowed:
        raise ValidationError(
            f"Invalid code: {competition}. Expected one of: {', '.join(sorted(allowed))}"
        )
    return competition
