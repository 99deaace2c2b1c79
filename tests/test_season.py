import pytest

from bball_api.core.config import settings
from bball_api.core.errors import ValidationError
from bball_api.services.season import build_season_code, get_season_code, resolve_competition


def test_build_from_code_and_year():
    assert build_season_code("e", "2025", None) == "E2025"
    assert build_season_code("U", "2024") == "U2024"


def test_override_wins():
    assert build_season_code("j", "2025", "JTA25") == "JTA25"


def test_empty_override_is_ignored():
    assert build_season_code("e", "2025", "") == "E2025"


def test_defaults(monkeypatch):
    monkeypatch.setattr(settings, "DEFAULT_COMPETITION", "E")
    monkeypatch.setattr(settings, "DEFAULT_SEASON", "2025")
    assert build_season_code() == "E2025"


def test_get_season_code_from_params():
    assert get_season_code({"code": "u", "season": "2023"}) == "U2023"
    assert get_season_code({"code": "J", "seasonCode": "JA25"}) == "JA25"
    assert get_season_code({"code": "J", "season": "2025", "seasonCode": ""}) == "J2025"


def test_any_competition_code_accepted_by_default(monkeypatch):
    monkeypatch.setattr(settings, "ALLOWED_COMPETITION_CODES", [])
    assert resolve_competition("j") == "J"


def test_allow_list_rejects_other_codes(monkeypatch):
    monkeypatch.setattr(settings, "ALLOWED_COMPETITION_CODES", ["E", "U"])
    assert resolve_competition("u") == "U"

    with pytest.raises(ValidationError) as exc:
        resolve_competition("J")
    assert exc.value.status_code == 400
    assert "J" in exc.value.message
