import json
import logging
from pathlib import Path

import pytest

from domain.models import GameDifficulty
from domain.policies import ScoringPolicies
import services.repository
from services.repository import DATA_DIR, Repository
from tests.factories import make_game


def write_catalog(tmp_path, games):
    (tmp_path / "games.json").write_text(json.dumps(games), encoding="utf-8")


def test_bundled_catalog_loads(catalog):
    assert len(catalog) == 10
    hades = catalog.get_game_by_id("hades")
    assert hades.game_name == "Hades"
    assert hades.mastery_alignment == 9
    assert catalog.get_game_by_id("missing") is None


def test_find_by_name_ignores_case(catalog):
    assert catalog.find_by_name("hades ii").game_id == "hades_2"
    assert catalog.find_by_name("  Journey ").game_id == "journey"
    assert catalog.find_by_name("Portal") is None


def test_search_filters(catalog):
    quick_easy = catalog.search(difficulty=GameDifficulty.EASY, max_time_to_fun=20)
    assert [g.game_id for g in quick_easy] == ["journey", "tetris_effect"]
    roguelikes = catalog.search(genres=["Roguelike"])
    assert {g.game_id for g in roguelikes} == {"hades", "hades_2", "risk_of_rain_2", "dead_cells"}
    assert [g.game_id for g in catalog.search(platforms=["Meta Quest"])] == ["tetris_effect"]


def test_owned_keeps_catalog_order(catalog):
    owned = catalog.owned(["spiritfarer", "hades"])
    assert [g.game_id for g in owned] == ["hades", "spiritfarer"]


def test_bundled_policies_match_defaults():
    assert Repository().load_policies() == ScoringPolicies()


def test_engine_loads_from_data_dir():
    engine = Repository().load_engine()
    assert len(engine.catalog) == 10
    assert engine.policies.alternativeCount == 3


def test_out_of_range_axes_are_clamped(tmp_path):
    game = make_game().model_dump(mode="json", by_alias=True)
    game.update(pacing=14, frictionLevel=-2, timeToFun=-5)
    write_catalog(tmp_path, [game])
    loaded = Repository(tmp_path).load_catalog().get_game_by_id("test_game")
    assert loaded.pacing == 10
    assert loaded.friction_level == 0
    assert loaded.time_to_fun == 0


def test_invalid_catalog_entry_raises(tmp_path):
    write_catalog(tmp_path, [{"gameId": "broken"}])
    with pytest.raises(ValueError, match="Catalog validation failed"):
        Repository(tmp_path).load_catalog()


def test_catalog_must_be_a_list(tmp_path):
    write_catalog(tmp_path, {"games": []})
    with pytest.raises(ValueError, match="Catalog validation failed"):
        Repository(tmp_path).load_catalog()


def test_missing_policies_file_uses_defaults(tmp_path):
    assert Repository(tmp_path).load_policies() == ScoringPolicies()


def test_unreadable_policies_file_uses_defaults(tmp_path, caplog):
    (tmp_path / "policies.json").write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="services.repository"):
        assert Repository(tmp_path).load_policies() == ScoringPolicies()
    assert "unreadable policies" in caplog.text


def test_policy_overrides_and_bad_values(tmp_path, caplog):
    (tmp_path / "policies.json").write_text(json.dumps({
        "alternativeCount": 5,
        "timeFitWeight": "heavy",
        "somethingElse": 1,
    }), encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="services.repository"):
        policies = Repository(tmp_path).load_policies()
    assert policies.alternativeCount == 5
    assert policies.timeFitWeight == ScoringPolicies().timeFitWeight
    assert "timeFitWeight" in caplog.text


def test_reference_data_is_shipped_with_the_packages():
    tomllib = pytest.importorskip("tomllib")
    root = Path(__file__).resolve().parent.parent
    setuptools_cfg = tomllib.loads((root / "pyproject.toml").read_text(encoding="utf-8"))["tool"]["setuptools"]
    assert "data" in setuptools_cfg["packages"]["find"]["include"]
    assert setuptools_cfg["package-data"]["data"] == ["*.json"]
    assert DATA_DIR.parent == Path(services.repository.__file__).resolve().parent.parent
    assert (DATA_DIR / "games.json").is_file()
    assert (DATA_DIR / "policies.json").is_file()
