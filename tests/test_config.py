import pytest
import yaml
from pydantic import ValidationError

from chronogrid.config import ERAS, ERAS_PATH, RunConfig, get_era, load_config, load_eras
from chronogrid.vocab import EraId


def test_every_era_has_exactly_one_config():
    assert set(ERAS) == set(EraId)
    for era_id, cfg in ERAS.items():
        assert cfg.id == era_id


def test_probability_shares_non_negative():
    for cfg in ERAS.values():
        assert min(cfg.probs.run, cfg.probs.pass_, cfg.probs.kick, cfg.probs.waste) >= 0


def test_era_specific_rules():
    assert not get_era(EraId.GENESIS).rules.pass_legal
    assert get_era(EraId.GENESIS).scoring.td == 5
    assert get_era(EraId.IRON_MAN).probs.waste == 0.05
    assert get_era("2011_PRES").scoring.two_pt_available
    assert get_era(EraId.STRATEGY).rules.kickoff_line == 30
    assert not get_era(EraId.BREAKOUT).rules.ot_enabled


def test_table_is_read_only():
    with pytest.raises(TypeError):
        ERAS[EraId.SPREAD] = ERAS[EraId.GENESIS]
    with pytest.raises(ValidationError):
        ERAS[EraId.SPREAD].scoring.td = 7


def test_unknown_era_rejected():
    with pytest.raises(ValueError):
        get_era("1776")


def _write_table(tmp_path, eras):
    p = tmp_path / "eras.yaml"
    p.write_text(yaml.safe_dump({"eras": eras}))
    return p


def _raw_eras():
    with open(ERAS_PATH) as f:
        return yaml.safe_load(f)["eras"]


def test_missing_era_fails_validation(tmp_path):
    with pytest.raises(ValidationError, match="missing"):
        load_eras(_write_table(tmp_path, _raw_eras()[:-1]))


def test_duplicate_era_fails_validation(tmp_path):
    raw = _raw_eras()
    with pytest.raises(ValidationError, match="more than once"):
        load_eras(_write_table(tmp_path, raw + [raw[0]]))


def test_negative_share_fails_validation(tmp_path):
    raw = _raw_eras()
    raw[2]["probs"]["run"] = -0.1
    with pytest.raises(ValidationError):
        load_eras(_write_table(tmp_path, raw))


def test_run_config_defaults_and_yaml(tmp_path):
    assert RunConfig().eras == list(EraId)
    p = tmp_path / "run.yaml"
    p.write_text("seed: 3\ngames_per_era: 2\neras: ['1920_1932']\nuser_strategy: random\n")
    cfg = load_config(str(p))
    assert cfg.seed == 3 and cfg.games_per_era == 2
    assert cfg.eras == [EraId.IRON_MAN]
    assert cfg.user_strategy == "random"
    assert cfg.user_side == "home"
