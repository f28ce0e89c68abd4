from pathlib import Path

import pytest

import city_core.config as cfg


def test_get_profile_known_and_unknown():
    assert cfg.get_profile().name == cfg.DEFAULT_PROFILE
    assert cfg.get_profile("crime").metric_keys == ("costOfLiving", "crimeRate")
    with pytest.raises(KeyError):
        cfg.get_profile("nope")


def test_profiles_are_alternate_configurations():
    v, c = cfg.get_profile("violent"), cfg.get_profile("crime")
    assert v.primary_metric == c.primary_metric == "costOfLiving"
    assert len(v.palette) == 6
    assert len(c.palette) == 10
    assert (v.height, v.margin.right) == (500, 150)
    assert (c.width, c.height, c.margin.left) == (800, 400, 60)


def test_profile_metric_lookup():
    p = cfg.get_profile("violent")
    assert p.metric("violentCrimeRate").dash == "5,5"
    with pytest.raises(ValueError):
        p.metric("crimeRate")


def test_data_source_reads_secret(monkeypatch):
    monkeypatch.setattr(cfg.st, "secrets", {"CITY_DATA_CSV": " https://example.org/data.csv "})
    assert cfg.data_source() == "https://example.org/data.csv"
    assert cfg.events_source() == Path("data") / "events.csv"


def test_data_source_default_without_secrets_file(monkeypatch):
    class _NoSecrets:
        def get(self, key, default=None):
            raise FileNotFoundError("no secrets.toml")

    monkeypatch.setattr(cfg.st, "secrets", _NoSecrets())
    assert cfg.data_source() == Path("data") / "data.csv"
