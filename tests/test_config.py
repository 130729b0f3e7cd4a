from __future__ import annotations

import pytest

from job_triage import config
from job_triage.config import DEFAULT_HOME, NotificationSettings, load_profile


def test_missing_profile_file_uses_defaults(tmp_path) -> None:
    profile = load_profile(tmp_path / "absent.yaml")

    assert profile.home == DEFAULT_HOME
    assert profile.max_distance_km == 60.0
    assert "Category Management" in profile.skills


def test_profile_yaml_overrides(tmp_path) -> None:
    path = tmp_path / "profile.yaml"
    path.write_text(
        "home: {lat: 50.85, lng: 4.35}\nmax_distance_km: 30\nroles: [Buyer]\n",
        encoding="utf-8",
    )

    profile = load_profile(path)

    assert profile.home.lat == 50.85
    assert profile.max_distance_km == 30.0
    assert profile.roles == ("Buyer",)


def test_profile_must_be_a_mapping(tmp_path) -> None:
    path = tmp_path / "profile.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_profile(path)


def test_shipped_profile_loads() -> None:
    profile = load_profile(config.CONFIG_DIR / "profile.yaml")

    assert profile.skill_aliases["Achats"] == ("buying", "buyer", "procurement", "purchasing")


def test_env_settings(monkeypatch) -> None:
    monkeypatch.setenv("JOB_TRIAGE_SOURCES", "Forem, sample")
    monkeypatch.setenv("JOB_TRIAGE_SOURCE_TIMEOUT_S", "not-a-number")
    monkeypatch.setenv("DIGEST_RUN_TIMES", "06:00")

    assert config.enabled_source_names() == ["forem", "sample"]
    assert config.source_timeout_s() == 10.0
    assert config.load_digest_config().run_times == ("06:00",)


def test_notification_settings_ignore_unknown_keys() -> None:
    settings = NotificationSettings()
    settings.update({"daily_digest": True, "bogus": True})

    assert settings.daily_digest is True
    assert not hasattr(settings, "bogus")
