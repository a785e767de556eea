import pytest

from climatehealth.config import load_config


def test_default_config_sections():
    cfg = load_config()

    assert cfg.api["timeout_s"] == 10
    assert cfg.map["zoom"] == 6
    assert cfg.data["regions_name_property"] == "nom"
    assert "default" in cfg.baselines


def test_local_config_is_deep_merged(tmp_path):
    (tmp_path / "config.default.yaml").write_text(
        "api:\n  timeout_s: 10\n  weather_url: https://example.test/forecast\nmap:\n  zoom: 6\n",
        encoding="utf-8",
    )
    (tmp_path / "config.local.yaml").write_text("api:\n  timeout_s: 4\n", encoding="utf-8")

    cfg = load_config(tmp_path)

    assert cfg.api == {"timeout_s": 4, "weather_url": "https://example.test/forecast"}
    assert cfg.map == {"zoom": 6}
    assert cfg.baselines == {}


def test_missing_default_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path)
