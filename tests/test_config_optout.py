"""
Tests for scan settings and opt-out hand-off payloads.
"""

import pytest
from pydantic import ValidationError

from cli import build_parser, main
from config.settings import ScanSettings
from models.enums import RemovalDifficulty, Severity
from models.schema import Exposure
from optout import OptOutResult, build_opt_out_request, broker_key


class TestScanSettings:
    """Test configuration loading."""

    def test_defaults(self):
        settings = ScanSettings()
        assert settings.timeout == 15.0
        assert settings.max_variants == 3
        assert settings.secondary_enabled is True
        assert settings.synthetic_enabled is True
        assert settings.has_google_credentials is False

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("GOOGLE_API_KEY", "abc123")
        monkeypatch.setenv("GOOGLE_SEARCH_CX", "cx456")
        monkeypatch.setenv("SEARCH_TIMEOUT", "20")
        monkeypatch.setenv("SECONDARY_SEARCH_ENABLED", "false")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = ScanSettings.from_env(str(tmp_path / "missing.env"))
        assert settings.has_google_credentials is True
        assert settings.timeout == 20.0
        assert settings.secondary_enabled is False
        assert settings.log_level == "DEBUG"

    def test_timeout_clamped(self):
        assert ScanSettings(timeout=2).timeout == 10.0
        assert ScanSettings(timeout=120).timeout == 30.0

    def test_placeholder_credentials(self):
        settings = ScanSettings(google_api_key="your_api_key", google_search_cx="your_cx")
        assert settings.has_google_credentials is False

    @pytest.mark.parametrize("value", [0, 4])
    def test_bad_max_variants(self, value):
        with pytest.raises(ValueError):
            ScanSettings(max_variants=value)

    def test_env_max_variants_above_cap_rejected(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SEARCH_MAX_VARIANTS", "4")
        with pytest.raises(ValueError):
            ScanSettings.from_env(str(tmp_path / "missing.env"))


def _exposure(site, site_name, removal_url=None):
    return Exposure(
        site=site,
        site_name=site_name,
        url=f"https://www.{site}/jane-smith",
        data_found=["name"],
        severity=Severity.HIGH,
        removal_difficulty=RemovalDifficulty.EASY,
        removal_url=removal_url,
    )


class TestOptOutRequest:
    def test_known_broker(self):
        exp = _exposure("spokeo.com", "Spokeo", "https://www.spokeo.com/optout")
        req = build_opt_out_request(exp, "Jane Smith", "jane@example.com")
        assert req.broker == "spokeo"
        assert req.url == "https://www.spokeo.com/optout"
        assert req.user_data.name == "Jane Smith"
        assert req.user_data.address is None

    def test_multiword_broker_key(self):
        exp = _exposure("fastpeoplesearch.com", "Fast People Search")
        assert broker_key(exp) == "fastpeoplesearch"

    def test_unknown_site_uses_exposure_url(self):
        exp = _exposure("obscure.example", "obscure.example")
        req = build_opt_out_request(exp, "Jane Smith", "jane@example.com", address="1 Main St")
        assert req.broker == "obscure"
        assert req.url == "https://www.obscure.example/jane-smith"

    def test_serializes_user_data_alias(self):
        exp = _exposure("spokeo.com", "Spokeo", "https://www.spokeo.com/optout")
        data = build_opt_out_request(exp, "Jane", "jane@example.com").model_dump(by_alias=True)
        assert "userData" in data

    def test_result_from_automation_reply(self):
        result = OptOutResult.model_validate({"success": False, "message": "captcha required"})
        assert result.success is False
        assert result.model_dump() == {"success": False, "message": "captcha required"}

    def test_requires_email(self):
        exp = _exposure("spokeo.com", "Spokeo")
        with pytest.raises(ValidationError):
            build_opt_out_request(exp, "Jane", "")


class TestCli:
    def test_parser(self):
        args = build_parser().parse_args(["Jane Smith", "--email", "j@x.com"])
        assert args.name == "Jane Smith"
        assert args.email == "j@x.com"
        assert args.city_state is None

    def test_blank_name_exit_code(self, monkeypatch, tmp_path, capsys):
        monkeypatch.chdir(tmp_path)
        assert main(["  ", "--env-file", str(tmp_path / "none.env")]) == 2
        assert "Full name is required" in capsys.readouterr().err
