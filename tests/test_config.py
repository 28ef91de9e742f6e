"""
Tests for configuration loading and CI detection.
"""

from __future__ import annotations

import pytest

from dhlotto.config import Credentials, Settings, load_credentials


class TestLoadCredentials:
    def test_returns_credentials_unchanged(self, test_settings: Settings) -> None:
        """Both values come back exactly as configured."""
        creds = load_credentials(test_settings)
        assert creds == Credentials(user_id="lotto-user", password="s3cret!")

    def test_whitespace_is_not_trimmed(self, test_settings: Settings) -> None:
        config = test_settings.model_copy(update={"DHLOTTERY_PASSWORD": " pw with spaces "})
        assert load_credentials(config).password == " pw with spaces "

    def test_missing_id_exits_nonzero(self, test_settings: Settings, capsys) -> None:
        config = test_settings.model_copy(update={"DHLOTTERY_ID": ""})
        with pytest.raises(SystemExit) as exc_info:
            load_credentials(config)
        assert exc_info.value.code == 1
        assert "DHLOTTERY_ID" in capsys.readouterr().err

    def test_missing_password_exits_nonzero(self, test_settings: Settings) -> None:
        config = test_settings.model_copy(update={"DHLOTTERY_PASSWORD": ""})
        with pytest.raises(SystemExit) as exc_info:
            load_credentials(config)
        assert exc_info.value.code == 1

    def test_both_missing_exits_nonzero(self, test_settings: Settings) -> None:
        config = test_settings.model_copy(update={"DHLOTTERY_ID": "", "DHLOTTERY_PASSWORD": ""})
        with pytest.raises(SystemExit) as exc_info:
            load_credentials(config)
        assert exc_info.value.code == 1

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Values set in the environment reach the loader."""
        monkeypatch.setenv("DHLOTTERY_ID", "env-user")
        monkeypatch.setenv("DHLOTTERY_PASSWORD", "env-pass")
        creds = load_credentials(Settings())
        assert creds.user_id == "env-user"
        assert creds.password == "env-pass"


class TestCIDetection:
    @pytest.mark.parametrize(
        ("ci", "github_actions", "expected"),
        [
            ("true", "", True),
            ("", "true", True),
            ("true", "true", True),
            ("", "", False),
            ("false", "false", False),
            ("1", "", False),
        ],
    )
    def test_is_ci(self, test_settings: Settings, ci: str, github_actions: str, expected: bool) -> None:
        config = test_settings.model_copy(update={"CI": ci, "GITHUB_ACTIONS": github_actions})
        assert config.is_ci is expected

    def test_defaults(self, test_settings: Settings) -> None:
        assert test_settings.MINIMUM_BALANCE == 5000
        assert test_settings.AUTO_GAME_COUNT == 5
        assert test_settings.TARGET_PAGE_PATTERNS == ["game645.do?method=buyLotto"]
        assert "banner" in test_settings.AD_URL_PATTERNS
