"""Tests for settings loading and the per-user .env writer."""

from core.config import GEMINI_OPENAI_BASE_URL, AppSettings, get_user_env_file, write_user_env_vars
from core.domain.language import Language


class TestAppSettings:
    def test_defaults(self):
        settings = AppSettings(_env_file=None)

        assert settings.ai_api_key is None
        assert settings.ai_base_url == GEMINI_OPENAI_BASE_URL
        assert settings.text_model == "gemini-2.5-flash"
        assert settings.image_model == "gemini-2.5-flash-image"
        assert settings.strict_decode is False
        assert settings.default_language is Language.ENGLISH

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("BIZBOOST_AI_API_KEY", "secret")
        monkeypatch.setenv("BIZBOOST_TEXT_MODEL", "gemini-2.5-pro")
        monkeypatch.setenv("BIZBOOST_STRICT_DECODE", "true")
        monkeypatch.setenv("BIZBOOST_DEFAULT_LANGUAGE", "Urdu")

        settings = AppSettings(_env_file=None)

        assert settings.ai_api_key == "secret"
        assert settings.text_model == "gemini-2.5-pro"
        assert settings.strict_decode is True
        assert settings.default_language is Language.URDU

    def test_project_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("BIZBOOST_IMAGE_MODEL=imagen-4.0-generate-001\n", encoding="utf-8")

        settings = AppSettings(_env_file=str(env_file))

        assert settings.image_model == "imagen-4.0-generate-001"

    def test_user_env_file_follows_current_config_dir(self, monkeypatch, tmp_path):
        config_home = tmp_path / "later-config"
        monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
        write_user_env_vars({"BIZBOOST_AI_API_KEY": "user-key", "BIZBOOST_IMAGE_MODEL": ""})

        settings = AppSettings()

        assert get_user_env_file().exists()
        assert settings.ai_api_key == "user-key"
        assert settings.image_model == ""

    def test_explicit_env_file_none_skips_user_config(self):
        write_user_env_vars({"BIZBOOST_AI_API_KEY": "user-key"})

        assert AppSettings().ai_api_key == "user-key"
        assert AppSettings(_env_file=None).ai_api_key is None


class TestWriteUserEnvVars:
    def test_merges_with_existing_values(self, tmp_path):
        env_path = tmp_path / "bizboost" / ".env"
        write_user_env_vars({"BIZBOOST_AI_API_KEY": "old", "BIZBOOST_TEXT_MODEL": "a"}, env_path=env_path)

        write_user_env_vars({"BIZBOOST_AI_API_KEY": "new", "BIZBOOST_IMAGE_MODEL": None}, env_path=env_path)

        lines = env_path.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("#")
        assert "BIZBOOST_AI_API_KEY=new" in lines
        assert "BIZBOOST_TEXT_MODEL=a" in lines
        assert not any(line.startswith("BIZBOOST_IMAGE_MODEL") for line in lines)
