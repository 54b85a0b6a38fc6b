"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from articlepull.models.config import ExtractionConfig, ServiceConfig


class TestServiceConfig:
    """Tests for ServiceConfig."""

    def test_defaults(self):
        """Test default values."""
        config = ServiceConfig()

        assert config.base_url == "https://helpx.adobe.com/"
        assert config.scrape_endpoint is None
        assert config.port == 8080
        assert config.log_level == "INFO"

    def test_from_env(self):
        """Test reading ARTICLEPULL_* variables from a mapping."""
        config = ServiceConfig.from_env(
            {
                "ARTICLEPULL_BASE_URL": "https://help.example.com",
                "ARTICLEPULL_PORT": "9000",
                "ARTICLEPULL_LOG_LEVEL": "debug",
                "UNRELATED": "x",
            }
        )

        assert config.base_url == "https://help.example.com/"
        assert config.port == 9000
        assert config.log_level == "DEBUG"

    def test_from_process_env(self, monkeypatch):
        """Test os.environ is read by default."""
        monkeypatch.setenv("ARTICLEPULL_TIMEOUT", "12.5")

        assert ServiceConfig.from_env().timeout == 12.5

    def test_api_key_expansion(self, monkeypatch):
        """Test ${VAR} references in the API key are expanded."""
        monkeypatch.setenv("SCRAPER_KEY", "s3cret")

        config = ServiceConfig(scrape_api_key="${SCRAPER_KEY}")

        assert config.scrape_api_key == "s3cret"

    def test_unset_variable_kept(self, monkeypatch):
        """Test unresolvable references are left as written."""
        monkeypatch.delenv("MISSING_KEY", raising=False)

        assert ServiceConfig(scrape_api_key="$MISSING_KEY").scrape_api_key == "$MISSING_KEY"

    def test_extra_fields_rejected(self):
        """Test unknown fields fail validation."""
        with pytest.raises(ValidationError):
            ServiceConfig(unknown="x")

    def test_port_range(self):
        """Test ports outside 1-65535 fail validation."""
        with pytest.raises(ValidationError):
            ServiceConfig(port=70000)


class TestExtractionConfig:
    """Tests for ExtractionConfig."""

    def test_defaults(self):
        """Test default thresholds."""
        config = ExtractionConfig()

        assert config.min_content_length == 100
        assert config.reader_min_length == 100
        assert config.metadata_max_length == 500
        assert config.selector is None

    def test_negative_threshold_rejected(self):
        """Test thresholds cannot be negative."""
        with pytest.raises(ValidationError):
            ExtractionConfig(min_content_length=-1)
