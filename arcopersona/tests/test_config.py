"""
Tests for Configuration

Tests settings defaults and the constraints on numeric settings.
"""

import pytest
from pydantic import ValidationError

from arcopersona.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        config = Settings(_env_file=None)

        assert config.canonical_retention_days == 90
        assert config.legacy_retention_days == 30
        assert config.homepage_product_limit == 3
        assert config.homepage_article_limit == 3

    def test_zero_limits_allowed(self):
        config = Settings(_env_file=None, homepage_product_limit=0, homepage_article_limit=0)

        assert config.homepage_product_limit == 0
        assert config.homepage_article_limit == 0

    @pytest.mark.parametrize("field", ["homepage_product_limit", "homepage_article_limit"])
    def test_negative_limit_rejected(self, field):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: -1})

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("ARCO_HOMEPAGE_PRODUCT_LIMIT", "5")

        assert Settings(_env_file=None).homepage_product_limit == 5

    def test_negative_env_limit_rejected(self, monkeypatch):
        monkeypatch.setenv("ARCO_HOMEPAGE_ARTICLE_LIMIT", "-2")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_zero_retention_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, canonical_retention_days=0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
