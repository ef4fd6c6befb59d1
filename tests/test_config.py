"""
Unit Tests for Configuration and Application Startup

Tests:
- Environment variable overrides
- Store construction from seed or CSV file
- API prefix
"""

import pytest
from fastapi.testclient import TestClient

from mall_segmentation.core.config import Settings
from mall_segmentation.core.exceptions import DatasetLoadError
from mall_segmentation.exports.csv_export import customers_to_csv
from mall_segmentation.main import build_store, create_app


class TestSettings:
    """Test settings loading"""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATA_SEED", raising=False)
        monkeypatch.delenv("API_PREFIX", raising=False)

        settings = Settings(_env_file=None)

        assert settings.data_seed == 42
        assert settings.api_prefix == "/api"
        assert settings.rate_limit == "1000/hour"
        assert not settings.is_production

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DATA_SEED", "7")
        monkeypatch.setenv("ENVIRONMENT", "Production")
        monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")

        settings = Settings(_env_file=None)

        assert settings.data_seed == 7
        assert settings.is_production
        assert settings.rate_limit_enabled is False


class TestBuildStore:
    """Test dataset selection at startup"""

    def test_seeded_store(self, test_settings):
        store = build_store(test_settings.model_copy(update={"data_seed": 5}))

        assert len(store) == 200

    def test_store_from_csv(self, test_settings, tmp_path, mixed_customers):
        path = tmp_path / "customers.csv"
        path.write_text(customers_to_csv(mixed_customers))

        store = build_store(test_settings.model_copy(update={"dataset_csv_path": str(path)}))

        assert store.list_customers() == mixed_customers

    def test_unreadable_csv_fails_startup(self, test_settings, tmp_path):
        settings = test_settings.model_copy(update={"dataset_csv_path": str(tmp_path / "nope.csv")})

        with pytest.raises(DatasetLoadError):
            create_app(settings=settings)


class TestAPIPrefix:
    """Test routers honour the configured prefix"""

    def test_custom_prefix(self, test_settings, seeded_store):
        settings = test_settings.model_copy(update={"api_prefix": "/v1"})
        client = TestClient(create_app(settings=settings, store=seeded_store))

        assert client.get("/v1/summary").status_code == 200
        assert client.get("/api/summary").status_code == 404
        assert client.get("/health").status_code == 200
