"""Tests for configuration models and YAML loading."""

from pathlib import Path
from textwrap import dedent

import pytest
from pydantic import ValidationError

from src.core.config import (
    ApiConfig,
    CacheConfig,
    PaginationConfig,
    QueryConfig,
    SearchFilters,
    Settings,
)


class TestSearchFilters:
    def test_defaults(self) -> None:
        f = SearchFilters()
        assert f.location_name == "London"
        assert f.distance_from_location == 15
        assert f.permanent is False
        assert f.contract is True
        assert f.temp is None
        assert f.minimum_salary is None

    def test_negative_salary_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SearchFilters(minimum_salary=-1)


class TestQueryConfig:
    def test_keywords_required(self) -> None:
        with pytest.raises(ValidationError):
            QueryConfig(keywords="")

    def test_keywords_stripped(self) -> None:
        assert QueryConfig(keywords="  python  ").keywords == "python"

    def test_defaults(self) -> None:
        q = QueryConfig(keywords="python")
        assert q.max_age_days == 40
        assert q.include_keywords == []
        assert q.exclude_keywords == []

    def test_negative_age_rejected(self) -> None:
        with pytest.raises(ValidationError):
            QueryConfig(keywords="python", max_age_days=-1)


class TestApiConfig:
    def test_defaults(self) -> None:
        a = ApiConfig()
        assert a.base_url == "https://www.reed.co.uk/api/1.0"
        assert a.api_key_env == "REED_API_KEY"
        assert a.concurrency == 8

    def test_concurrency_bounds(self) -> None:
        with pytest.raises(ValidationError):
            ApiConfig(concurrency=0)
        with pytest.raises(ValidationError):
            ApiConfig(concurrency=33)

    def test_api_key_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEST_REED_KEY", "secret")
        assert ApiConfig(api_key_env="TEST_REED_KEY").api_key() == "secret"

    def test_missing_api_key_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TEST_REED_KEY", raising=False)
        with pytest.raises(ValueError, match="TEST_REED_KEY"):
            ApiConfig(api_key_env="TEST_REED_KEY").api_key()


class TestPaginationConfig:
    def test_defaults(self) -> None:
        p = PaginationConfig()
        assert p.page_size == 100
        assert p.result_limit == 500
        assert p.enforce_result_limit is True

    def test_page_size_bounds(self) -> None:
        with pytest.raises(ValidationError):
            PaginationConfig(page_size=0)
        with pytest.raises(ValidationError):
            PaginationConfig(page_size=101)


class TestSettings:
    def test_requires_query(self) -> None:
        with pytest.raises(ValidationError):
            Settings(queries=[])

    def test_defaults(self) -> None:
        s = Settings(queries=[QueryConfig(keywords="python")])
        assert s.cache == CacheConfig()
        assert s.cache.path == "data/cache"

    def test_from_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(dedent("""\
            api:
              concurrency: 4
            cache:
              path: /tmp/reed-cache
            pagination:
              enforce_result_limit: false
            queries:
              - keywords: python
                filters:
                  location_name: Leeds
                  temp: true
                exclude_keywords: [ai, machine]
                max_age_days: 7
        """))
        s = Settings.from_yaml(config_file)
        assert s.api.concurrency == 4
        assert s.cache.path == "/tmp/reed-cache"
        assert s.pagination.enforce_result_limit is False
        q = s.queries[0]
        assert q.filters.location_name == "Leeds"
        assert q.filters.temp is True
        assert q.filters.contract is True
        assert q.exclude_keywords == ["ai", "machine"]
        assert q.max_age_days == 7

    def test_from_yaml_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.from_yaml(tmp_path / "nope.yaml")

    def test_from_yaml_empty_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("")
        with pytest.raises(ValidationError):
            Settings.from_yaml(config_file)

    def test_example_config_loads(self) -> None:
        example = Path(__file__).parent.parent.parent / "config" / "settings.example.yaml"
        s = Settings.from_yaml(example)
        assert [q.keywords for q in s.queries] == ["python", "typescript"]
