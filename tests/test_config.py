import json

import pytest

from wwrscraper.config import (
    DEFAULT_MAX_PAGES,
    ConfigurationError,
    CrawlConfig,
    build_start_url,
    parse_bool,
    parse_proxy_urls,
    parse_url_list,
)


def test_defaults():
    config = CrawlConfig.from_mapping({})
    assert config.category == "all-other-remote-jobs"
    assert config.results_wanted == 100
    assert config.max_pages == 999
    assert config.collect_details is True
    assert config.seed_urls() == ["https://weworkremotely.com/categories/all-other-remote-jobs"]
    assert config.proxies() is None


def test_spider_argument_strings():
    config = CrawlConfig.from_mapping({
        "results_wanted": "5", "max_pages": "0", "collectDetails": "false", "category": "remote-design-jobs",
    })
    assert config.results_wanted == 5
    assert config.max_pages == 1
    assert config.collect_details is False
    assert config.seed_urls() == ["https://weworkremotely.com/categories/remote-design-jobs"]


def test_invalid_numbers():
    config = CrawlConfig.from_mapping({"results_wanted": "lots", "max_pages": "many"})
    assert config.results_wanted is None
    assert config.max_pages == DEFAULT_MAX_PAGES


def test_keyword_builds_search_url():
    assert build_start_url("x", "python dev", "Europe") == (
        "https://weworkremotely.com/remote-jobs/search?term=python+dev&region=Europe"
    )


def test_explicit_seeds_override_category():
    config = CrawlConfig.from_mapping({
        "startUrls": [{"url": "https://weworkremotely.com/categories/a"}, "https://weworkremotely.com/categories/b"],
        "startUrl": "https://weworkremotely.com/categories/c",
        "url": "https://weworkremotely.com/categories/d",
        "category": "ignored",
    })
    assert config.seed_urls() == [
        "https://weworkremotely.com/categories/a",
        "https://weworkremotely.com/categories/b",
        "https://weworkremotely.com/categories/c",
        "https://weworkremotely.com/categories/d",
    ]


def test_no_usable_seed_is_fatal():
    config = CrawlConfig.from_mapping({"start_url": "not a url"})
    with pytest.raises(ConfigurationError):
        config.seed_urls()


def test_parse_url_list_forms():
    assert parse_url_list('["https://a.example/x", {"url": "https://b.example/y"}]') == [
        "https://a.example/x", "https://b.example/y",
    ]
    assert parse_url_list("https://a.example/x, https://b.example/y") == [
        "https://a.example/x", "https://b.example/y",
    ]
    assert parse_url_list(None) == []


def test_parse_bool():
    assert parse_bool(True) is True
    assert parse_bool("Yes") is True
    assert parse_bool("0") is False
    with pytest.raises(ConfigurationError):
        parse_bool("maybe")


def test_proxy_configuration_forms():
    assert parse_proxy_urls({"proxyUrls": ["http://p1:8000", "http://p2:8000"]}) == ["http://p1:8000", "http://p2:8000"]
    assert parse_proxy_urls('{"proxyUrls": ["http://p1:8000"]}') == ["http://p1:8000"]
    assert parse_proxy_urls("http://p1:8000,http://p2:8000") == ["http://p1:8000", "http://p2:8000"]

    proxies = CrawlConfig(proxy_urls=["http://p1:8000", "http://p2:8000"]).proxies()
    assert [next(proxies) for _ in range(3)] == ["http://p1:8000", "http://p2:8000", "http://p1:8000"]


def test_from_file_with_overrides(tmp_path):
    path = tmp_path / "input.json"
    path.write_text(json.dumps({"results_wanted": 20, "collectDetails": False, "keyword": "rust"}))
    config = CrawlConfig.from_file(path, overrides={"results_wanted": "3"})
    assert config.results_wanted == 3
    assert config.collect_details is False
    assert config.seed_urls() == ["https://weworkremotely.com/remote-jobs/search?term=rust"]


def test_from_file_rejects_non_object(tmp_path):
    path = tmp_path / "input.json"
    path.write_text("[]")
    with pytest.raises(ConfigurationError):
        CrawlConfig.from_file(path)
