"""
Crawl input.

Spider arguments arrive as strings from ``scrapy crawl -a key=value``; an
``input_file`` JSON object uses the hosted actor's input shape, with typed
values and camelCase keys. Both are normalized here into a ``CrawlConfig``.
"""
import itertools
import json
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urlencode

from wwrscraper.links import is_absolute

BASE_URL = "https://weworkremotely.com"
DEFAULT_CATEGORY = "all-other-remote-jobs"
DEFAULT_RESULTS_WANTED = 100
DEFAULT_MAX_PAGES = 999

# camelCase input keys and their snake_case names
ALIASES = {
    "collectDetails": "collect_details",
    "startUrl": "start_url",
    "startUrls": "start_urls",
    "proxyConfiguration": "proxy_configuration",
    "resultsWanted": "results_wanted",
    "maxPages": "max_pages",
}

TRUE_VALUES = ("1", "true", "yes", "y", "on")
FALSE_VALUES = ("0", "false", "no", "n", "off", "")


class ConfigurationError(ValueError):
    """The input cannot produce a single seed url."""


@dataclass
class CrawlConfig:
    category: str = DEFAULT_CATEGORY
    keyword: str = ""
    location: str = ""
    results_wanted: Optional[int] = DEFAULT_RESULTS_WANTED
    max_pages: int = DEFAULT_MAX_PAGES
    collect_details: bool = True
    start_urls: List[str] = field(default_factory=list)
    proxy_urls: List[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, values):
        values = {ALIASES.get(k, k): v for k, v in values.items() if v is not None}

        seeds = parse_url_list(values.get("start_urls"))
        for key in ("start_url", "url"):
            seeds.extend(parse_url_list(values.get(key)))

        return cls(
            category=str(values.get("category") or DEFAULT_CATEGORY).strip(),
            keyword=str(values.get("keyword") or "").strip(),
            location=str(values.get("location") or "").strip(),
            results_wanted=parse_results_wanted(values.get("results_wanted", DEFAULT_RESULTS_WANTED)),
            max_pages=parse_max_pages(values.get("max_pages", DEFAULT_MAX_PAGES)),
            collect_details=parse_bool(values.get("collect_details", True)),
            start_urls=seeds,
            proxy_urls=parse_proxy_urls(values.get("proxy_configuration")),
        )

    @classmethod
    def from_file(cls, path, overrides=None):
        with open(path, "r", encoding="utf8") as f:
            values = json.load(f)
        if not isinstance(values, dict):
            raise ConfigurationError(f"{path} must hold a JSON object")
        values.update(overrides or {})
        return cls.from_mapping(values)

    def seed_urls(self):
        if self.start_urls:
            seeds = [u for u in self.start_urls if is_absolute(u)]
        else:
            seeds = [build_start_url(self.category, self.keyword, self.location)]
        if not seeds:
            raise ConfigurationError(f"no usable start url in {self.start_urls!r}")
        return seeds

    def proxies(self):
        """Endless round-robin over the configured proxies, or None."""
        return itertools.cycle(self.proxy_urls) if self.proxy_urls else None


def build_start_url(category, keyword="", location=""):
    if keyword:
        params = {"term": keyword}
        if location:
            params["region"] = location
        return f"{BASE_URL}/remote-jobs/search?{urlencode(params)}"
    return f"{BASE_URL}/categories/{category or DEFAULT_CATEGORY}"


def parse_results_wanted(value):
    number = _to_int(value)
    if number is None:
        return None
    return max(1, number)


def parse_max_pages(value):
    number = _to_int(value)
    if number is None:
        return DEFAULT_MAX_PAGES
    return max(1, number)


def parse_bool(value):
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigurationError(f"not a boolean: {value!r}")


def parse_url_list(value):
    """Accepts a list, a JSON list string, or a comma-separated string. Entries may be {"url": ...}."""
    if not value:
        return []
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            try:
                value = json.loads(text)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"start urls are not valid JSON: {e}") from e
        else:
            value = text.split(",")
    elif isinstance(value, dict):
        value = [value]

    urls = []
    for entry in value:
        if isinstance(entry, dict):
            entry = entry.get("url")
        if entry and str(entry).strip():
            urls.append(str(entry).strip())
    return urls


def parse_proxy_urls(value):
    if not value:
        return []
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("{") or text.startswith("["):
            try:
                value = json.loads(text)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"proxy configuration is not valid JSON: {e}") from e
        else:
            return [u.strip() for u in text.split(",") if u.strip()]
    if isinstance(value, dict):
        value = value.get("proxyUrls") or value.get("proxy_urls") or []
    return [str(u).strip() for u in value if u and str(u).strip()]


def _to_int(value):
    if isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
