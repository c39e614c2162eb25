import enum

import scrapy

from wwrscraper.budget import CrawlBudget
from wwrscraper.config import CrawlConfig
from wwrscraper.extract.fields import extract_job
from wwrscraper.items import SOURCE, JobLinkItem
from wwrscraper.links import find_job_links, find_next_page


class RequestKind(str, enum.Enum):
    LIST = "LIST"
    DETAIL = "DETAIL"


class WeWorkRemotelySpider(scrapy.Spider):
    """
    Two-phase crawl of weworkremotely.com.

    LIST requests are category or search result pages: they yield DETAIL
    requests for the postings they link to and, while the budget lasts, the
    next result page. DETAIL requests are postings and yield one JobItem each.
    """
    name = "weworkremotely"

    def __init__(self, input_file=None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        arguments = {k: v for k, v in kwargs.items() if k != "name"}

        if input_file:
            self.config = CrawlConfig.from_file(input_file, overrides=arguments)
        else:
            self.config = CrawlConfig.from_mapping(arguments)

        self.seeds = self.config.seed_urls()
        self.budget = CrawlBudget(self.config.results_wanted, self.config.max_pages)
        self._proxies = self.config.proxies()
        self._exhaustion_logged = False

    async def start(self):
        for url in self.seeds:
            yield self.crawl_request(url, RequestKind.LIST, page_number=1)

    def crawl_request(self, url, kind, page_number=1):
        meta = {"kind": kind.value, "page_number": page_number}
        if self._proxies is not None:
            meta["proxy"] = next(self._proxies)
        return scrapy.Request(url, callback=self.parse, errback=self.on_fetch_error, meta=meta)

    def parse(self, response):
        kind = RequestKind(response.meta.get("kind", RequestKind.LIST.value))
        if kind is RequestKind.DETAIL:
            return self.parse_detail(response)
        return self.parse_list(response)

    def parse_list(self, response):
        page_number = response.meta.get("page_number", 1)
        links = find_job_links(response, response.url)
        self.logger.info(f"LIST {response.url} -> found {len(links)} links")

        if self.budget.exhausted:
            self.log_exhausted()
            return

        remaining = self.budget.remaining()
        if self.config.collect_details:
            for url in self.budget.claim_links(links, limit=remaining):
                yield self.crawl_request(url, RequestKind.DETAIL, page_number)
        else:
            fresh = self.budget.claim_links(links, limit=remaining)
            granted = self.budget.reserve(len(fresh))
            for url in fresh[:granted]:
                yield JobLinkItem(url=url, source=SOURCE)

        if self.budget.exhausted:
            self.log_exhausted()
            return
        if page_number < self.budget.max_pages and links:
            next_url = find_next_page(response.url, page_number)
            if next_url:
                yield self.crawl_request(next_url, RequestKind.LIST, page_number + 1)

    def parse_detail(self, response):
        if self.budget.exhausted:
            self.logger.debug(f"DETAIL {response.url} skipped, budget exhausted")
            return

        try:
            item = extract_job(response, category=self.config.category)
        except Exception as e:
            self.logger.error(f"DETAIL {response.url} failed: {e!r}")
            return

        if self.budget.try_record(item["url"]):
            yield item
        else:
            self.logger.debug(f"DETAIL {response.url} not saved, budget exhausted or already recorded")

    def on_fetch_error(self, failure):
        request = failure.request
        self.logger.error(
            f"{request.meta.get('kind', RequestKind.LIST.value)} {request.url} fetch failed: {failure.value!r}"
        )

    def log_exhausted(self):
        if not self._exhaustion_logged:
            self._exhaustion_logged = True
            self.logger.info(f"Budget of {self.budget.results_wanted} results reached, no further requests")

    def closed(self, reason):
        self.logger.info(f"Finished. Saved {self.budget.saved} items ({reason})")
