# Scrapy settings for wwrscraper project
#
# Only the settings this crawl changes from Scrapy's defaults. See:
# https://docs.scrapy.org/en/latest/topics/settings.html

BOT_NAME = "wwrscraper"

SPIDER_MODULES = ["wwrscraper.spiders"]
NEWSPIDER_MODULE = "wwrscraper.spiders"

USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36"

ROBOTSTXT_OBEY = True

# Worker pool and per-request limits
CONCURRENT_REQUESTS = 10
CONCURRENT_REQUESTS_PER_DOMAIN = 10
DOWNLOAD_TIMEOUT = 60
DOWNLOAD_DELAY = 0.25

RETRY_ENABLED = True
RETRY_TIMES = 3

ITEM_PIPELINES = {
    "wwrscraper.pipelines.JobRecordPipeline": 300,
}

# Overridden by -o / -O on the command line
FEEDS = {
    "output/jobs.jsonl": {"format": "jsonlines", "encoding": "utf8", "overwrite": False},
}
FEED_EXPORT_ENCODING = "utf-8"

LOG_LEVEL = "INFO"

TWISTED_REACTOR = "twisted.internet.asyncioreactor.AsyncioSelectorReactor"
