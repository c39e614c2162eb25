# Define your item pipelines here
#
# Don't forget to add your pipeline to the ITEM_PIPELINES setting
# See: https://docs.scrapy.org/en/latest/topics/item-pipeline.html

from itemadapter import ItemAdapter
from scrapy.exceptions import DropItem

from wwrscraper.items import JOB_FIELDS, SOURCE, JobItem, JobLinkItem


class JobRecordPipeline:
    """
    Adapter between the spider and the feed exporter:
    - Maps JobItem / JobLinkItem to the exported record shape
    - Drops anything already written for the same url
    """

    def __init__(self):
        self.urls_seen = set()

    def process_item(self, item, spider):
        adapter = ItemAdapter(item)
        url = adapter.get("url")
        if not isinstance(item, (JobItem, JobLinkItem)):
            raise DropItem(f"Unexpected item type {type(item).__name__}")
        if not url:
            raise DropItem(f"Record without url: {item!r}")
        if url in self.urls_seen:
            raise DropItem(f"Duplicate record for {url}")
        self.urls_seen.add(url)

        if isinstance(item, JobItem):
            record = {name: adapter.get(name) for name in JOB_FIELDS}
        else:
            record = {"url": url, "source": adapter.get("source")}
        record["source"] = record.get("source") or SOURCE

        crawler = getattr(spider, "crawler", None)
        if crawler is not None:
            crawler.stats.inc_value("wwr/items_saved")
        return record
