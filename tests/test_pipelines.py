import pytest
from scrapy.exceptions import DropItem

from wwrscraper.extract.fields import JobRecordBuilder
from wwrscraper.items import JOB_FIELDS, JobLinkItem
from wwrscraper.pipelines import JobRecordPipeline
from wwrscraper.spiders.weworkremotely import WeWorkRemotelySpider

URL = "https://weworkremotely.com/remote-jobs/acme-designer"


@pytest.fixture
def spider():
    return WeWorkRemotelySpider()


def test_job_item_mapped_to_full_record(spider):
    item = JobRecordBuilder(title="Designer", location="Europe").build(URL)
    record = JobRecordPipeline().process_item(item, spider)
    assert list(record) == list(JOB_FIELDS)
    assert record["title"] == "Designer"
    assert record["salary_min"] is None
    assert record["source"] == "weworkremotely.com"


def test_link_item_mapped_to_url_and_source(spider):
    record = JobRecordPipeline().process_item(JobLinkItem(url=URL, source="weworkremotely.com"), spider)
    assert record == {"url": URL, "source": "weworkremotely.com"}


def test_duplicate_url_dropped(spider):
    pipeline = JobRecordPipeline()
    pipeline.process_item(JobLinkItem(url=URL, source="weworkremotely.com"), spider)
    with pytest.raises(DropItem):
        pipeline.process_item(JobRecordBuilder(title="Again").build(URL), spider)


def test_item_without_url_dropped(spider):
    with pytest.raises(DropItem):
        JobRecordPipeline().process_item(JobLinkItem(source="weworkremotely.com"), spider)


def test_unknown_item_type_dropped(spider):
    pipeline = JobRecordPipeline()
    with pytest.raises(DropItem):
        pipeline.process_item({"url": URL, "title": "Designer"}, spider)
    # the url is still free for a real record
    assert pipeline.process_item(JobLinkItem(url=URL, source="weworkremotely.com"), spider)["url"] == URL
