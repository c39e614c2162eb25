# Define here the models for your scraped items
#
# See documentation in:
# https://docs.scrapy.org/en/latest/topics/items.html

from dataclasses import dataclass
from typing import Optional, Union

import scrapy

SOURCE = "weworkremotely.com"

Number = Union[int, float]


class JobItem(scrapy.Item):
    title = scrapy.Field()
    company = scrapy.Field()
    category = scrapy.Field()
    location = scrapy.Field()
    job_type = scrapy.Field()
    date_posted = scrapy.Field()
    description_html = scrapy.Field()
    description_text = scrapy.Field()

    # Salary, split by extract.salary.parse_salary
    salary_text = scrapy.Field()
    salary_min = scrapy.Field()
    salary_max = scrapy.Field()
    salary_currency = scrapy.Field()
    salary_interval = scrapy.Field()

    url = scrapy.Field()
    source = scrapy.Field()


class JobLinkItem(scrapy.Item):
    """Link-only record, emitted when detail pages are not collected."""
    url = scrapy.Field()
    source = scrapy.Field()


# Output order of JobItem fields in the exported feed
JOB_FIELDS = (
    "title", "company", "category", "location", "job_type", "date_posted",
    "description_html", "description_text",
    "salary_text", "salary_min", "salary_max", "salary_currency", "salary_interval",
    "url", "source",
)


@dataclass(frozen=True)
class SalaryInfo:
    text: Optional[str] = None
    min: Optional[Number] = None
    max: Optional[Number] = None
    currency: Optional[str] = None
    interval: Optional[str] = None

    def __post_init__(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"salary min {self.min} is greater than max {self.max}")
