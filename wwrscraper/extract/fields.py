"""
Field extraction for a single job posting page.

Every field has an ordered tuple of extractors, each a plain function of a
``DetailPage`` returning a value or None. ``first_match`` runs them in order
and stops at the first non-empty value, so the order is the priority:
JSON-LD first, then the site's known selectors, then regex heuristics over
broader page text. The regex extractors are best-effort and may pick up the
wrong phrase on unusual layouts; they only run when everything above them
came back empty.
"""
import re
from dataclasses import dataclass, field
from functools import cached_property
from typing import Optional
from urllib.parse import urlparse

from parsel import Selector
from w3lib.html import replace_entities

from wwrscraper.extract.jsonld import extract_job_posting
from wwrscraper.extract.salary import parse_salary
from wwrscraper.extract.sanitize import html_to_text, sanitize_html
from wwrscraper.items import SOURCE, JobItem, SalaryInfo

DEFAULT_LOCATION = "Anywhere in the World"

COMPANY_MAX_LENGTH = 120
COMPANY_NOISE_LENGTH = 80

HEADER_BLOCKS = ".lis-container__header, .listing-header-container, .job-info"
ABOUT_ITEMS = ".lis-container__job__sidebar__job-about__list__item, .job-about li"

TITLE_SELECTORS = (
    ".lis-container__header__hero__company-info__title",
    "h1.listing-header",
    ".listing-header h1",
    "h1",
)
COMPANY_SELECTORS = (
    ".lis-container__job__sidebar__companyDetails__info__title h3",
    ".company-card h2",
    ".company h2",
    ".company h3",
    'a[href*="/company/"]',
)
DESCRIPTION_CONTAINERS = (
    "#job-details",
    ".lis-container__job__content__description",
    ".listing-container",
    '[class*="job-description"]',
    ".job-details",
)
DESCRIPTION_NOISE = ".listing-header-container, .apply-section, .related-jobs"
LOCATION_SELECTORS = (".region", ".location", '[class*="region"]')
JOB_TYPE_TAGS = (
    ".listing-tag, .job-type, [class*='job-type'], "
    ".lis-container__header__navigation__tags__link, "
    ".lis-container__job__sidebar__job-about__list__item .box"
)
SALARY_SELECTORS = (".compensation", ".salary", '[class*="salary"]', '[class*="compensation"]')
CATEGORY_SELECTORS = (
    '.lis-container__header a[href*="/categories/"]',
    '.listing-header-container a[href*="/categories/"]',
)
PUBLISHED_META = (
    'meta[property="article:published_time"]::attr(content)',
    'meta[name="date"]::attr(content)',
)

JOB_TYPE_KEYWORDS = re.compile(
    r"\b(?:full[-_\s]?time|part[-_\s]?time|contract|freelance|temporary|intern(?:ship)?|permanent|gig|project)\b",
    re.IGNORECASE,
)
JOB_TYPE_DELIMITERS = re.compile(r"\s*[,/|;•·]\s*")

POSTED = re.compile(
    r"Posted\s+(?:on\s+)?("
    r"\d+\s+(?:minute|hour|day|week|month|year)s?(?:\s+ago)?"
    r"|[A-Z][a-z]{2,8}\.?\s+\d{1,2}(?:,?\s+\d{4})?"
    r"|\d{4}-\d{2}-\d{2}(?:T[\d:.+\-Z]+)?"
    r"|today|yesterday"
    r")",
    re.IGNORECASE,
)
# A label value ends at the line end, a pipe, or the next header label
LABEL_END = r"(?=\s+(?:Region|Location|Job\s+type|Salary|Pay|Compensation|Posted|Apply)\b|\s*[\n|]|\s*$)"
LOCATION_LABEL = re.compile(rf"(?:Region|Location)\s*:?\s*([^\n|]+?){LABEL_END}", re.IGNORECASE)
JOB_TYPE_LABEL = re.compile(r"Job\s+type\s*:?\s*(Full[-\s]?Time|Part[-\s]?Time|Contract|Freelance)", re.IGNORECASE)
SALARY_LABEL = re.compile(rf"(?:Salary|Pay|Compensation)\s*:?\s*([^\n|]+?){LABEL_END}", re.IGNORECASE)
AT_COMPANY = re.compile(r"\bat\s+(.+?)(?:\s+[|:\-–—]\s|$)")
WE_ARE = re.compile(r"We(?:'|’)re\s+([^!\n]+?)!")

BRACKETED = re.compile(r"\[[^\]]*\]|\([^)]*\)")
QUERY_NOISE = re.compile(r"\?\S*|\butm_[a-z]+=\S*", re.IGNORECASE)
WHITESPACE = re.compile(r"\s+")
HORIZONTAL_SPACE = re.compile(r"[^\S\n]+")
LINE_BREAK = re.compile(r"\s*\n\s*")

ENCODED_TAG = re.compile(r"&lt;\s*/?\s*[a-zA-Z][a-zA-Z0-9]*(?:\s.*?)?/?&gt;")
LITERAL_TAG = re.compile(r"<\s*/?\s*[a-zA-Z]")


class DetailPage:
    """A job posting response plus lazily computed regions shared by the extractors."""

    def __init__(self, response, category=None):
        self.response = response
        self.category = category

    @cached_property
    def structured(self):
        return extract_job_posting(self.response) or {}

    @cached_property
    def header_text(self):
        return "\n".join(node_lines(block) for block in self.response.css(HEADER_BLOCKS))

    @cached_property
    def about_items(self):
        return self.response.css(ABOUT_ITEMS)

    @cached_property
    def body_text(self):
        return html_to_text(self.response.css("body").get() or "")

    def about_value(self, label):
        """Value of the first sidebar "about" item whose text mentions ``label``."""
        for item in self.about_items:
            text = node_text(item)
            if label not in text.lower():
                continue
            values = [node_text(v) for v in item.css("span, a")]
            values = [v for v in values if v]
            if values:
                return ", ".join(values)
            return re.sub(rf"^.*?{label}\w*\s*(?:on\s*)?:?\s*", "", text, flags=re.IGNORECASE) or None
        return None


@dataclass
class JobRecordBuilder:
    title: Optional[str] = None
    company: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[str] = None
    date_posted: Optional[str] = None
    description_html: Optional[str] = None
    description_text: Optional[str] = None
    salary: SalaryInfo = field(default_factory=SalaryInfo)

    def build(self, url, source=SOURCE):
        return JobItem(
            title=self.title,
            company=self.company,
            category=self.category,
            location=self.location,
            job_type=self.job_type,
            date_posted=self.date_posted,
            description_html=self.description_html,
            description_text=self.description_text,
            salary_text=self.salary.text,
            salary_min=self.salary.min,
            salary_max=self.salary.max,
            salary_currency=self.salary.currency,
            salary_interval=self.salary.interval,
            url=url,
            source=source,
        )


def node_text(selector):
    return WHITESPACE.sub(" ", " ".join(selector.xpath(".//text()").getall())).strip()


def node_lines(selector):
    """Like ``node_text`` but keeps the line breaks of the source markup."""
    text = HORIZONTAL_SPACE.sub(" ", " ".join(selector.xpath(".//text()").getall()))
    return LINE_BREAK.sub("\n", text).strip()


def inner_html(selector):
    return "".join(selector.xpath("./node()").getall())


def first_text(response, selectors):
    for css in selectors:
        for node in response.css(css):
            text = node_text(node)
            if text:
                return text
    return None


def first_match(extractors, page):
    for extractor in extractors:
        value = extractor(page)
        if isinstance(value, str):
            value = value.strip()
        if value:
            return value
    return None


# Title

def title_from_structured(page):
    return page.structured.get("title")


def title_from_headings(page):
    return first_text(page.response, TITLE_SELECTORS)


TITLE_EXTRACTORS = (title_from_structured, title_from_headings)


# Company

def clean_company(value):
    if not value:
        return None
    value = replace_entities(value)
    value = BRACKETED.sub(" ", value)
    value = QUERY_NOISE.sub(" ", value)
    value = WHITESPACE.sub(" ", value).strip(" -|,:")
    return value[:COMPANY_MAX_LENGTH] or None


def plausible_company(value):
    value = clean_company(value)
    if value and len(value) > COMPANY_NOISE_LENGTH:
        return None
    return value


def company_from_structured(page):
    return plausible_company(page.structured.get("company"))


def company_from_selectors(page):
    return plausible_company(first_text(page.response, COMPANY_SELECTORS))


def company_from_profile_link(page):
    href = page.response.css('a[href*="/company/"]::attr(href)').get()
    if not href:
        return None
    path = urlparse(href).path.rstrip("/")
    slug = path.rsplit("/company/", 1)[-1].split("/")[0]
    words = [w for w in re.split(r"[-_]+", slug) if w]
    return plausible_company(" ".join(w.capitalize() for w in words))


def company_from_page_title(page):
    titles = page.response.css(
        'meta[property="og:title"]::attr(content), meta[name="twitter:title"]::attr(content), title::text'
    ).getall()
    for title in titles:
        match = AT_COMPANY.search(title.strip())
        if match:
            company = plausible_company(match.group(1))
            if company:
                return company
    return None


def company_from_header(page):
    match = WE_ARE.search(page.header_text)
    return plausible_company(match.group(1)) if match else None


COMPANY_EXTRACTORS = (
    company_from_structured,
    company_from_selectors,
    company_from_profile_link,
    company_from_page_title,
    company_from_header,
)


# Description

def description_from_structured(page):
    markup = page.structured.get("description_html")
    # JSON-LD descriptions often arrive entity-encoded ("&lt;p&gt;...")
    if markup and ENCODED_TAG.search(markup) and not LITERAL_TAG.search(markup):
        markup = replace_entities(markup, keep=("amp",))
    return sanitize_html(markup)


def description_from_containers(page):
    """Sanitized markup of the candidate container with the most text."""
    best, best_length = None, 0
    for container in page.response.css(", ".join(DESCRIPTION_CONTAINERS)):
        fragment = Selector(text=container.get())
        for noise in fragment.css(DESCRIPTION_NOISE):
            noise.drop()
        cleaned = sanitize_html(inner_html(fragment.css("body")))
        length = len(html_to_text(cleaned))
        if length > best_length:
            best, best_length = cleaned, length
    return best


def description_from_body(page):
    return sanitize_html(inner_html(page.response.css("body")))


DESCRIPTION_EXTRACTORS = (
    description_from_structured,
    description_from_containers,
    description_from_body,
)


# Location

def location_from_structured(page):
    return page.structured.get("location")


def location_from_selectors(page):
    return first_text(page.response, LOCATION_SELECTORS)


def location_from_about(page):
    return page.about_value("region") or page.about_value("location")


def location_from_header(page):
    match = LOCATION_LABEL.search(page.header_text)
    return match.group(1) if match else None


def location_default(page):
    return DEFAULT_LOCATION


LOCATION_EXTRACTORS = (
    location_from_structured,
    location_from_selectors,
    location_from_about,
    location_from_header,
    location_default,
)


# Date posted

def date_from_structured(page):
    return page.structured.get("date_posted")


def date_from_time_element(page):
    time = page.response.css("time")
    if not time:
        return None
    return time[0].attrib.get("datetime") or node_text(time[0])


def date_from_header(page):
    match = POSTED.search(page.header_text)
    return match.group(1) if match else None


def date_from_meta(page):
    for css in PUBLISHED_META:
        value = page.response.css(css).get()
        if value and value.strip():
            return value
    return None


def date_from_about(page):
    return page.about_value("posted")


def date_from_body(page):
    match = POSTED.search(page.body_text)
    return match.group(1) if match else None


DATE_EXTRACTORS = (
    date_from_structured,
    date_from_time_element,
    date_from_header,
    date_from_meta,
    date_from_about,
    date_from_body,
)


# Job type

def normalize_job_type(value):
    """Keep only the employment-type tokens of a delimited job type string."""
    if not value:
        return None
    tokens = []
    for part in JOB_TYPE_DELIMITERS.split(value):
        part = part.strip()
        if part and JOB_TYPE_KEYWORDS.search(part) and part not in tokens:
            tokens.append(part)
    return ", ".join(tokens) if tokens else value


def job_type_from_structured(page):
    return page.structured.get("job_type")


def job_type_from_tags(page):
    candidates = []
    for tag in page.response.css(JOB_TYPE_TAGS):
        text = node_text(tag)
        if text and text not in candidates:
            candidates.append(text)
    if not candidates:
        return None
    matches = [c for c in candidates if JOB_TYPE_KEYWORDS.search(c)]
    return ", ".join(matches or candidates)


def job_type_from_header(page):
    match = JOB_TYPE_LABEL.search(page.header_text)
    return match.group(1) if match else None


JOB_TYPE_EXTRACTORS = (job_type_from_structured, job_type_from_tags, job_type_from_header)


# Salary

def salary_from_structured(page):
    return page.structured.get("salary")


def salary_from_selectors(page):
    return first_text(page.response, SALARY_SELECTORS)


def salary_from_about(page):
    return page.about_value("salary")


def salary_from_header(page):
    match = SALARY_LABEL.search(page.header_text)
    return match.group(1) if match else None


SALARY_EXTRACTORS = (salary_from_structured, salary_from_selectors, salary_from_about, salary_from_header)


# Category

def category_from_header(page):
    return first_text(page.response, CATEGORY_SELECTORS)


def category_from_config(page):
    return page.category


CATEGORY_EXTRACTORS = (category_from_header, category_from_config)


def extract_job(response, category=None):
    """Build the JobItem for a job posting response."""
    page = DetailPage(response, category)

    description_html = first_match(DESCRIPTION_EXTRACTORS, page)
    builder = JobRecordBuilder(
        title=first_match(TITLE_EXTRACTORS, page),
        company=first_match(COMPANY_EXTRACTORS, page),
        category=first_match(CATEGORY_EXTRACTORS, page),
        location=first_match(LOCATION_EXTRACTORS, page),
        job_type=normalize_job_type(first_match(JOB_TYPE_EXTRACTORS, page)),
        date_posted=first_match(DATE_EXTRACTORS, page),
        description_html=description_html,
        description_text=html_to_text(description_html) or None,
        salary=parse_salary(first_match(SALARY_EXTRACTORS, page)),
    )
    return builder.build(response.url)
