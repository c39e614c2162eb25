import re
from urllib.parse import urldefrag, urljoin, urlparse

from w3lib.url import add_or_replace_parameter

# One path segment under the listing namespace; /remote-jobs/search and
# /remote-jobs/new are listing pages, not postings
JOB_PATH = re.compile(r"^/remote-jobs/(?!(?:search|new)/?$)[^/]+/?$", re.IGNORECASE)


def find_job_links(response, base_url):
    """Absolute job posting urls on a listing page, in document order, without duplicates."""
    links = []
    for href in response.css('a[href*="/remote-jobs/"]::attr(href)').getall():
        url = to_absolute(href.strip(), base_url)
        if not url or not JOB_PATH.match(urlparse(url).path):
            continue
        if url not in links:
            links.append(url)
    return links


def find_next_page(current_url, current_page_number):
    if not is_absolute(current_url):
        return None
    return add_or_replace_parameter(current_url, "page", str(current_page_number + 1))


def to_absolute(href, base_url):
    try:
        url = urldefrag(urljoin(base_url, href)).url
    except ValueError:
        return None
    return url if is_absolute(url) else None


def is_absolute(url):
    try:
        parsed = urlparse(url)
    except (TypeError, ValueError):
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
