import pytest
from scrapy.http import HtmlResponse, Request

DETAIL_URL = "https://weworkremotely.com/remote-jobs/acme-corp-senior-python-engineer"
LIST_URL = "https://weworkremotely.com/categories/remote-back-end-programming-jobs"


def make_response(body, url=DETAIL_URL, meta=None):
    request = Request(url, meta=meta or {})
    return HtmlResponse(url=url, body=body.encode("utf-8"), encoding="utf-8", request=request)


def listing_html(count, extra=""):
    items = "".join(
        f'<li><a href="/remote-jobs/company-{i}-role-{i}">Role {i}</a>'
        f'<a href="/company/company-{i}">Company {i}</a></li>'
        for i in range(count)
    )
    return f"<html><body><ul class='jobs'>{items}</ul>{extra}</body></html>"


@pytest.fixture
def detail_page():
    """Posting in the current lis-container layout, without JSON-LD."""
    return make_response("""
    <html>
      <head>
        <title>Senior Python Engineer at Acme Corp | We Work Remotely</title>
      </head>
      <body>
        <div class="lis-container__header">
          <h2 class="lis-container__header__hero__company-info__title">Senior Python Engineer</h2>
          <a class="lis-container__header__navigation__tags__link" href="/categories/remote-back-end-programming-jobs">Back-End Programming</a>
          <span class="lis-container__header__navigation__tags__link">Featured</span>
          <span class="lis-container__header__navigation__tags__link">Full-Time</span>
        </div>
        <div class="lis-container__job__content__description">
          <p>We build <strong>tools</strong> for remote teams.</p>
          <ul><li>Python</li><li>Postgres</li></ul>
          <script>track()</script>
        </div>
        <div class="lis-container__job__sidebar">
          <div class="lis-container__job__sidebar__companyDetails__info__title"><h3>Acme Corp</h3></div>
          <ul>
            <li class="lis-container__job__sidebar__job-about__list__item">Posted on <span>Oct 12, 2026</span></li>
            <li class="lis-container__job__sidebar__job-about__list__item">Region <span class="box box--region">Americas</span></li>
            <li class="lis-container__job__sidebar__job-about__list__item">Salary <span class="box box--blue">$100,000 - $124,999 USD</span></li>
          </ul>
        </div>
      </body>
    </html>
    """)


@pytest.fixture
def jsonld_page():
    return make_response("""
    <html>
      <head>
        <script type="application/ld+json">{not json</script>
        <script type="application/ld+json">{"@type": "Organization", "name": "WWR"}</script>
        <script type="application/ld+json">
        [{"@context": "https://schema.org", "@type": "JobPosting",
          "title": "Data Engineer",
          "hiringOrganization": {"@type": "Organization", "name": "Globex"},
          "datePosted": "2026-10-01",
          "description": "&lt;p&gt;Move &lt;em&gt;data&lt;/em&gt; around.&lt;/p&gt;",
          "employmentType": ["FULL_TIME", "CONTRACTOR"],
          "jobLocation": {"address": {"addressRegion": "Europe", "addressCountry": "DE"}},
          "baseSalary": {"@type": "MonetaryAmount", "currency": "EUR",
                         "value": {"@type": "QuantitativeValue", "minValue": 60000, "maxValue": 80000}}}]
        </script>
        <script type="application/ld+json">{"@type": "JobPosting", "title": "Ignored"}</script>
      </head>
      <body><h1>Page heading</h1></body>
    </html>
    """)
