import json
import logging

logger = logging.getLogger(__name__)

JOB_POSTING = "JobPosting"


def extract_job_posting(response):
    """
    Return the fields of the first schema.org JobPosting embedded in the page
    as JSON-LD, or None. Malformed blocks are skipped.
    """
    json_ld_data = response.xpath('//script[@type="application/ld+json"]/text()').getall()

    for data in json_ld_data:
        try:
            parsed = json.loads(data)
        except (json.JSONDecodeError, TypeError) as e:
            logger.debug("Ignoring malformed JSON-LD block on %s: %s", response.url, e)
            continue

        for entry in _entries(parsed):
            if _is_job_posting(entry):
                return _job_fields(entry)
    return None


def _entries(parsed):
    # Sometimes it's a list, sometimes a single object, sometimes a @graph
    if isinstance(parsed, list):
        return [e for e in parsed if isinstance(e, dict)]
    if isinstance(parsed, dict):
        graph = parsed.get("@graph")
        if isinstance(graph, list):
            return [parsed] + [e for e in graph if isinstance(e, dict)]
        return [parsed]
    return []


def _is_job_posting(entry):
    declared = entry.get("@type") or entry.get("type")
    if isinstance(declared, list):
        return JOB_POSTING in declared
    return declared == JOB_POSTING


def _job_fields(entry):
    organization = entry.get("hiringOrganization")
    if isinstance(organization, dict):
        company = organization.get("name")
    else:
        company = organization

    employment_type = entry.get("employmentType")
    if isinstance(employment_type, list):
        employment_type = ", ".join(str(t) for t in employment_type if t)

    return {
        "title": _text(entry.get("title") or entry.get("name")),
        "company": _text(company),
        "date_posted": _text(entry.get("datePosted")),
        "description_html": _text(entry.get("description")),
        "location": _location(entry),
        "job_type": _text(employment_type),
        "salary": _salary(entry.get("baseSalary")),
    }


def _location(entry):
    locations = entry.get("jobLocation")
    if isinstance(locations, list):
        locations = locations[0] if locations else None

    address = locations.get("address") if isinstance(locations, dict) else None
    if isinstance(address, dict):
        for key in ("addressLocality", "addressRegion", "addressCountry"):
            value = address.get(key)
            if isinstance(value, dict):
                value = value.get("name")
            if _text(value):
                return _text(value)
    elif _text(address):
        return _text(address)

    # Remote postings name the allowed region instead of an address
    requirements = entry.get("applicantLocationRequirements")
    if isinstance(requirements, list):
        requirements = requirements[0] if requirements else None
    if isinstance(requirements, dict):
        return _text(requirements.get("name"))
    return None


def _salary(base_salary):
    if not base_salary:
        return None
    if not isinstance(base_salary, dict):
        return _text(base_salary)

    value = base_salary.get("value")
    if isinstance(value, dict):
        low, high = value.get("minValue"), value.get("maxValue")
        if low is not None and high is not None:
            amount = f"{low} - {high}"
        else:
            amount = value.get("value", low if low is not None else high)
    else:
        amount = value
    if amount is None or amount == "":
        return None

    currency = base_salary.get("currency")
    return _text(f"{currency} {amount}" if currency else amount)


def _text(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None
