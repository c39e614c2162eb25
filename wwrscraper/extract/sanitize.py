"""
HTML clean-up for job descriptions.

``sanitize_html`` reduces arbitrary posting markup to a small allow-listed
subset that is safe to store and re-render. ``html_to_text`` flattens markup
to a single line of plain text.
"""
import html
import re

from lxml import etree
from lxml import html as lxml_html
from w3lib.html import remove_tags, remove_tags_with_content, replace_entities

ALLOWED_TAGS = frozenset(["p", "br", "strong", "b", "em", "i", "ul", "ol", "li", "a"])

# Dropped together with their content
REMOVED_TAGS = (
    "script", "style", "noscript", "iframe", "frame", "frameset", "object", "embed",
    "form", "input", "button", "select", "textarea", "label",
    "head", "meta", "link", "title", "template", "svg",
)

NON_TEXT_TAGS = ("script", "style", "noscript", "iframe", "frame")

NEWLINE_RUN = re.compile(r"\s*\n\s*")
WHITESPACE = re.compile(r"\s+")


def sanitize_html(markup):
    if not markup or not markup.strip():
        return None

    try:
        root = lxml_html.fragment_fromstring(markup, create_parent="div")
    except etree.ParserError:
        return None
    etree.strip_elements(root, etree.Comment, etree.ProcessingInstruction, *REMOVED_TAGS, with_tail=False)

    for el in list(root.iterdescendants()):
        if el.tag not in ALLOWED_TAGS:
            el.drop_tag()
            continue
        for attr in list(el.attrib):
            if el.tag != "a" or attr != "href":
                del el.attrib[attr]

    cleaned = _inner_html(root)
    cleaned = NEWLINE_RUN.sub("\n", cleaned).strip()
    return cleaned or None


def html_to_text(markup):
    if not markup:
        return ""
    text = remove_tags_with_content(markup, which_ones=NON_TEXT_TAGS)
    text = replace_entities(remove_tags(text))
    return WHITESPACE.sub(" ", text).strip()


def _inner_html(root):
    parts = [html.escape(root.text or "", quote=False)]
    for child in root:
        parts.append(lxml_html.tostring(child, encoding="unicode", with_tail=True))
    return "".join(parts)
