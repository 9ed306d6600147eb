"""
Content Classifier. Guesses which kinds of personal data a search
snippet exposes, for sites that are not in the broker registry.

Heuristic only: false negatives are expected. Output is deterministic and
never empty ("name" when nothing else matches, since every hit at least
matched the subject's name).
"""

import re
from typing import List, Optional


# Each rule runs independently; order here is the order of the output tags.
CONTENT_RULES = [
    ("address", re.compile(
        r"\baddress(es)?\b|\bstreet\b|\b(st|ave|avenue|rd|road|blvd|drive|dr|lane|ln|apt)\b\.?"
        r"|\blives in\b|\bresides\b",
        re.IGNORECASE,
    )),
    ("phone", re.compile(
        r"\(?\b\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b|\bphone\b",
        re.IGNORECASE,
    )),
    ("email", re.compile(r"@|\bemail\b", re.IGNORECASE)),
    ("age", re.compile(
        r"\bage[ds]?\b|\b(born|birth|birthday|dob)\b|\b\d{2}\s*(years old|yrs)\b",
        re.IGNORECASE,
    )),
    ("relatives", re.compile(
        r"\brelatives?\b|\bfamily\b|\bassociates?\b|\bspouse\b|\bsibling",
        re.IGNORECASE,
    )),
    ("criminal", re.compile(
        r"\bcriminal\b|\bcourt\b|\barrests?\b|\bconvictions?\b|\bwarrants?\b|\boffen[cs]es?\b",
        re.IGNORECASE,
    )),
    ("assets", re.compile(
        r"\bassets?\b|\bpropert(y|ies)\b|\bhome value\b|\bvehicles?\b|\bbankrupt",
        re.IGNORECASE,
    )),
]

FALLBACK_TAG = "name"


def classify_content(snippet: Optional[str], subject_name: Optional[str] = None) -> List[str]:
    """
    Return the data-category tags a snippet appears to expose.

    Args:
        snippet: Search-result text (None treated as empty)
        subject_name: The scanned person's name; accepted for interface
            symmetry with the exposure builder, matching is name-agnostic

    Returns:
        Ordered, duplicate-free, non-empty list of tags
    """
    text = snippet or ""
    tags: List[str] = []

    for tag, pattern in CONTENT_RULES:
        if tag not in tags and pattern.search(text):
            tags.append(tag)

    return tags or [FALLBACK_TAG]
