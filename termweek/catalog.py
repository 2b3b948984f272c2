"""
Calendar templates.

Built-in templates ship with the package; more can be pulled from a remote
JSON catalog (a list of template records, or {"templates": [...]}).
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests

from termweek.builtin import BUILTIN_TEMPLATES
from termweek.model import CalendarTemplate

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when a remote template catalog cannot be fetched or read."""


# ---------------------------------------------------------------------------
# Built-in templates
# ---------------------------------------------------------------------------


def list_templates(extra: Optional[List[CalendarTemplate]] = None) -> List[CalendarTemplate]:
    """
    Built-in templates followed by any extra (e.g. remote) ones.
    """
    return list(BUILTIN_TEMPLATES) + list(extra or [])


def find_template(name: str, templates: Optional[List[CalendarTemplate]] = None) -> Optional[CalendarTemplate]:
    """
    Case-insensitive lookup by university name: exact match first, then substring.
    """
    needle = name.strip().lower()
    if not needle:
        return None
    pool = templates if templates is not None else list_templates()
    for t in pool:
        if t.university_name.lower() == needle:
            return t
    for t in pool:
        if needle in t.university_name.lower():
            return t
    return None


# ---------------------------------------------------------------------------
# Remote catalog
# ---------------------------------------------------------------------------


def _parse_templates(payload: Any) -> List[CalendarTemplate]:
    """
    Accept a JSON list of template records or {"templates": [...]}.
    Malformed entries are skipped.
    """
    if isinstance(payload, dict):
        payload = payload.get("templates", [])
    if not isinstance(payload, list):
        raise CatalogError("Catalog must be a list of templates")

    out: List[CalendarTemplate] = []
    for record in payload:
        try:
            out.append(CalendarTemplate.from_dict(record))
        except ValueError as e:
            logger.warning("Skipping invalid catalog entry: %s", e)
    return out


def fetch_remote_templates(url: str, timeout: float = 30.0) -> List[CalendarTemplate]:
    """
    Download additional institution templates from a JSON catalog.
    """
    logger.info("Fetching template catalog: %s", url)
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        payload = resp.json()
    except requests.RequestException as e:
        raise CatalogError(f"Could not fetch catalog {url}: {e}") from e
    except ValueError as e:
        raise CatalogError(f"Catalog {url} is not valid JSON") from e

    templates = _parse_templates(payload)
    logger.info("Found %d templates", len(templates))
    return templates
