"""
Pod index client.
Fetches the JSON documents that list available pods.

Two document shapes are accepted:
    legacy:  {"name": "https://host/name.git", ...}
    current: {"name": {"url": ..., "author": ..., "description": ..., "license": ...}, ...}
"""
import logging
from typing import Any, List, Optional

import requests

from .models import Pod

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def _as_text(value: Any) -> str:
    # Non-string JSON values carry no usable text
    return value if isinstance(value, str) else ""


def parse_index(document: Any) -> List[Pod]:
    """Turn an index document into pods, in alphabetical name order."""
    if not isinstance(document, dict):
        logger.warning("Pod index is not a JSON object, ignoring it")
        return []

    pods = []
    for name in sorted(document):
        entry = document[name]
        if isinstance(entry, dict):
            pods.append(Pod(
                name=name,
                url=_as_text(entry.get("url")),
                author=_as_text(entry.get("author")),
                description=_as_text(entry.get("description")),
                license=_as_text(entry.get("license")),
            ))
        else:
            pods.append(Pod(name=name, url=_as_text(entry)))
    return pods


def fetch_index(source: str, timeout: float = DEFAULT_TIMEOUT) -> Optional[Any]:
    """
    Download and decode one index document.

    Returns None when the source cannot be reached, answers with an
    error status, or does not serve valid JSON.
    """
    try:
        response = requests.get(source, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.warning(f"Could not fetch pod index {source}: {e}")
        return None

    try:
        return response.json()
    except ValueError as e:
        logger.warning(f"Pod index {source} is not valid JSON: {e}")
        return None


def list_available_pods(sources: List[str], timeout: float = DEFAULT_TIMEOUT) -> List[Pod]:
    """Collect the pods offered by every source, in source order."""
    pods = []
    for source in sources:
        document = fetch_index(source, timeout=timeout)
        if document is None:
            continue
        source_pods = parse_index(document)
        logger.info(f"Pod index {source} lists {len(source_pods)} pods")
        pods.extend(source_pods)
    return pods
