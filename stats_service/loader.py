"""
Access log loading.
"""

import json
import logging
from pathlib import Path
from typing import List, Union

from .errors import DataUnavailable
from .models import ViewEvent

logger = logging.getLogger(__name__)

# Fields that form the page identity; each must be a string or null
PAGE_FIELDS = ("url", "title")


def load_view_events(logs_path: Union[str, Path]) -> List[ViewEvent]:
    """Load page view events from a JSON access log.

    The log must be a JSON array of objects. Missing fields inside a record are
    allowed; anything else about the file being wrong is fatal.

    Args:
        logs_path: Path to the access log file

    Returns:
        View events in log order

    Raises:
        DataUnavailable: If the file is missing, unreadable or malformed
    """
    logs_path = Path(logs_path)
    try:
        with open(logs_path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise DataUnavailable(f"Access log not found: {logs_path}", logs_path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise DataUnavailable(f"Cannot read access log {logs_path}: {e}", logs_path) from e
    except json.JSONDecodeError as e:
        raise DataUnavailable(f"Invalid JSON in access log {logs_path}: {e}", logs_path) from e

    if not isinstance(raw, list):
        raise DataUnavailable(
            f"Access log {logs_path} must contain a JSON array, got {type(raw).__name__}",
            logs_path
        )

    events = []
    for index, record in enumerate(raw):
        if not isinstance(record, dict):
            raise DataUnavailable(
                f"Record {index} in {logs_path} is not an object: {record!r}",
                logs_path
            )
        for field_name in PAGE_FIELDS:
            value = record.get(field_name)
            if value is not None and not isinstance(value, str):
                raise DataUnavailable(
                    f"Record {index} in {logs_path} has a non-string {field_name}: {value!r}",
                    logs_path
                )
        events.append(ViewEvent.from_dict(record))

    logger.debug("Loaded %d view events from %s", len(events), logs_path)
    return events
