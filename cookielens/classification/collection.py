"""Loading of browser cookie-jar exports into CookieAttributes."""

import json
import logging
from pathlib import Path
from typing import Any, List, Union

from pydantic import ValidationError

from .exceptions import CookieExportError
from .models import CookieAttributes

logger = logging.getLogger(__name__)


def parse_cookie_export(data: Any, source: str = "<memory>") -> List[CookieAttributes]:
    """Convert exported cookie objects into CookieAttributes.

    Entries that are not valid cookie objects are skipped with a warning.

    Args:
        data: Decoded export, expected to be a list of cookie objects
        source: Where the export came from, for log and error messages

    Returns:
        Parsed cookies in export order

    Raises:
        CookieExportError: If the export is not a list
    """
    if not isinstance(data, list):
        raise CookieExportError(
            f"Cookie export must be a list of cookies, got {type(data).__name__}",
            source=source
        )

    cookies = []
    for index, entry in enumerate(data):
        try:
            cookies.append(CookieAttributes.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Skipping invalid cookie #{index} in {source}: {e.errors()[0]['msg']}")

    logger.info(f"Loaded {len(cookies)} of {len(data)} cookies from {source}")
    return cookies


def load_cookie_export(path: Union[str, Path]) -> List[CookieAttributes]:
    """Load a JSON cookie export file.

    Args:
        path: Path to the export file

    Returns:
        Parsed cookies

    Raises:
        CookieExportError: If the file cannot be read or is not a JSON list
    """
    export_path = Path(path)
    try:
        data = json.loads(export_path.read_text(encoding='utf-8'))
    except OSError as e:
        raise CookieExportError(f"Cannot read cookie export: {e}", source=str(export_path)) from e
    except json.JSONDecodeError as e:
        raise CookieExportError(f"Invalid JSON in cookie export: {e}", source=str(export_path)) from e

    return parse_cookie_export(data, source=str(export_path))
