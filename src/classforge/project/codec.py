"""
Text encoding of project documents.

Projects are stored as indented JSON so they can be diffed, edited by hand
and kept under version control.
"""

import logging
from typing import Any, Optional

import orjson

logger = logging.getLogger(__name__)

PROJECT_FILE_SUFFIX = ".json"

_UTF8_BOM = b"\xef\xbb\xbf"


def decode_project(text: str | bytes) -> Optional[Any]:
    """Parse project text into plain Python data.

    A leading byte order mark, as written by some Windows editors, is
    ignored.

    Args:
        text: Project file contents

    Returns:
        Parsed document, or None if the text is not valid JSON
    """
    if isinstance(text, bytes):
        text = text.removeprefix(_UTF8_BOM)
    else:
        text = text.removeprefix("\ufeff")

    try:
        return orjson.loads(text)
    except orjson.JSONDecodeError as e:
        logger.error(f"Could not parse project document: {e}")
        return None


def encode_project(document: dict[str, Any]) -> str:
    """Serialize a project document to indented JSON text.

    Raises:
        orjson.JSONEncodeError: If the document holds non-serializable data
    """
    return orjson.dumps(document, option=orjson.OPT_INDENT_2).decode("utf-8")
