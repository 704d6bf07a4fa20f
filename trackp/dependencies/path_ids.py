"""
Strict parsing of integer IDs taken from the URL path.

Only optionally signed decimal digits within the signed 64-bit range are
accepted. Anything else (``1.0``, `` 1``, ``1_0``, overlong numbers) fails
as a path validation error and is answered with 400.
"""
import re

from fastapi import Path
from fastapi.exceptions import RequestValidationError

ID_PATTERN = re.compile(r"[+-]?[0-9]+")
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def parse_path_id(value: str, name: str) -> int:
    """
    Convert a raw path segment to an ID.

    Raises:
        RequestValidationError located at ``("path", name)``.
    """
    if ID_PATTERN.fullmatch(value):
        parsed = int(value)
        if MIN_ID <= parsed <= MAX_ID:
            return parsed
        msg = "Input should be a 64-bit integer"
    else:
        msg = "Input should be a valid integer"
    raise RequestValidationError([{
        "type": "int_parsing",
        "loc": ("path", name),
        "msg": msg,
        "input": value,
    }])


def get_project_id(project_id: str = Path(..., description="Project ID")) -> int:
    return parse_path_id(project_id, "project_id")


def get_task_id(task_id: str = Path(..., description="Task ID")) -> int:
    return parse_path_id(task_id, "task_id")
