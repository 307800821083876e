# core/utils.py

from typing import Iterable, List


def clean_row(data: dict) -> dict:
    """
    Normalize a row before it is written:
    - Strip string whitespace
    - Empty strings → None
    - Everything else is kept as-is (unit numbers stay text)
    """
    clean = {}

    for k, v in data.items():
        if isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped if stripped else None
            continue

        clean[k] = v

    return clean


def blank_fields(data: dict, required: Iterable[str]) -> List[str]:
    """Names of required fields that are missing or blank."""
    missing = []
    for field in required:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing
