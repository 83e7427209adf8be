from __future__ import annotations

import json
from typing import Any, Sequence, Union

from .multipart import MultipartEntry
from .variants import VariantTable

Assembled = Union[VariantTable, Sequence[MultipartEntry]]


def serialize_variants(table: VariantTable) -> dict[str, Any]:
    table.check_coverage()
    variants: dict[str, Any] = {}
    for partial, group in table:
        variants[str(partial)] = group.to_json()
    return {"variants": variants}


def serialize_multipart(entries: Sequence[MultipartEntry]) -> dict[str, Any]:
    return {"multipart": [entry.to_json() for entry in entries]}


def serialize(assembled: Assembled) -> dict[str, Any]:
    if isinstance(assembled, VariantTable):
        return serialize_variants(assembled)
    return serialize_multipart(assembled)


def dumps(document: dict[str, Any], indent: int = 2) -> str:
    return json.dumps(document, indent=indent or None, ensure_ascii=False) + "\n"
