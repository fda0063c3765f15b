"""
Response format negotiation - JSON by default, CSV when the client asks for text/csv.
"""

import csv
import io
from collections.abc import Iterable
from typing import Any

from fastapi import Request
from fastapi.responses import Response

CSV_MEDIA_TYPE = "text/csv"
JSON_MEDIA_TYPE = "application/json"


def parse_accept(header: str) -> list[tuple[str, float]]:
    """Media ranges with their q-values. A malformed q counts as 0."""
    ranges = []
    for part in header.split(","):
        media_range, *params = (piece.strip() for piece in part.split(";"))
        if not media_range:
            continue
        quality = 1.0
        for param in params:
            key, _, value = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    quality = min(max(float(value), 0.0), 1.0)
                except ValueError:
                    quality = 0.0
        ranges.append((media_range.lower(), quality))
    return ranges


def _quality(media_type: str, ranges: list[tuple[str, float]]) -> float:
    """q of the most specific range matching media_type; 0 when nothing matches."""
    kind = media_type.split("/")[0]
    best_specificity, best_quality = -1, 0.0
    for media_range, quality in ranges:
        if media_range == media_type:
            specificity = 2
        elif media_range == f"{kind}/*":
            specificity = 1
        elif media_range == "*/*":
            specificity = 0
        else:
            continue
        if specificity > best_specificity:
            best_specificity, best_quality = specificity, quality
    return best_quality


def wants_csv(request: Request) -> bool:
    """CSV only when the client prefers it strictly over JSON. No Accept header means JSON."""
    ranges = parse_accept(request.headers.get("accept", ""))
    csv_quality = _quality(CSV_MEDIA_TYPE, ranges)
    return csv_quality > 0 and csv_quality > _quality(JSON_MEDIA_TYPE, ranges)


def csv_response(columns: list[str], rows: Iterable[dict[str, Any]]) -> Response:
    """Header row of projected field names, one line per record; None becomes an empty cell."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns, extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({key: "" if value is None else value for key, value in row.items()})
    return Response(content=buffer.getvalue(), media_type=CSV_MEDIA_TYPE)
