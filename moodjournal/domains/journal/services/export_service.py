"""Journal export as a downloadable JSON or CSV file."""

from __future__ import annotations

import csv
import io
import json
import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from moodjournal.domains.journal.mappers import map_export_record
from moodjournal.domains.journal.models import JournalEntry
from moodjournal.domains.journal.services import journal_service

logger = logging.getLogger(__name__)

CSV_HEADER = "Date,Title,Content,Tags"
FORMATS = {
    "json": "application/json",
    "csv": "text/csv",
}


@dataclass
class ExportFile:
    data: bytes
    filename: str
    mimetype: str


def export_entries(user_id: int, fmt: str, today: Optional[date] = None) -> Optional[ExportFile]:
    """Every entry of the user, newest first. Unknown formats return None."""
    fmt = (fmt or "").strip().lower()
    if fmt not in FORMATS:
        return None
    entries = journal_service.all_entries(user_id)
    if fmt == "json":
        body = entries_to_json(entries)
    else:
        body = entries_to_csv(entries)
    stamp = (today or date.today()).strftime("%Y%m%d")
    logger.info("Exported %d journal entries for user %s as %s", len(entries), user_id, fmt)
    return ExportFile(
        data=body.encode("utf-8"),
        filename=f"journal_export_{stamp}.{fmt}",
        mimetype=FORMATS[fmt],
    )


def entries_to_json(entries: Iterable[JournalEntry]) -> str:
    return json.dumps([map_export_record(e) for e in entries], indent=2, ensure_ascii=False)


def entries_to_csv(entries: Iterable[JournalEntry]) -> str:
    buffer = io.StringIO()
    buffer.write(CSV_HEADER + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for entry in entries:
        writer.writerow(
            [
                entry.entry_date.strftime("%Y-%m-%d"),
                entry.title or "",
                _single_line(entry.content),
                entry.tags or "",
            ]
        )
    return buffer.getvalue()


def _single_line(text: str) -> str:
    return text.replace("\r", " ").replace("\n", " ")
