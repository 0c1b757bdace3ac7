"""
CSV record source for ledger-stats.

Reads a header-bearing ledger export and yields validated Transaction values:

    Date,Domain,Location,Value,Transaction_count
    01/01/2022,RESTRAUNT,Goa,365554,1932

Header names are matched case-insensitively (spaces count as underscores).
Labels are trimmed and whitespace-collapsed; domains are upper-cased and known
misspellings corrected. Malformed rows are skipped with a warning unless
`strict` is set, in which case the first one raises RecordParseError.
"""

from __future__ import annotations

import csv
import datetime as dt
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from ledger_stats.domain.models import Transaction
from ledger_stats.errors import RecordParseError
from ledger_stats.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_DATE_FORMAT = "%m/%d/%Y"

REQUIRED_COLUMNS = ("date", "domain", "location", "value", "transaction_count")

DOMAIN_ALIASES: Dict[str, str] = {
    "RESTRAUNT": "RESTAURANT",
    "RESTRAURANT": "RESTAURANT",
    "RESTURANT": "RESTAURANT",
}


def _normalize_header(name: str) -> str:
    return "_".join(name.strip().lower().split())


def normalize_label(raw: str) -> str:
    """Trim and collapse internal whitespace."""
    return " ".join(raw.split())


def normalize_domain(raw: str) -> str:
    """Upper-case a domain label and fix known misspellings."""
    label = normalize_label(raw).upper()
    return DOMAIN_ALIASES.get(label, label)


def _parse_int(raw: str, column: str) -> int:
    text = raw.strip().replace(",", "").replace("_", "")
    if not text:
        raise RecordParseError(f"missing {column}")
    try:
        return int(text)
    except ValueError:
        raise RecordParseError(f"{column} is not an integer: {raw!r}") from None


def _parse_date(raw: str, date_format: str) -> dt.date:
    text = raw.strip()
    if not text:
        raise RecordParseError("missing date")
    try:
        return dt.datetime.strptime(text, date_format).date()
    except ValueError:
        raise RecordParseError(f"date {raw!r} does not match {date_format!r}") from None


def parse_row(row: Mapping[str, Optional[str]], date_format: str = DEFAULT_DATE_FORMAT) -> Transaction:
    """
    Turn one CSV row (keyed by normalized column names) into a Transaction.

    Raises
    ------
    RecordParseError
        If a field is missing, unparsable or out of range.
    """
    domain = normalize_domain(row.get("domain") or "")
    location = normalize_label(row.get("location") or "")
    if not domain:
        raise RecordParseError("missing domain")
    if not location:
        raise RecordParseError("missing location")

    try:
        return Transaction(
            date=_parse_date(row.get("date") or "", date_format),
            domain=domain,
            location=location,
            value=_parse_int(row.get("value") or "", "value"),
            transaction_count=_parse_int(row.get("transaction_count") or "", "transaction_count"),
        )
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise RecordParseError(problems) from exc


def read_transactions(
    lines: Iterable[str],
    date_format: str = DEFAULT_DATE_FORMAT,
    strict: bool = False,
    source: str = "<stream>",
) -> List[Transaction]:
    """
    Parse CSV text lines into transactions, preserving row order.

    Parameters
    ----------
    lines : Iterable[str]
        CSV text including the header line.
    date_format : str
        strptime format of the date column.
    strict : bool
        Raise on the first malformed row instead of skipping it.
    source : str
        Name used in log messages.
    """
    reader = csv.DictReader(lines)
    if reader.fieldnames is None:
        log.info("Ledger is empty", extra={"source": source})
        return []

    columns = {_normalize_header(name): name for name in reader.fieldnames if name}
    missing = [c for c in REQUIRED_COLUMNS if c not in columns]
    if missing:
        raise RecordParseError(f"missing required column(s): {', '.join(missing)}", line_number=1)

    transactions: List[Transaction] = []
    skipped = 0
    for raw in reader:
        row = {column: raw.get(original) for column, original in columns.items()}
        try:
            tx = parse_row(row, date_format)
        except RecordParseError as exc:
            if strict:
                raise RecordParseError(str(exc), line_number=reader.line_num) from exc
            skipped += 1
            log.warning(
                f"Skipping malformed ledger row: {exc}",
                extra={"source": source, "line": reader.line_num},
            )
            continue
        log.debug("Parsed ledger row %d: %s", reader.line_num, tx, extra={"source": source})
        transactions.append(tx)

    log.info(
        f"Loaded {len(transactions)} transaction(s) from {source}",
        extra={"source": source, "rows": len(transactions), "skipped": skipped},
    )
    return transactions


def load_transactions(
    path: Path | str,
    date_format: str = DEFAULT_DATE_FORMAT,
    strict: bool = False,
) -> List[Transaction]:
    """
    Read a ledger CSV file from disk. See `read_transactions`.
    """
    path = Path(path)
    with path.open("r", newline="", encoding="utf-8-sig") as f:
        return read_transactions(f, date_format=date_format, strict=strict, source=str(path))


__all__ = [
    "DEFAULT_DATE_FORMAT",
    "DOMAIN_ALIASES",
    "REQUIRED_COLUMNS",
    "load_transactions",
    "normalize_domain",
    "normalize_label",
    "parse_row",
    "read_transactions",
]
