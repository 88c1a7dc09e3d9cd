"""ETL package - baseline ingestion into the store."""

from etl.load import apply_update, load_file, store
from etl.parse import ParseResult, parse_records, parse_timeline
from etl.sync import sync_all, sync_cycles

__all__ = [
    "sync_all",
    "sync_cycles",
    "load_file",
    "store",
    "apply_update",
    "parse_records",
    "parse_timeline",
    "ParseResult",
]
