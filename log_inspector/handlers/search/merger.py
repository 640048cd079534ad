"""Deterministic merge of per-source record batches."""

from typing import Iterable, List

from ...models import LogRecord


def merge_records(batches: Iterable[Iterable[LogRecord]]) -> List[LogRecord]:
    """Concatenate batches and sort by (timestamp, log group, stream, message).

    Duplicates are kept. The result does not depend on the order in which
    batches arrive.
    """
    merged: List[LogRecord] = []
    for batch in batches:
        merged.extend(batch)
    merged.sort(key=LogRecord.sort_key)
    return merged
