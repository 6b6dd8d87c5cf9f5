import logging
import sys
from typing import List, Optional, TextIO

from reporting.models import ExportSafe, ExportSnapshot

logger = logging.getLogger("export.serializer")


def build_snapshot(block_number: Optional[int], safes: List[ExportSafe]) -> ExportSnapshot:
    return ExportSnapshot(block_number=block_number, safes=safes)


def serialize_snapshot(snapshot: ExportSnapshot) -> str:
    """Compact JSON with the camelCase wire names; null fields are kept."""
    return snapshot.model_dump_json(by_alias=True)


def write_snapshot(text: str, stream: Optional[TextIO] = None) -> None:
    """
    Writes the whole document with a single write call.

    Args:
        text: Serialized snapshot
        stream: Output sink, stdout by default
    """
    stream = stream if stream is not None else sys.stdout
    stream.write(text)
    stream.flush()
    logger.info(f"Wrote snapshot ({len(text)} chars)")
