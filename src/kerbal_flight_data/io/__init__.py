"""Input/output helpers for recorded flights."""

from .snapshots import (
    SnapshotDecodeError,
    decode_snapshot,
    encode_snapshot,
    iter_snapshots,
    write_snapshots,
)

__all__ = [
    "SnapshotDecodeError",
    "decode_snapshot",
    "encode_snapshot",
    "iter_snapshots",
    "write_snapshots",
]
