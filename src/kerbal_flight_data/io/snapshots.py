"""Persistence helpers for recorded vessel snapshots."""

from __future__ import annotations

import gzip
import json
import zlib
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

from kfd_core.snapshot import (
    BodySnapshot,
    OrbitSnapshot,
    PartModuleSnapshot,
    PartSnapshot,
    Propellant,
    VesselSnapshot,
)

__all__ = ["SnapshotDecodeError", "encode_snapshot", "decode_snapshot", "iter_snapshots", "write_snapshots"]

_TRANSIENT_FIELDS = frozenset({"handle"})
_GZIP_MAGIC = b"\x1f\x8b"


class SnapshotDecodeError(ValueError):
    """Raised when a recorded line does not describe a vessel snapshot."""


def encode_snapshot(snapshot: VesselSnapshot) -> dict[str, Any]:
    payload = asdict(snapshot)
    for key in _TRANSIENT_FIELDS:
        payload.pop(key, None)
    return payload


def write_snapshots(
    snapshots: Iterable[VesselSnapshot],
    path: str | Path,
    *,
    compress: bool | None = None,
) -> Path:
    """Persist ``snapshots`` to ``path`` as newline-delimited JSON.

    ``compress`` defaults to gzip when the file name ends in ``.gz``.
    :func:`iter_snapshots` reads both compressed and plain files.  The host
    handle is never written.
    """

    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    if compress is None:
        compress = destination.suffix in {".gz", ".gzip"}
    opener = gzip.open if compress else open

    with opener(destination, "wt", encoding="utf8") as handle:
        for snapshot in snapshots:
            json.dump(encode_snapshot(snapshot), handle, sort_keys=True)
            handle.write("\n")
    return destination


def iter_snapshots(path: str | Path) -> Iterator[VesselSnapshot]:
    """Yield snapshots previously persisted with :func:`write_snapshots`.

    Compression is detected from the gzip magic number, not the suffix.  A
    damaged gzip stream or undecodable line raises :class:`SnapshotDecodeError`
    once the snapshots read before it have been yielded.
    """

    source = Path(path)
    if not source.exists():
        raise FileNotFoundError(f"Snapshot recording {source} does not exist")

    with source.open("rb") as handle:
        compressed = handle.read(len(_GZIP_MAGIC)) == _GZIP_MAGIC
    opener = gzip.open if compressed else open

    try:
        with opener(source, "rb") as handle:
            yield from _iter_lines(handle, source)
    except (EOFError, zlib.error, gzip.BadGzipFile) as exc:
        raise SnapshotDecodeError(f"{source}: damaged gzip stream ({exc})") from exc


def _iter_lines(handle: Iterable[bytes], source: Path) -> Iterator[VesselSnapshot]:
    for number, raw in enumerate(handle, start=1):
        if not raw.strip():
            continue
        try:
            payload = json.loads(raw.decode("utf8"))
        except UnicodeDecodeError as exc:
            raise SnapshotDecodeError(f"{source}:{number}: invalid UTF-8 ({exc.reason})") from exc
        except json.JSONDecodeError as exc:
            raise SnapshotDecodeError(f"{source}:{number}: invalid JSON ({exc.msg})") from exc
        try:
            yield decode_snapshot(payload)
        except (TypeError, ValueError) as exc:
            raise SnapshotDecodeError(f"{source}:{number}: {exc}") from exc


def _build(cls: type, payload: Any) -> Any:
    if not isinstance(payload, Mapping):
        raise TypeError(f"{cls.__name__} payload must be an object")
    known = {item.name for item in fields(cls)}
    unknown = set(payload) - known
    if unknown:
        raise ValueError(f"unknown {cls.__name__} fields: {sorted(unknown)}")
    return cls(**payload)


def _decode_module(payload: Any) -> PartModuleSnapshot | None:
    if payload is None:
        return None
    values = dict(payload)
    values["propellants"] = tuple(
        _build(Propellant, item) for item in values.get("propellants", ())
    )
    return _build(PartModuleSnapshot, values)


def _decode_part(payload: Any) -> PartSnapshot | None:
    if payload is None:
        return None
    values = dict(payload)
    values["modules"] = tuple(_decode_module(item) for item in values.get("modules", ()))
    return _build(PartSnapshot, values)


def decode_snapshot(payload: Mapping[str, Any]) -> VesselSnapshot:
    values = dict(payload)
    orbit = values.get("orbit")
    body = values.get("body")
    values["orbit"] = None if orbit is None else _build(OrbitSnapshot, orbit)
    values["body"] = None if body is None else _build(BodySnapshot, body)
    values["parts"] = tuple(_decode_part(item) for item in values.get("parts", ()))
    return _build(VesselSnapshot, values)
