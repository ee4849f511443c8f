"""Binary snapshot of the whole roster.

Layout: a little-endian int32 count followed by `count` fixed-size records
(roll, 60-byte null-padded name, five marks, total, float32 percentage,
grade byte, 3 pad bytes), the same layout the original C tool wrote on x86.
"""

from __future__ import annotations

import logging
import os
import stat
import struct
import tempfile
from pathlib import Path

from result_analyzer.config.settings import settings
from result_analyzer.domain.errors import (
    CorruptSnapshotError,
    DuplicateRollError,
    OversizedSnapshotError,
    PersistenceError,
    PersistenceUnavailable,
)
from result_analyzer.domain.models.student import NAME_BYTES, StudentResult
from result_analyzer.services.store import ResultStore

logger = logging.getLogger(__name__)

COUNT_STRUCT = struct.Struct("<i")
RECORD_STRUCT = struct.Struct(f"<i{NAME_BYTES}s5iifc3x")


def pack_record(record: StudentResult) -> bytes:
    return RECORD_STRUCT.pack(
        record.roll,
        record.name.encode("utf-8"),
        *record.marks,
        record.total,
        record.percentage,
        record.grade.encode("ascii"),
    )


def unpack_record(chunk: bytes, max_name: int) -> StudentResult:
    roll, name, *rest = RECORD_STRUCT.unpack(chunk)
    marks = rest[:5]
    text = name.split(b"\0", 1)[0].decode("utf-8", errors="replace")
    # total/percentage/grade are recomputed from the marks
    return StudentResult.create(roll, text, marks, max_name=max_name)


def _file_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class SnapshotFile:
    def __init__(self, path: str | os.PathLike | None = None) -> None:
        self.path = Path(path if path is not None else settings.data_file)

    def save(self, store: ResultStore) -> int:
        records = store.list()
        try:
            payload = COUNT_STRUCT.pack(len(records)) + b"".join(pack_record(r) for r in records)
        except struct.error as exc:
            raise PersistenceError(f"Could not encode students for {self.path}: {exc}") from exc
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        except OSError as exc:
            raise PersistenceUnavailable(f"Could not open {self.path} for writing: {exc}") from exc
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(payload)
            # mkstemp creates 0600; keep the mode the data file already had
            os.chmod(tmp_name, _file_mode(self.path))
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceUnavailable(f"Could not write {self.path}: {exc}") from exc
        logger.info("Saved %d students to %s", len(records), self.path)
        return len(records)

    def load_into(self, store: ResultStore) -> int:
        """
        Replace the store's contents with the snapshot. On any failure the
        store is left empty and the error is raised for the caller to report.
        """
        store.clear()
        try:
            data = self.path.read_bytes()
        except OSError as exc:
            raise PersistenceUnavailable(f"Could not open {self.path} for reading: {exc}") from exc

        if len(data) < COUNT_STRUCT.size:
            raise CorruptSnapshotError(f"{self.path} is missing its record count.")
        (count,) = COUNT_STRUCT.unpack_from(data)
        if count > store.capacity:
            logger.warning("Discarding %s: declares %d students (max %d)", self.path, count, store.capacity)
            raise OversizedSnapshotError(
                f"{self.path} declares {count} students (max {store.capacity})."
            )
        if count < 0:
            raise CorruptSnapshotError(f"{self.path} declares a negative record count.")

        body = data[COUNT_STRUCT.size:]
        if len(body) < count * RECORD_STRUCT.size:
            raise CorruptSnapshotError(f"{self.path} is truncated: expected {count} students.")

        records = [
            unpack_record(body[i * RECORD_STRUCT.size:(i + 1) * RECORD_STRUCT.size], store.max_name)
            for i in range(count)
        ]
        try:
            store.replace_all(records)
        except DuplicateRollError as exc:
            raise CorruptSnapshotError(f"{self.path} contains duplicate roll numbers.") from exc
        logger.info("Loaded %d students from %s", count, self.path)
        return count
