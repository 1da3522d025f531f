"""Output file writer.

Chunks are written to a temporary file beside the destination, which replaces
the destination only once every byte received has been written. A failed or
short transfer leaves any previous file untouched and raises
`IntegrityMismatch` (short write) or the transfer's own error.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import IO, BinaryIO, Iterable

from hfsubset.core.domain.models import SubsetResponse
from hfsubset.core.errors import FilesystemError, IntegrityMismatch

logger = logging.getLogger(__name__)


def _file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _open_temp(path: Path) -> IO[bytes]:
    path.parent.mkdir(parents=True, exist_ok=True)
    return tempfile.NamedTemporaryFile(
        dir=path.parent, prefix=f".{path.name}.", suffix=".part", delete=False
    )


def copy_chunks(chunks: Iterable[bytes], handle: BinaryIO) -> tuple[int, int]:
    """Write `chunks` to `handle`, returning (bytes received, bytes written)."""

    received = 0
    written = 0
    for chunk in chunks:
        if not chunk:
            continue
        received += len(chunk)
        count = handle.write(chunk)
        written += len(chunk) if count is None else count
    return received, written


def write_chunks(chunks: Iterable[bytes], output_path: Path) -> int:
    """Stream `chunks` into `output_path`, replacing it only after a complete write."""

    try:
        handle = _open_temp(output_path)
    except OSError as exc:
        raise FilesystemError(f"cannot write {output_path}: {exc}") from exc

    temp_path = Path(handle.name)
    try:
        with handle:
            received, written = copy_chunks(chunks, handle)
        logger.debug("received %d bytes, wrote %d bytes", received, written)
        if written != received:
            raise IntegrityMismatch(written=written, expected=received, path=output_path)
        os.chmod(temp_path, _file_mode())
        os.replace(temp_path, output_path)
    except OSError as exc:
        raise FilesystemError(f"cannot write {output_path}: {exc}") from exc
    finally:
        temp_path.unlink(missing_ok=True)
    return written


def write_payload(response: SubsetResponse, output_path: Path) -> int:
    """Write an in-memory subset payload to `output_path`."""

    return write_chunks([response.data], output_path)
