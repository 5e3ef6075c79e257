"""Byte-exact file comparison."""

from __future__ import annotations

import stat
from pathlib import Path

DEFAULT_CHUNK_SIZE = 1024


def files_equal(a: Path, b: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bool:
    """Return True only if *a* and *b* are proven to hold the same bytes.

    Sizes are compared first, so files of different length are never
    opened. Anything that is not a regular file (FIFO, socket, device,
    directory) is never opened either. Any stat/open/read failure yields
    False. A non-positive *chunk_size* falls back to DEFAULT_CHUNK_SIZE.
    """
    if chunk_size <= 0:
        chunk_size = DEFAULT_CHUNK_SIZE

    a, b = Path(a), Path(b)
    try:
        st_a, st_b = a.stat(), b.stat()
    except OSError:
        return False
    if not (stat.S_ISREG(st_a.st_mode) and stat.S_ISREG(st_b.st_mode)):
        return False
    if st_a.st_size != st_b.st_size:
        return False

    try:
        with a.open("rb") as fa, b.open("rb") as fb:
            while True:
                chunk_a = fa.read(chunk_size)
                chunk_b = fb.read(chunk_size)
                if chunk_a != chunk_b:
                    return False
                if not chunk_a:
                    return True
    except OSError:
        return False
