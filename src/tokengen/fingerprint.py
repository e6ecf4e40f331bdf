"""fingerprint.py

Default fingerprint derived from the identity of the running process.
"""

from __future__ import annotations

import hashlib
import os
import platform
import socket
import sys
from typing import Optional

from .errors import InvalidFingerprintError
from .hashing import to_base36

MAX_FINGERPRINT_LENGTH = 32


def runtime_identity() -> str:
    """Describe the running process: host, pid, interpreter and executable."""
    parts = [
        socket.gethostname(),
        str(os.getpid()),
        f"{platform.python_implementation()} {platform.python_version()}",
        sys.executable or "",
    ]
    return "|".join(p for p in parts if p)


def process_fingerprint(identity: Optional[str] = None) -> str:
    """Hash a runtime identity string into a short base-36 fingerprint.

    Raises InvalidFingerprintError when the identity is empty; callers in
    such environments must supply their own fingerprint.
    """
    if identity is None:
        identity = runtime_identity()
    if not identity:
        raise InvalidFingerprintError(
            "process identity is unavailable; pass an explicit fingerprint"
        )
    digest = hashlib.sha3_256(identity.encode("utf-8")).digest()
    return to_base36(int.from_bytes(digest, "big"))[:MAX_FINGERPRINT_LENGTH]


__all__ = ['runtime_identity', 'process_fingerprint']
