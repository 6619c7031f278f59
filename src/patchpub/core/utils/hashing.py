"""Git object hashing for file descriptors"""

import hashlib


ZERO_HASH = "0" * 40


def git_blob_hash(data: bytes) -> str:
    """Return the hex git blob id of data (sha1 over 'blob <size>\\0' + data, 40 chars)."""
    header = f"blob {len(data)}\0".encode("ascii")
    return hashlib.sha1(header + data).hexdigest()
