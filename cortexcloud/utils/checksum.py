"""Checksum helpers for uploaded file streams."""

import hashlib

from fastapi import UploadFile


async def read_with_checksum(
    upload_file: UploadFile,
    chunk_size: int = 1024 * 1024,
) -> tuple[bytes, str]:
    """Read an uploaded file fully, returning its bytes and SHA-256 hex digest."""
    hasher = hashlib.sha256()
    chunks: list[bytes] = []
    while True:
        chunk = await upload_file.read(chunk_size)
        if not chunk:
            break
        hasher.update(chunk)
        chunks.append(chunk)
    return b"".join(chunks), hasher.hexdigest()
