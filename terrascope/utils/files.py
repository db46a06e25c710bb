"""
terrascope/utils/files.py

Async helpers for reading state files from disk (or stdin).
"""

from __future__ import annotations

import asyncio
import sys

import aiofiles

STDIN_PATH = "-"


async def read_state_file(path: str) -> bytes:
    """Read a state file's raw bytes.

    Args:
        path (str): Filesystem path, or "-" for standard input.

    Returns:
        bytes: The file contents, undecoded.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    if path == STDIN_PATH:
        return await asyncio.to_thread(sys.stdin.buffer.read)

    async with aiofiles.open(path, mode="rb") as f:
        return await f.read()
