"""Client side of FileAsk: read a file, build the prompt, ask the relay.

Usage:
    from client import QueryClient, read_file

    uploaded = await read_file("report.pdf")
    answer = await QueryClient().ask([uploaded], "What is this about?")
"""

from client.api import BackendError, ClientInputError, QueryClient
from client.context import (
    CATEGORIES,
    FileReadError,
    UploadedFile,
    build_context,
    build_prompt,
    classify,
    extract_text,
    read_file,
)

__all__ = [
    "QueryClient",
    "ClientInputError",
    "BackendError",
    "UploadedFile",
    "FileReadError",
    "CATEGORIES",
    "classify",
    "extract_text",
    "read_file",
    "build_context",
    "build_prompt",
]
