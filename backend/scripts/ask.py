#!/usr/bin/env python3
"""Ask the relay a question about a local file.

Usage:
    cd backend
    python scripts/ask.py path/to/file.pdf "What is this document about?"
    python scripts/ask.py notes.txt "Summarize" --url http://localhost:5000
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from client import (
    BackendError,
    ClientInputError,
    FileReadError,
    QueryClient,
    read_file,
)
from client.api import DEFAULT_BASE_URL
from utils import format_file_size


async def ask(file_path: str, question: str, base_url: str) -> int:
    """Read the file, send the question, print the answer."""
    client = QueryClient(base_url)
    try:
        uploaded = await read_file(file_path)
        print(f"📄 {uploaded.name} ({uploaded.category}, {format_file_size(uploaded.size)})")

        answer = await client.ask([uploaded], question)
        print(f"\n{answer}")
        return 0

    except (FileReadError, ClientInputError, BackendError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    finally:
        await client.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("file", help="File to ask about")
    parser.add_argument("question", help="Question about the file")
    parser.add_argument("--url", default=DEFAULT_BASE_URL, help="Relay base URL")
    args = parser.parse_args()

    sys.exit(asyncio.run(ask(args.file, args.question, args.url)))


if __name__ == "__main__":
    main()
