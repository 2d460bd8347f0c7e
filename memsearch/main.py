"""Command-line entry point: embed texts with the configured provider.

  memsearch-embed "first text" "second text"

Settings come from MEMSEARCH_* env vars (or .env); see memsearch.config.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

import httpx

from memsearch.config import Settings
from memsearch.embeddings import create_embedding_provider, options_from_settings
from memsearch.errors import EmbeddingRequestError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Embed texts with the configured memory-search provider.")
    parser.add_argument("texts", nargs="+", help="Texts to embed (one request).")
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print only the vector dimensions, not the vectors.",
    )
    return parser


async def run(settings: Settings, texts: list[str], summary: bool = False) -> list[dict[str, Any]]:
    """Embed ``texts`` and return one result row per input, in order."""
    provider = await create_embedding_provider(
        options_from_settings(settings),
        timeout=settings.embedding_timeout,
    )
    try:
        vectors = await provider.embed_batch(texts)
    finally:
        await provider.close()

    rows: list[dict[str, Any]] = []
    for text, vector in zip(texts, vectors):
        row: dict[str, Any] = {"text": text, "dimensions": len(vector)}
        if not summary:
            row["embedding"] = vector
        rows.append(row)
    return rows


def main(argv: list[str] | None = None) -> int:
    """Entry point -- parse args and settings, embed, print JSON."""
    args = build_parser().parse_args(argv)
    try:
        settings = Settings()
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    logger.info("Embedding %d text(s) with provider %s", len(args.texts), settings.embedding_provider)

    try:
        rows = asyncio.run(run(settings, args.texts, summary=args.summary))
    except (ValueError, EmbeddingRequestError, httpx.HTTPError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(rows, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
