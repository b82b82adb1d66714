#!/usr/bin/env python3
"""Dump every site collection the sync engine holds.

Opens the engine against the configured cache (and the remote store unless
``--offline`` is given) and prints the content map, footer fields,
categories, products and slides.

Usage
-----
Set environment variables and run::

    export SITESYNC_PROJECT_ID="my-project"
    export SITESYNC_API_KEY="..."
    python scripts/dump_cache.py

Options::

    --offline           Never contact the remote store
    --pull              Re-read every collection from the remote first
    --cache PATH        Use this cache file instead of SITESYNC_CACHE_PATH
    --json              Output as machine-readable JSON
    --output FILE       Write output to FILE instead of stdout
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from sitesync import SiteSnapshot, SiteSyncConfig, SyncEngine  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _missing_line(keys: list[str]) -> list[str]:
    if not keys:
        return []
    return [f"  (empty: {', '.join(keys)})"]


def _snapshot_to_dict(snapshot: SiteSnapshot) -> dict[str, Any]:
    return {
        "content": snapshot.content.to_wire(),
        "footerContent": snapshot.footer.to_wire(),
        "categories": [c.to_wire() for c in snapshot.categories],
        "products": [p.to_wire() for p in snapshot.products],
        "slides": [s.to_wire() for s in snapshot.slides],
        "missing": {
            "content": snapshot.content.missing_keys(),
            "footerContent": snapshot.footer.missing_keys(),
        },
    }


def _format_text(snapshot: SiteSnapshot, header: list[str]) -> str:
    out = list(header)

    out.append(_section("CONTENT"))
    for key, value in snapshot.content.to_wire().items():
        out.append(f"  {key}: {value}")
    out.extend(_missing_line(snapshot.content.missing_keys()))

    out.append(_section("FOOTER"))
    for key, value in snapshot.footer.to_wire().items():
        out.append(f"  {key}: {value}")
    out.extend(_missing_line(snapshot.footer.missing_keys()))

    out.append(_section(f"CATEGORIES ({len(snapshot.categories)})"))
    for category in snapshot.categories:
        out.append(f"  [{category.id}] {category.name}")

    out.append(_section(f"PRODUCTS ({len(snapshot.products)})"))
    for product in snapshot.products:
        category = product.category_name(snapshot.categories)
        out.append(f"  [{product.id}] {product.name}  ({category})  {product.price}")

    out.append(_section(f"SLIDES ({len(snapshot.slides)})"))
    for slide in snapshot.slides:
        flag = "active" if slide.active else "inactive"
        out.append(f"  [{slide.id}] {slide.title}  ({flag})")
    return "\n".join(out)


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Dump every collection held by the sitesync engine.",
    )
    parser.add_argument("--offline", action="store_true", help="Never contact the remote store")
    parser.add_argument("--pull", action="store_true", help="Re-read every collection from the remote first")
    parser.add_argument("--cache", help="Cache file to use (default: SITESYNC_CACHE_PATH)")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.offline:
        overrides["remote_enabled"] = False
    if args.cache:
        overrides["cache_path"] = args.cache
    config = SiteSyncConfig.from_env(**overrides)

    async with SyncEngine(config) as engine:
        if args.pull:
            await engine.pull_all()
        snapshot = engine.snapshot()
        state = engine.state

    timestamp = datetime.now(UTC).isoformat()
    if args.json_mode:
        result = {"timestamp": timestamp, "state": str(state), **_snapshot_to_dict(snapshot)}
        payload = json.dumps(result, indent=2, ensure_ascii=False)
    else:
        header = [
            _section("sitesync dump_cache"),
            f"  time   : {timestamp}",
            f"  state  : {state}",
            f"  cache  : {config.resolved_cache_path}",
        ]
        payload = _format_text(snapshot, header)

    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(f"Output written to {args.output}", file=sys.stderr)
    else:
        print(payload)


if __name__ == "__main__":
    asyncio.run(main())
