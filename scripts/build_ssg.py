"""Pre-render static HTML pages for crawlers.

Usage (from the repository root):
    python scripts/build_ssg.py                    # sample pages into SSG_OUTPUT_DIR
    python scripts/build_ssg.py --from-db          # approved advisors, firms, published posts
    python scripts/build_ssg.py --output public    # custom output directory
"""
import argparse
import asyncio
import sys
from pathlib import Path

# Windows: asyncpg requires SelectorEventLoop
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import settings
from app.utils.sitegen import build_static_site, sample_pages


async def _build_from_db(output_dir: str, base_url: str) -> list[Path]:
    from app.database import async_session_factory, engine
    from app.services import site_service

    try:
        async with async_session_factory() as db:
            return await site_service.publish_static_site(db, output_dir, base_url)
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build static pages")
    parser.add_argument("--output", default=settings.SSG_OUTPUT_DIR)
    parser.add_argument("--base-url", default=settings.SITE_URL)
    parser.add_argument("--from-db", action="store_true", help="render database records instead of samples")
    args = parser.parse_args(argv)

    print("Starting static site generation...")
    try:
        if args.from_db:
            written = asyncio.run(_build_from_db(args.output, args.base_url))
        else:
            written = build_static_site(args.output, sample_pages(), args.base_url)
    except Exception as exc:
        print(f"Static site generation failed: {exc}", file=sys.stderr)
        return 1

    for path in written:
        print(f"  {path}")
    print(f"Generated {len(written)} pages in {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
