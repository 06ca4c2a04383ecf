"""Write sitemap.xml.

Usage (from the repository root):
    python scripts/generate_sitemap.py                 # section URLs only
    python scripts/generate_sitemap.py --from-db       # plus every public detail URL
    python scripts/generate_sitemap.py --output dist --base-url https://example.com
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
from app.utils.sitegen import build_sitemap, static_entries, write_sitemap


async def _sitemap_from_db(output_dir: str, base_url: str) -> Path:
    from app.database import async_session_factory, engine
    from app.services import site_service

    try:
        async with async_session_factory() as db:
            return await site_service.publish_sitemap(db, output_dir, base_url)
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate sitemap.xml")
    parser.add_argument("--output", default=settings.SSG_OUTPUT_DIR)
    parser.add_argument("--base-url", default=settings.SITE_URL)
    parser.add_argument("--from-db", action="store_true", help="include detail pages from the database")
    args = parser.parse_args(argv)

    print("Generating sitemap...")
    try:
        if args.from_db:
            path = asyncio.run(_sitemap_from_db(args.output, args.base_url))
        else:
            path = write_sitemap(args.output, build_sitemap(args.base_url, static_entries()))
    except Exception as exc:
        print(f"Sitemap generation failed: {exc}", file=sys.stderr)
        return 1

    print(f"Sitemap written to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
