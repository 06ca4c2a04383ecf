"""Database-backed page and sitemap collection for the static site build."""
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories import advisor_repository, blog_repository, firm_repository
from app.utils.sitegen import (
    Page,
    SitemapEntry,
    accounting_firm_page,
    advisor_page,
    blog_post_page,
    build_sitemap,
    build_static_site,
    investment_firm_page,
    listing_pages,
    static_entries,
    write_sitemap,
)


def _money(value: float | None) -> str | None:
    if value is None:
        return None
    return f"${value:,.0f}"


async def collect_pages(db: AsyncSession) -> list[Page]:
    """Listing pages plus approved advisors, every firm and published posts."""
    pages = listing_pages()
    for firm in await firm_repository.list_all_investment_firms(db):
        pages.append(investment_firm_page(firm.slug, firm.name, firm.description, {
            "Minimum Investment": _money(firm.minimum_investment),
            "Target Return": firm.target_return,
            "Headquarters": firm.headquarters,
            "Established": firm.established.isoformat() if firm.established else None,
        }))
    for advisor in await advisor_repository.list_approved(db):
        location = ", ".join(p for p in (advisor.city, advisor.state_hq) if p) or None
        pages.append(advisor_page(advisor.slug, advisor.name, advisor.position, location, advisor.advisor_services))
    for firm in await firm_repository.list_all_accounting_firms(db):
        pages.append(accounting_firm_page(firm.slug, firm.name, firm.description, firm.headquarters, firm.services))
    for post in await blog_repository.list_published(db):
        published = post.published_at.date() if post.published_at else None
        pages.append(blog_post_page(post.slug, post.title, post.excerpt, published))
    return pages


async def collect_sitemap_entries(db: AsyncSession) -> list[SitemapEntry]:
    entries = static_entries()
    for advisor in await advisor_repository.list_approved(db):
        entries.append(SitemapEntry(f"/advisors/{advisor.slug}", advisor.updated_at.date(), "weekly", "0.7"))
    for firm in await firm_repository.list_all_investment_firms(db):
        entries.append(SitemapEntry(f"/firms/{firm.slug}", firm.updated_at.date(), "weekly", "0.7"))
    for firm in await firm_repository.list_all_accounting_firms(db):
        entries.append(SitemapEntry(f"/accounting-firms/{firm.slug}", firm.updated_at.date(), "monthly", "0.6"))
    for post in await blog_repository.list_published(db):
        entries.append(SitemapEntry(f"/blog/{post.slug}", post.updated_at.date(), "monthly", "0.7"))
    return entries


async def render_sitemap(db: AsyncSession, base_url: str) -> str:
    return build_sitemap(base_url, await collect_sitemap_entries(db))


async def publish_sitemap(db: AsyncSession, output_dir: str | Path, base_url: str) -> Path:
    return write_sitemap(output_dir, await render_sitemap(db, base_url))


async def publish_static_site(db: AsyncSession, output_dir: str | Path, base_url: str) -> list[Path]:
    return build_static_site(output_dir, await collect_pages(db), base_url)
