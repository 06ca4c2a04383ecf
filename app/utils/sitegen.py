"""Static page pre-rendering and sitemap XML.

Pages are plain HTML shells carrying SEO metadata and escaped placeholder
content for crawlers; the browser application replaces the placeholder once
it loads.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from html import escape
from pathlib import Path

logger = logging.getLogger(__name__)

SITE_NAME = "Financial Professional"
SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


@dataclass(frozen=True)
class Page:
    path: str  # "" for the home page, otherwise "<section>" or "<section>/<slug>"
    title: str
    description: str
    heading: str
    body: list[tuple[str | None, str]] = field(default_factory=list)


@dataclass(frozen=True)
class SitemapEntry:
    loc: str
    lastmod: date | None = None
    changefreq: str | None = "weekly"
    priority: str | None = "0.5"


_PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <link rel="icon" href="/favicon.ico" />
    <title>{title}</title>
    <meta name="description" content="{description}" />
    <link rel="canonical" href="{canonical}" />
    <meta property="og:type" content="website" />
    <meta property="og:site_name" content="{site_name}" />
    <meta property="og:title" content="{title}" />
    <meta property="og:description" content="{description}" />
    <meta property="og:url" content="{canonical}" />
    <meta name="twitter:card" content="summary_large_image" />
    <meta name="twitter:title" content="{title}" />
    <meta name="twitter:description" content="{description}" />
    <style>
      .ssg-content {{ padding: 20px; max-width: 1200px; margin: 0 auto; }}
      .app-loaded .ssg-content {{ display: none; }}
    </style>
  </head>
  <body>
    <div class="ssg-content">
      <h1>{heading}</h1>
{body}
    </div>
    <div id="root"></div>
    <script>
      document.addEventListener('DOMContentLoaded', function () {{
        document.body.classList.add('app-loaded');
      }});
    </script>
  </body>
</html>
"""


def page_url(base_url: str, path: str) -> str:
    base = base_url.rstrip("/")
    return f"{base}/{path.strip('/')}" if path.strip("/") else f"{base}/"


def render_page(
    title: str,
    description: str,
    heading: str,
    body: list[tuple[str | None, str]],
    canonical_url: str,
) -> str:
    """Render one HTML shell. Every interpolated value is escaped."""
    blocks = []
    for subheading, text in body:
        if subheading:
            blocks.append(f"      <h2>{escape(subheading)}</h2>")
        if text:
            blocks.append(f"      <p>{escape(text)}</p>")
    return _PAGE_TEMPLATE.format(
        title=escape(title),
        description=escape(description),
        heading=escape(heading),
        canonical=escape(canonical_url),
        site_name=escape(SITE_NAME),
        body="\n".join(blocks),
    )


def build_static_site(output_dir: str | Path, pages: list[Page], base_url: str) -> list[Path]:
    """Write ``<output>/<path>/index.html`` for every page; return the files written."""
    root = Path(output_dir)
    written = []
    for page in pages:
        target_dir = root / page.path if page.path else root
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / "index.html"
        html = render_page(page.title, page.description, page.heading, page.body, page_url(base_url, page.path))
        target.write_text(html, encoding="utf-8")
        written.append(target)
    logger.info("Rendered %d static pages into %s", len(written), root)
    return written


# --- Page builders ---

def _title(text: str) -> str:
    return f"{text} | {SITE_NAME}"


def listing_pages() -> list[Page]:
    return [
        Page(
            path="",
            title=_title("Find a Financial Professional"),
            description=(
                "Find a Financial Professional to help plan and manage your wealth. Search financial "
                "advisors, investment firms, tax and accounting experts, and more."
            ),
            heading="Find a Financial Professional",
            body=[
                (None, "Browse financial advisors, investment firms and accounting professionals."),
                ("Investment Opportunities", "Discover investment firms offering diverse portfolio options."),
                ("Expert Financial Advisors", "Connect with advisors who guide you through financial decisions."),
                ("Professional Services", "Access accounting and tax services from certified professionals."),
            ],
        ),
        Page(
            path="firms",
            title=_title("Investment Firms"),
            description="Explore investment firms and find the right match for your investment goals.",
            heading="Investment Firms",
            body=[("Top Investment Opportunities", "From asset management to alternative investments.")],
        ),
        Page(
            path="advisors",
            title=_title("Financial Advisors"),
            description="Connect with experienced financial advisors for personalized financial guidance.",
            heading="Financial Advisors",
            body=[("Expert Financial Guidance", "Advice tailored to your financial situation and goals.")],
        ),
        Page(
            path="accounting-firms",
            title=_title("Accounting Firms"),
            description="Find professional accounting services from top-rated firms.",
            heading="Accounting Firms",
            body=[("Professional Accounting Services", "From tax preparation to audits.")],
        ),
        Page(
            path="blog",
            title=_title("Financial Blog"),
            description="Stay informed with the latest financial news and investment strategies.",
            heading="Financial Blog",
            body=[("Investment Insights", "Analysis and strategies for informed investment decisions.")],
        ),
    ]


def investment_firm_page(slug: str, name: str, description: str | None, details: dict[str, str | None]) -> Page:
    summary = description or f"Learn how {name} works."
    facts = "; ".join(f"{label}: {value}" for label, value in details.items() if value)
    return Page(
        path=f"firms/{slug}",
        title=_title(f"{name} Review"),
        description=summary,
        heading=f"{name} Review",
        body=[(None, summary), ("Investment Details", facts), (f"About {name}", "")],
    )


def advisor_page(slug: str, name: str, position: str | None, location: str | None, specialties: list[str]) -> Page:
    role = position or "Financial Advisor"
    intro = f"Meet {name}, a {role}" + (f" based in {location}" if location else "") + "."
    return Page(
        path=f"advisors/{slug}",
        title=_title(f"{name} - {role}"),
        description=intro,
        heading=f"{name} - {role}",
        body=[(None, intro), ("Services Offered", ", ".join(specialties))],
    )


def accounting_firm_page(slug: str, name: str, description: str | None, location: str | None, services: list[str]) -> Page:
    summary = description or f"{name} offers professional accounting services."
    return Page(
        path=f"accounting-firms/{slug}",
        title=_title(f"{name} - Professional Accounting Services"),
        description=summary,
        heading=f"{name} - Professional Accounting Services",
        body=[(None, summary), ("Location", location or ""), ("Services Offered", ", ".join(services))],
    )


def blog_post_page(slug: str, title: str, excerpt: str | None, published: date | None) -> Page:
    body = []
    if published:
        body.append((None, f"Published on {published.isoformat()}"))
    body.append((None, excerpt or ""))
    return Page(
        path=f"blog/{slug}",
        title=_title(title),
        description=excerpt or title,
        heading=title,
        body=body,
    )


def sample_pages() -> list[Page]:
    """Listing pages plus a fixed set of sample detail pages."""
    return listing_pages() + [
        investment_firm_page("edly", "Edly", "Edly offers income share agreements for students and professionals.",
                             {"Minimum Investment": "$500", "Target Return": "8-12%", "Headquarters": "New York, NY"}),
        investment_firm_page("stockx", "StockX", "StockX is a marketplace for sneakers, streetwear and collectibles.",
                             {"Minimum Investment": "$1,000", "Target Return": "10-15%", "Headquarters": "Detroit, MI"}),
        investment_firm_page("vanguard", "Vanguard", "Vanguard is a leading investment management company.",
                             {"Minimum Investment": "$3,000", "Target Return": "6-8%", "Headquarters": "Valley Forge, PA"}),
        advisor_page("john-smith", "John Smith", "Senior Financial Advisor", "New York, NY",
                     ["Retirement Planning", "Investment Management"]),
        advisor_page("sarah-johnson", "Sarah Johnson", "Wealth Management Specialist", "San Francisco, CA",
                     ["Estate Planning", "Tax Strategy"]),
        accounting_firm_page("deloitte", "Deloitte", "Global accounting and consulting firm.", "New York, NY",
                             ["Audit", "Tax", "Consulting"]),
        accounting_firm_page("pwc", "PwC", "Professional services network.", "London, UK",
                             ["Assurance", "Tax", "Advisory"]),
        blog_post_page("investment-strategies-2024", "Investment Strategies for 2024",
                       "Discover the top investment strategies for the upcoming year.", date(2024, 1, 15)),
        blog_post_page("retirement-planning-guide", "Retirement Planning Guide",
                       "A comprehensive guide to planning for retirement.", date(2024, 1, 10)),
    ]


# --- Sitemap ---

def static_entries(today: date | None = None) -> list[SitemapEntry]:
    today = today or date.today()
    return [
        SitemapEntry("/", today, "weekly", "1.0"),
        SitemapEntry("/advisors", today, "daily", "0.9"),
        SitemapEntry("/firms", today, "daily", "0.9"),
        SitemapEntry("/accounting-firms", today, "weekly", "0.8"),
        SitemapEntry("/blog", today, "daily", "0.8"),
    ]


def build_sitemap(base_url: str, entries: list[SitemapEntry]) -> str:
    base = base_url.rstrip("/")
    lines = ['<?xml version="1.0" encoding="UTF-8"?>', f'<urlset xmlns="{SITEMAP_NAMESPACE}">']
    for entry in entries:
        lines.append("  <url>")
        lines.append(f"    <loc>{escape(base + entry.loc)}</loc>")
        if entry.lastmod:
            lines.append(f"    <lastmod>{entry.lastmod.isoformat()}</lastmod>")
        if entry.changefreq:
            lines.append(f"    <changefreq>{entry.changefreq}</changefreq>")
        if entry.priority:
            lines.append(f"    <priority>{entry.priority}</priority>")
        lines.append("  </url>")
    lines.append("</urlset>")
    return "\n".join(lines) + "\n"


def write_sitemap(output_dir: str | Path, xml: str) -> Path:
    root = Path(output_dir)
    root.mkdir(parents=True, exist_ok=True)
    target = root / "sitemap.xml"
    target.write_text(xml, encoding="utf-8")
    logger.info("Sitemap written to %s", target)
    return target
