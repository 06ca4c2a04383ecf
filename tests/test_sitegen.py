"""Static site rendering and sitemap tests."""
from datetime import date
from xml.etree import ElementTree

import pytest

from app.models.advisor import AdvisorStatus
from app.models.blog import BlogPost, BlogPostStatus
from app.services import site_service
from app.utils.helpers import utc_now
from app.utils.sitegen import (
    SITEMAP_NAMESPACE,
    SitemapEntry,
    advisor_page,
    build_sitemap,
    build_static_site,
    listing_pages,
    page_url,
    render_page,
    sample_pages,
    static_entries,
    write_sitemap,
)

from tests.conftest import _create_advisor

_NS = {"sm": SITEMAP_NAMESPACE}


def _locs(xml: str) -> list[str]:
    root = ElementTree.fromstring(xml)
    return [el.text for el in root.findall("sm:url/sm:loc", _NS)]


# ─── Rendering ──────────────────────────────────────────────────────────


def test_page_url():
    assert page_url("https://example.com/", "") == "https://example.com/"
    assert page_url("https://example.com", "advisors/jane") == "https://example.com/advisors/jane"


def test_render_page_escapes_values():
    html = render_page(
        title="<script>alert(1)</script>",
        description='Say "hi"',
        heading="A & B",
        body=[("Sub <b>", "Text <i>")],
        canonical_url="https://example.com/x",
    )
    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html
    assert 'content="Say &quot;hi&quot;"' in html
    assert "<h1>A &amp; B</h1>" in html
    assert "<h2>Sub &lt;b&gt;</h2>" in html
    assert '<link rel="canonical" href="https://example.com/x" />' in html
    assert '<div id="root"></div>' in html


def test_advisor_page_text():
    page = advisor_page("jane", "Jane Doe", None, "Austin, Texas", ["Tax Planning", "Estate Planning"])
    assert page.path == "advisors/jane"
    assert page.heading == "Jane Doe - Financial Advisor"
    assert page.description == "Meet Jane Doe, a Financial Advisor based in Austin, Texas."
    assert ("Services Offered", "Tax Planning, Estate Planning") in page.body


def test_build_static_site_writes_index_files(tmp_path):
    written = build_static_site(tmp_path, sample_pages(), "https://example.com")
    assert (tmp_path / "index.html").exists()
    assert (tmp_path / "advisors" / "john-smith" / "index.html").exists()
    assert (tmp_path / "firms" / "edly" / "index.html").exists()
    assert (tmp_path / "blog" / "retirement-planning-guide" / "index.html").exists()
    assert len(written) == len(sample_pages())

    home = (tmp_path / "index.html").read_text(encoding="utf-8")
    assert "<title>Find a Financial Professional | Financial Professional</title>" in home


def test_listing_pages_cover_sections():
    assert [p.path for p in listing_pages()] == ["", "firms", "advisors", "accounting-firms", "blog"]


# ─── Sitemap ────────────────────────────────────────────────────────────


def test_static_entries():
    entries = static_entries(date(2024, 3, 1))
    assert [e.loc for e in entries] == ["/", "/advisors", "/firms", "/accounting-firms", "/blog"]
    assert all(e.lastmod == date(2024, 3, 1) for e in entries)


def test_build_sitemap_is_valid_xml():
    xml = build_sitemap("https://example.com/", [
        SitemapEntry("/", date(2024, 1, 2), "weekly", "1.0"),
        SitemapEntry("/blog/a&b", None, None, None),
    ])
    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert _locs(xml) == ["https://example.com/", "https://example.com/blog/a&b"]
    root = ElementTree.fromstring(xml)
    assert root.find("sm:url/sm:lastmod", _NS).text == "2024-01-02"
    assert len(root.findall("sm:url/sm:priority", _NS)) == 1


def test_write_sitemap(tmp_path):
    target = write_sitemap(tmp_path / "out", "<urlset/>")
    assert target == tmp_path / "out" / "sitemap.xml"
    assert target.read_text(encoding="utf-8") == "<urlset/>"


# ─── Database-backed build ──────────────────────────────────────────────


async def _seed(db_session):
    await _create_advisor(db_session, name="Listed Advisor", slug="listed-advisor", city="Austin", state_hq="Texas")
    await _create_advisor(db_session, name="Hidden Advisor", slug="hidden-advisor", status=AdvisorStatus.PENDING_APPROVAL)
    db_session.add(BlogPost(
        title="Live Post", slug="live-post", content="", status=BlogPostStatus.PUBLISHED, published_at=utc_now(),
    ))
    db_session.add(BlogPost(title="Draft Post", slug="draft-post", content="", status=BlogPostStatus.DRAFT))
    await db_session.commit()


@pytest.mark.asyncio
async def test_sitemap_entries_include_public_records_only(db_session):
    await _seed(db_session)
    xml = await site_service.render_sitemap(db_session, "https://example.com")
    locs = _locs(xml)
    assert "https://example.com/advisors/listed-advisor" in locs
    assert "https://example.com/blog/live-post" in locs
    assert "https://example.com/advisors/hidden-advisor" not in locs
    assert "https://example.com/blog/draft-post" not in locs


@pytest.mark.asyncio
async def test_publish_static_site_from_db(db_session, tmp_path):
    await _seed(db_session)
    written = await site_service.publish_static_site(db_session, tmp_path, "https://example.com")
    assert tmp_path / "advisors" / "listed-advisor" / "index.html" in written
    assert not (tmp_path / "advisors" / "hidden-advisor").exists()
    assert not (tmp_path / "blog" / "draft-post").exists()

    html = (tmp_path / "advisors" / "listed-advisor" / "index.html").read_text(encoding="utf-8")
    assert "based in Austin, Texas" in html


@pytest.mark.asyncio
async def test_publish_sitemap_from_db(db_session, tmp_path):
    await _seed(db_session)
    target = await site_service.publish_sitemap(db_session, tmp_path, "https://example.com")
    assert "https://example.com/blog/live-post" in _locs(target.read_text(encoding="utf-8"))


@pytest.mark.asyncio
async def test_sitemap_endpoint(client, db_session):
    await _seed(db_session)
    resp = await client.get("/sitemap.xml")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/xml")
    locs = _locs(resp.text)
    assert any(loc.endswith("/advisors/listed-advisor") for loc in locs)
    assert not any(loc.endswith("/advisors/hidden-advisor") for loc in locs)
