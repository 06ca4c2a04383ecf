"""Seed sample directory records for local development.

Usage (from the repository root):
    python scripts/seed_directory_data.py

Prerequisites:
    - DB is running and migrated (alembic upgrade head)
    - an admin exists (python scripts/create_admin.py ...)

Every record is looked up by slug first, so the script can be re-run safely.
"""
import asyncio
import sys
from pathlib import Path

# Windows: asyncpg requires SelectorEventLoop
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.config import settings
from app.models import Base  # noqa: F401
from app.models.accounting_firm import AccountingFirm
from app.models.advisor import Advisor, AdvisorStatus
from app.models.blog import BlogCategory, BlogPost, BlogPostCategory, BlogPostStatus
from app.models.investment_firm import InvestmentFirm, InvestmentFirmFeature, InvestmentFirmLeader
from app.models.taxonomy import BlogCategoryName
from app.models.user import Profile, User
from app.utils.helpers import parse_money_amount, slugify, utc_now

ADVISORS = [
    {
        "name": "John Smith",
        "slug": "john-smith",
        "firm_name": "Smith Wealth Partners",
        "position": "Senior Financial Advisor",
        "personal_bio": "John has helped families plan for retirement for over fifteen years.",
        "firm_bio": "Smith Wealth Partners is an independent fee-only planning practice.",
        "email": "john@smithwealth.example",
        "city": "Austin",
        "state_hq": "Texas",
        "years_of_experience": 15,
        "minimum": "$250k",
        "fiduciary": True,
        "advisor_services": ["Financial Planning", "Retirement Planning"],
        "professional_designations": ["Certified Financial Planner (CFP)"],
        "client_type": ["Individuals", "Retirees"],
        "compensation": ["Fee-Only"],
        "premium": True,
    },
    {
        "name": "Sarah Johnson",
        "slug": "sarah-johnson",
        "firm_name": "Johnson Advisory",
        "position": "Wealth Manager",
        "personal_bio": "Sarah specializes in equity compensation and tax-aware investing.",
        "firm_bio": "Johnson Advisory serves tech professionals across the west coast.",
        "email": "sarah@johnsonadvisory.example",
        "city": "San Francisco",
        "state_hq": "California",
        "years_of_experience": 9,
        "minimum": "$500,000",
        "first_session_is_free": True,
        "advisor_services": ["Investment Management", "Tax Planning"],
        "professional_designations": ["Chartered Financial Analyst (CFA)"],
        "client_type": ["Tech Professionals", "High Net Worth Individuals"],
        "compensation": ["Assets Under Management"],
    },
]

INVESTMENT_FIRMS = [
    {
        "name": "Vanguard",
        "slug": "vanguard",
        "description": "Low-cost index funds and ETFs.",
        "headquarters": "Pennsylvania",
        "website": "https://investor.vanguard.com/",
        "aum": "$8.6T",
        "minimum_investment": 3000,
        "asset_class": ["Asset Management"],
        "verified": True,
        "features": ["Index funds", "Retirement accounts"],
        "leadership": [{"name": "Salim Ramji", "position": "CEO"}],
    },
    {
        "name": "Edly",
        "slug": "edly",
        "description": "Income share agreement investing.",
        "headquarters": "New York",
        "website": "https://edly.com/",
        "minimum_investment": 0,
        "target_return": "8-12%",
        "asset_class": ["Loans"],
        "features": ["Monthly payouts"],
        "leadership": [],
    },
]

ACCOUNTING_FIRMS = [
    {
        "name": "Deloitte",
        "slug": "deloitte",
        "description": "Global audit, tax and advisory services.",
        "headquarters": "New York",
        "minimum_fee": "$5,000",
        "services": ["Advisory Services", "Tax Preparation"],
        "specialties": ["Ultra High Net Worth Individuals"],
        "premium": True,
    },
    {
        "name": "Maple Street CPAs",
        "slug": "maple-street-cpas",
        "description": "Bookkeeping and tax returns for small businesses.",
        "headquarters": "Ohio",
        "minimum_fee": "$150/mo",
        "services": ["Bookkeeping", "Payroll Services"],
        "specialties": ["SMB Owner", "Solopreneurs"],
    },
]

POSTS = [
    {
        "title": "Investment Strategies 2024",
        "slug": "investment-strategies-2024",
        "excerpt": "How to position a portfolio for the year ahead.",
        "content": "## Diversify\n\nSpread risk across **asset classes**.",
        "categories": ["Investing"],
    },
    {
        "title": "Retirement Planning Guide",
        "slug": "retirement-planning-guide",
        "excerpt": "A step by step checklist for retirement.",
        "content": "## Start early\n\n- Max out tax-advantaged accounts\n- Review allocations yearly",
        "categories": ["Retirement", "Finance"],
    },
]


async def _exists(session: AsyncSession, model, slug: str) -> bool:
    result = await session.execute(select(model.id).where(model.slug == slug))
    return result.first() is not None


async def seed(session: AsyncSession) -> None:
    result = await session.execute(
        select(User).join(Profile, Profile.id == User.id).where(Profile.is_admin.is_(True))
    )
    admin: User | None = result.scalars().first()
    if admin is None:
        print("ERROR: no admin account found. Run scripts/create_admin.py first.")
        return

    for data in ADVISORS:
        if await _exists(session, Advisor, data["slug"]):
            print(f"Advisor already exists: {data['slug']}")
            continue
        now = utc_now()
        session.add(Advisor(
            **data,
            minimum_amount=parse_money_amount(data["minimum"]),
            status=AdvisorStatus.APPROVED,
            verified=True,
            submitted_at=now,
            approved_at=now,
            approved_by=admin.id,
        ))
        print(f"Created advisor: {data['slug']}")

    for data in INVESTMENT_FIRMS:
        if await _exists(session, InvestmentFirm, data["slug"]):
            print(f"Investment firm already exists: {data['slug']}")
            continue
        values = dict(data)
        features = values.pop("features")
        leadership = values.pop("leadership")
        firm = InvestmentFirm(**values)
        firm.features = [InvestmentFirmFeature(feature=f) for f in features]
        firm.leadership = [InvestmentFirmLeader(**leader) for leader in leadership]
        session.add(firm)
        print(f"Created investment firm: {data['slug']}")

    for data in ACCOUNTING_FIRMS:
        if await _exists(session, AccountingFirm, data["slug"]):
            print(f"Accounting firm already exists: {data['slug']}")
            continue
        session.add(AccountingFirm(**data, minimum_fee_amount=parse_money_amount(data["minimum_fee"])))
        print(f"Created accounting firm: {data['slug']}")

    for name in BlogCategoryName:
        result = await session.execute(select(BlogCategory).where(BlogCategory.name == name.value))
        if result.scalars().first() is None:
            session.add(BlogCategory(name=name.value, slug=slugify(name.value)))
    await session.flush()

    for data in POSTS:
        if await _exists(session, BlogPost, data["slug"]):
            print(f"Blog post already exists: {data['slug']}")
            continue
        values = dict(data)
        categories = values.pop("categories")
        post = BlogPost(
            **values,
            status=BlogPostStatus.PUBLISHED,
            published_at=utc_now(),
            author_id=admin.id,
        )
        post.category_links = [BlogPostCategory(category_name=c) for c in categories]
        session.add(post)
        print(f"Created blog post: {data['slug']}")

    await session.commit()

    print()
    print("─" * 60)
    print("Seeded successfully!")
    print("Next step:")
    print("  python scripts/build_ssg.py --from-db")
    print("─" * 60)


async def main() -> None:
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        await seed(session)
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
