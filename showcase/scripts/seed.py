"""
Reset the database to the demo dataset. Run from project root:
  python -m showcase.scripts.seed --yes

Demo accounts: admin@builtwithcn.com / admin123 (admin),
sarah@builtwithcn.com / mod123 (moderator), and john, jane, alex, maria
@example.com / user123.
"""
import argparse
import logging
import sys
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from showcase.core.database import SessionLocal
from showcase.core.log_config import configure_logging
from showcase.core.security import BCRYPT_ROUNDS, hash_password
from showcase.models import User, Website, WebsiteComment, WebsiteLike, WebsiteTag

logger = logging.getLogger(__name__)


def _avatar(photo: str) -> str:
    return f"https://images.unsplash.com/{photo}?w=150&h=150&fit=crop&crop=face"


def _shot(photo: str) -> str:
    return f"https://images.unsplash.com/{photo}?w=800&h=600&fit=crop"


SEED_USERS = [
    {
        "key": "admin-1",
        "name": "Admin User",
        "email": "admin@builtwithcn.com",
        "email_verified": True,
        "role": "admin",
        "image": _avatar("photo-1472099645785-5658abf4ff4e"),
        "password": "admin123",
    },
    {
        "key": "mod-1",
        "name": "Sarah Johnson",
        "email": "sarah@builtwithcn.com",
        "email_verified": True,
        "role": "moderator",
        "image": _avatar("photo-1494790108755-2616b612b47c"),
        "password": "mod123",
    },
    {
        "key": "user-1",
        "name": "John Doe",
        "email": "john@example.com",
        "email_verified": True,
        "role": "user",
        "image": _avatar("photo-1507003211169-0a1dd7228f2d"),
        "password": "user123",
    },
    {
        "key": "user-2",
        "name": "Jane Smith",
        "email": "jane@example.com",
        "email_verified": True,
        "role": "user",
        "image": _avatar("photo-1438761681033-6461ffad8d80"),
        "password": "user123",
    },
    {
        "key": "user-3",
        "name": "Alex Chen",
        "email": "alex@example.com",
        "email_verified": True,
        "role": "user",
        "image": _avatar("photo-1472099645785-5658abf4ff4e"),
        "password": "user123",
    },
    {
        "key": "user-4",
        "name": "Maria Garcia",
        "email": "maria@example.com",
        "email_verified": False,
        "role": "user",
        "image": _avatar("photo-1544005313-94ddf0286df2"),
        "password": "user123",
    },
]

SEED_WEBSITES = [
    {
        "title": "Modern E-commerce Dashboard",
        "description": (
            "A comprehensive e-commerce dashboard built with Next.js and shadcn/ui. "
            "Features real-time analytics, inventory management, order tracking, and "
            "customer insights. Includes dark mode support and responsive design."
        ),
        "image_url": _shot("photo-1519389950473-47ba0277781c"),
        "source_url": "https://github.com/example/ecommerce-dashboard",
        "live_url": "https://ecommerce-dashboard-demo.vercel.app",
        "tags": ["dashboard", "analytics", "e-commerce", "charts", "dark-mode"],
        "category": "e-commerce",
        "is_popular": True,
        "status": "approved",
        "submitted_by": "user-1",
        "reviewed_by": "mod-1",
        "view_count": 2540,
        "published_at": datetime(2024, 1, 15, tzinfo=UTC),
    },
    {
        "title": "Developer Portfolio v2",
        "description": (
            "Clean and modern portfolio website showcasing projects, skills, and "
            "experience. Built with TypeScript, Next.js, and Tailwind CSS. Features "
            "smooth animations, blog section, and contact form."
        ),
        "image_url": _shot("photo-1465101046530-73398c7f28ca"),
        "source_url": "https://github.com/example/portfolio-v2",
        "live_url": "https://portfolio-v2-demo.vercel.app",
        "tags": ["portfolio", "animations", "blog", "contact-form", "typescript"],
        "category": "portfolio",
        "is_popular": False,
        "status": "approved",
        "submitted_by": "user-2",
        "reviewed_by": "admin-1",
        "view_count": 1890,
        "published_at": datetime(2024, 1, 10, tzinfo=UTC),
    },
    {
        "title": "SaaS Landing Page Pro",
        "description": (
            "High-converting SaaS landing page with pricing tables, feature comparisons, "
            "and customer testimonials. Optimized for conversion with A/B tested sections "
            "and mobile-first design approach."
        ),
        "image_url": _shot("photo-1551434678-e076c223a692"),
        "source_url": None,
        "live_url": "https://saas-landing-pro.vercel.app",
        "tags": ["landing-page", "pricing", "testimonials", "conversion", "mobile-first"],
        "category": "saas",
        "is_popular": True,
        "status": "approved",
        "submitted_by": "user-3",
        "reviewed_by": "mod-1",
        "view_count": 3420,
        "published_at": datetime(2024, 1, 20, tzinfo=UTC),
    },
    {
        "title": "Finance Tracker Dashboard",
        "description": (
            "Personal finance management dashboard with expense tracking, budget planning, "
            "and investment portfolio overview. Features data visualization, goal setting, "
            "and financial insights."
        ),
        "image_url": _shot("photo-1554224155-6726b3ff858f"),
        "source_url": "https://github.com/example/finance-tracker",
        "live_url": "https://finance-tracker-demo.vercel.app",
        "tags": ["finance", "dashboard", "charts", "budgeting", "investments"],
        "category": "finance",
        "is_popular": False,
        "status": "approved",
        "submitted_by": "user-4",
        "reviewed_by": "admin-1",
        "view_count": 1240,
        "published_at": datetime(2024, 1, 8, tzinfo=UTC),
    },
    {
        "title": "Healthcare Portal",
        "description": (
            "Patient management system for healthcare providers. Includes appointment "
            "scheduling, medical records, prescription management, and telemedicine "
            "integration."
        ),
        "image_url": _shot("photo-1576765607924-27d6b1c7b6b8"),
        "source_url": "https://github.com/example/healthcare-portal",
        "live_url": "https://healthcare-portal-demo.vercel.app",
        "tags": ["healthcare", "appointments", "medical-records", "telemedicine"],
        "category": "healthcare",
        "is_popular": True,
        "status": "approved",
        "submitted_by": "user-1",
        "reviewed_by": "mod-1",
        "view_count": 2180,
        "published_at": datetime(2024, 1, 25, tzinfo=UTC),
    },
    {
        "title": "Education Platform",
        "description": (
            "Online learning platform with course management, video streaming, progress "
            "tracking, and interactive quizzes. Built for educators and students."
        ),
        "image_url": _shot("photo-1501504905252-473c47e087f8"),
        "source_url": None,
        "live_url": "https://education-platform-demo.vercel.app",
        "tags": ["education", "courses", "video-streaming", "quizzes", "progress-tracking"],
        "category": "education",
        "is_popular": False,
        "status": "pending",
        "submitted_by": "user-2",
        "reviewed_by": None,
        "view_count": 0,
        "published_at": None,
    },
    {
        "title": "Blog Platform",
        "description": (
            "Modern blogging platform with markdown support, SEO optimization, and social "
            "sharing. Features comment system, author profiles, and content management."
        ),
        "image_url": _shot("photo-1486312338219-ce68d2c6f44d"),
        "source_url": "https://github.com/example/blog-platform",
        "live_url": "https://blog-platform-demo.vercel.app",
        "tags": ["blog", "markdown", "seo", "comments", "cms"],
        "category": "blog",
        "is_popular": False,
        "status": "rejected",
        "submitted_by": "user-3",
        "reviewed_by": "admin-1",
        "view_count": 0,
        "published_at": None,
    },
]

# (website index, user key)
SEED_LIKES = [
    (0, "user-1"),
    (0, "user-2"),
    (0, "user-3"),
    (1, "user-1"),
    (1, "user-4"),
    (2, "user-2"),
    (2, "user-3"),
    (2, "user-4"),
    (3, "user-1"),
    (4, "user-2"),
    (4, "user-3"),
]

# (website index, user key, content)
SEED_COMMENTS = [
    (
        0,
        "user-2",
        "Amazing dashboard! The analytics section is particularly impressive. "
        "Great work on the responsive design.",
    ),
    (
        0,
        "user-3",
        "Love the dark mode implementation. Could you share how you handled the theme switching?",
    ),
    (
        1,
        "user-1",
        "Clean and professional portfolio. The animations are smooth and not overwhelming.",
    ),
    (
        2,
        "user-4",
        "This landing page converts really well. The pricing section is very clear and compelling.",
    ),
    (
        4,
        "user-1",
        "Excellent work on the healthcare portal. The appointment system is very user-friendly.",
    ),
]


def clear_database(db: Session) -> None:
    """Delete all rows, children first."""
    for model in (WebsiteComment, WebsiteLike, WebsiteTag, Website, User):
        db.query(model).delete(synchronize_session=False)
    db.commit()
    # Rows are gone; drop stale instances so reused ids do not collide.
    db.expunge_all()


def seed_database(db: Session, rounds: int = BCRYPT_ROUNDS) -> dict[str, int]:
    """Replace all data with the demo dataset; return row counts per kind."""
    clear_database(db)
    now = datetime.now(UTC)

    users: dict[str, User] = {}
    for data in SEED_USERS:
        user = User(
            name=data["name"],
            email=data["email"],
            email_verified=data["email_verified"],
            role=data["role"],
            image=data["image"],
            password_hash=hash_password(data["password"], rounds=rounds),
            created_at=now,
            updated_at=now,
        )
        db.add(user)
        users[data["key"]] = user
    db.flush()

    websites: list[Website] = []
    for data in SEED_WEBSITES:
        website = Website(
            title=data["title"],
            description=data["description"],
            image_url=data["image_url"],
            source_url=data["source_url"],
            live_url=data["live_url"],
            category=data["category"],
            is_popular=data["is_popular"],
            status=data["status"],
            submitted_by=users[data["submitted_by"]].id,
            reviewed_by=users[data["reviewed_by"]].id if data["reviewed_by"] else None,
            view_count=data["view_count"],
            published_at=data["published_at"],
            created_at=now,
            updated_at=now,
        )
        website.tag_rows = [
            WebsiteTag(name=tag, position=i) for i, tag in enumerate(data["tags"])
        ]
        db.add(website)
        websites.append(website)
    db.flush()

    for index, key in SEED_LIKES:
        db.add(WebsiteLike(website_id=websites[index].id, user_id=users[key].id, created_at=now))
    for index, key, content in SEED_COMMENTS:
        db.add(
            WebsiteComment(
                website_id=websites[index].id,
                user_id=users[key].id,
                content=content,
                created_at=now,
                updated_at=now,
            )
        )
    db.commit()

    counts = {
        "users": len(SEED_USERS),
        "websites": len(SEED_WEBSITES),
        "likes": len(SEED_LIKES),
        "comments": len(SEED_COMMENTS),
    }
    logger.info("Database seeded", extra=counts)
    return counts


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Replace ALL data with the Showcase demo dataset.",
    )
    parser.add_argument("--yes", action="store_true", help="Confirm wiping existing data")
    args = parser.parse_args(argv)
    configure_logging()

    if not args.yes:
        print("Refusing to wipe the database without --yes.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        counts = seed_database(db)
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        return 1
    finally:
        db.close()
    print(
        f"Seeded {counts['users']} users, {counts['websites']} websites, "
        f"{counts['likes']} likes, and {counts['comments']} comments."
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
