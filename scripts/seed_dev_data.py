#!/usr/bin/env python3
############################################################
#
# blogcms - Blog and Content Management Service
#
# seed_dev_data.py: Seed database with development test data
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Seed development data for blogcms."""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from blogcms.app.core import comments, content
from blogcms.app.db import crud
from blogcms.app.db.models import ContentStatus, Post
from blogcms.app.db.session import create_all_tables, drop_all_tables, get_async_db_context
from blogcms.app.security import hash_password

POSTS = [
    {
        "title": "Hello World",
        "content": "The first post on the new blog.",
        "excerpt": "Welcome!",
        "status": ContentStatus.PUBLISHED,
    },
    {
        "title": "Working with Async SQLAlchemy",
        "content": "Sessions, savepoints and why expire_on_commit matters.",
        "excerpt": "Notes on async database access.",
        "status": ContentStatus.PUBLISHED,
        "seo_keywords": "python, sqlalchemy, asyncio",
    },
    {
        "title": "Unfinished Thoughts",
        "content": "Still a draft.",
        "status": ContentStatus.DRAFT,
    },
]

PAGES = [
    {"title": "About", "content": "Who we are.", "status": ContentStatus.PUBLISHED},
    {"title": "Contact", "content": "How to reach us.", "status": ContentStatus.PUBLISHED},
]


async def seed_users(db):
    """Create the default admin account."""
    existing = await crud.get_user_by_username(db, "admin")
    if existing:
        print("User admin already exists, skipping...")
        return existing

    user = await crud.create_user(
        db=db,
        username="admin",
        email="admin@blogcms.local",
        password_hash=hash_password("admin123"),
        is_admin=True,
    )
    print(f"Created user: {user.username}")
    return user


async def seed_content(db):
    """Create sample posts, pages and a pending comment."""
    if await crud.count_content(db, Post):
        print("Posts already exist, skipping content...")
        return

    created_posts = []
    for data in POSTS:
        post = await content.create_content(db, "post", data)
        created_posts.append(post)
        print(f"  Created post: {post.slug} ({post.status.value})")

    for data in PAGES:
        page = await content.create_content(db, "page", data)
        print(f"  Created page: {page.slug} ({page.status.value})")

    comment = await comments.create_comment(
        db,
        post_id=created_posts[0].id,
        author_name="First Reader",
        author_email="reader@example.com",
        content="Looking forward to more posts.",
    )
    print(f"  Created pending comment #{comment.id}")


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed blogcms development data")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create tables from model metadata instead of relying on migrations",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop all tables before creating them (implies --create-tables)",
    )
    args = parser.parse_args()

    print("=" * 60)
    print("blogcms Development Data Seeder")
    print("=" * 60)
    print()

    if args.reset:
        print("Dropping tables...")
        await drop_all_tables()
    if args.reset or args.create_tables:
        print("Creating tables...")
        await create_all_tables()

    async with get_async_db_context() as db:
        print("Creating users...")
        await seed_users(db)
        print("Creating content...")
        await seed_content(db)

    print()
    print("=" * 60)
    print("Seeding complete!")
    print()
    print("Default credentials:")
    print("  admin / admin123")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
