"""Database seeder: one demo account plus a batch of articles."""
import asyncio
import argparse
import random
import time

from blog.database import engine, async_session, Base
from blog.models import Account, Article
from blog.security import password_hasher

TOPICS = ["python", "fastapi", "postgresql", "docker", "testing", "security",
          "asyncio", "sqlalchemy", "jinja", "deployment"]


async def seed(num_articles: int, email: str, password: str, reset: bool = False):
    print(f"Seeding: account {email}, {num_articles} articles")
    start = time.perf_counter()

    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        session.add(Account(email=email, password=password_hasher.hash(password)))
        await session.flush()
        print("  Created account")

        for i in range(num_articles):
            topic = random.choice(TOPICS)
            session.add(Article(
                title=f"Article {i}: notes on {topic}",
                content=f"This is the full content of article {i} about {topic}. " * 10,
            ))
        await session.flush()
        print(f"  Created {num_articles} articles")

        await session.commit()

    await engine.dispose()
    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")


def main():
    parser = argparse.ArgumentParser(description="Seed the blog database")
    parser.add_argument("--articles", type=int, default=20, help="Number of articles to create")
    parser.add_argument("--email", default="demo@example.com", help="Demo account email")
    parser.add_argument("--password", default="demo-password", help="Demo account password")
    parser.add_argument("--reset", action="store_true", help="Drop all tables first")
    args = parser.parse_args()
    asyncio.run(seed(args.articles, args.email, args.password, reset=args.reset))


if __name__ == "__main__":
    main()
