"""Database seeder: sample articles with comments, written through the validated services."""
import asyncio
import argparse
import random
import time

from blog.database import engine, async_session, Base
from blog.schemas import ArticleCreate, CommentCreate
from blog.services import article_service, comment_service

TOPICS = ["python", "fastapi", "postgresql", "sqlalchemy", "docker", "testing",
          "performance", "security", "typing", "asyncio"]

READERS = ["alice", "bob", "carol", "dave", "erin", "frank"]


async def seed(num_articles: int, max_comments: int):
    print(f"Seeding: {num_articles} articles, up to {max_comments} comments each")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    total_comments = 0
    async with async_session() as session:
        for i in range(num_articles):
            topic = random.choice(TOPICS)
            article = await article_service.create_article(
                session,
                ArticleCreate(
                    title=f"Notes on {topic} #{i}"[:30],
                    body=f"A short write-up about working with {topic} in production. " * 3,
                ),
            )
            for _ in range(random.randint(0, max_comments)):
                await comment_service.create_comment(
                    session,
                    CommentCreate(
                        commenter=random.choice(READERS),
                        body=f"Thanks, this cleared up a lot about {topic} for me.",
                        article_id=article["id"],
                    ),
                )
                total_comments += 1
        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Articles: {num_articles}")
    print(f"  Comments: {total_comments}")


def main():
    parser = argparse.ArgumentParser(description="Seed the blog database")
    parser.add_argument("--articles", type=int, default=20, help="Number of articles to create")
    parser.add_argument("--max-comments", type=int, default=4, help="Upper bound of comments per article")
    args = parser.parse_args()
    asyncio.run(seed(args.articles, args.max_comments))


if __name__ == "__main__":
    main()
