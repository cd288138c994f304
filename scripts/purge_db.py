import asyncio

from sqlalchemy import text

from blogsummarizer.infrastructure.database import async_session_factory


async def clear_data():
    async with async_session_factory() as session:
        result = await session.execute(text("DELETE FROM blog_summaries"))
        await session.commit()
        print(f"Database cleared! {result.rowcount} summaries removed.")


asyncio.run(clear_data())
