import asyncio
import os

import asyncpg

from movie_scatter.db.postgres import create_movies_table
from movie_scatter.logger import logger


async def main():
    pool = await asyncpg.create_pool(os.environ["POSTGRES_URI"])

    logger.info("creating database tables")
    await create_movies_table(pool)
    logger.info("created all required tables")


if __name__ == "__main__":
    asyncio.run(main())
