import asyncio
import logging

from apscheduler.schedulers import asyncio as asyncio_scheduler
from apscheduler.triggers import cron

from crowallet import runner
from crowallet.config import config
from crowallet.database import db
from crowallet.market.price_resolver import PriceResolver


def create_scheduler(
    price_resolver: PriceResolver,
) -> asyncio_scheduler.AsyncIOScheduler:
    scheduler = asyncio_scheduler.AsyncIOScheduler()
    scheduler.add_job(
        runner.async_refresh_asset_prices,
        kwargs={
            "session_maker": db.async_session,
            "price_resolver": price_resolver,
            "currency": config.default_currency,
        },
        trigger=cron.CronTrigger.from_crontab(config.price_refresh_cron),
    )
    return scheduler


async def async_run_executor() -> None:
    price_resolver = PriceResolver()
    scheduler = create_scheduler(price_resolver)
    scheduler.start()
    await runner.async_refresh_asset_prices(db.async_session, price_resolver)
    # keep the loop alive for the scheduled jobs
    while True:
        await asyncio.sleep(10)


async def init_db() -> None:
    await db.init_models()


def setup_logging() -> None:
    logging.basicConfig(
        format="[%(levelname)s] %(message)s (%(filename)s, %(funcName)s(), line %(lineno)d)",
        level=logging.INFO,
    )


if __name__ == "__main__":
    setup_logging()
    event_loop = asyncio.new_event_loop()
    event_loop.run_until_complete(init_db())
    event_loop.run_until_complete(async_run_executor())
