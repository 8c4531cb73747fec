import logging

from sqlalchemy.orm import sessionmaker

from crowallet import data
from crowallet.config import config
from crowallet.database import services
from crowallet.market.price_resolver import PriceResolver

log = logging.getLogger(__name__)


async def async_save_market_prices(
    market_prices: list[data.AssetMarketPrice], session_maker: sessionmaker
) -> int:
    saved = 0
    async with session_maker() as session:
        for market_price in market_prices:
            if not market_price.price:
                log.warning(
                    f"No price for {market_price.key}, keeping last stored price"
                )
                continue
            await services.async_save_market_price(market_price, session)
            saved += 1
    return saved


async def async_refresh_asset_prices(
    session_maker: sessionmaker,
    price_resolver: PriceResolver,
    currency: str = config.default_currency,
) -> int:
    async with session_maker() as session:
        assets = await services.async_find_all_assets(session)
    if not assets:
        log.info("No assets stored, skipping price refresh")
        return 0
    prices = await price_resolver.retrieve_all_assets_prices(assets, currency)
    saved = await async_save_market_prices(list(prices.values()), session_maker)
    log.info(f"Refreshed {saved} of {len(prices)} asset prices in {currency}")
    return saved
