from aiohttp import client_exceptions
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from crowallet import data, enums, exceptions
from crowallet.api.core.dependencies import get_price_resolver
from crowallet.api.core.logger import logger
from crowallet.config import config
from crowallet.database import db, services
from crowallet.market.price_resolver import PriceResolver

router = APIRouter(prefix="/prices")


async def _async_find_asset_or_404(
    asset_identifier: str, session: AsyncSession
) -> data.Asset:
    asset = await services.async_find_converted_asset(asset_identifier, session)
    if not asset:
        raise HTTPException(status_code=404, detail=f"Asset {asset_identifier} not found")
    return asset


@router.get("/stored/{asset_type}/{symbol}")
async def get_stored_price(
    asset_type: enums.UserAssetType,
    symbol: str,
    currency: str = config.default_currency,
    session: AsyncSession = Depends(db.get_session),
) -> data.AssetMarketPrice:
    market_price = await services.async_find_market_price(
        asset_type, symbol, currency, session
    )
    if not market_price:
        raise HTTPException(status_code=404, detail="No stored price")
    return market_price


@router.get("/{asset_identifier}")
async def get_asset_price(
    asset_identifier: str,
    currency: str = config.default_currency,
    session: AsyncSession = Depends(db.get_session),
    price_resolver: PriceResolver = Depends(get_price_resolver),
) -> data.AssetMarketPrice:
    asset = await _async_find_asset_or_404(asset_identifier, session)
    return await price_resolver.get_asset_price(asset, currency)


@router.get("/{asset_identifier}/history")
async def get_token_prices(
    asset_identifier: str,
    currency: str = config.default_currency,
    interval: str = "d",
    session: AsyncSession = Depends(db.get_session),
    price_resolver: PriceResolver = Depends(get_price_resolver),
) -> data.TokenPriceSeries:
    asset = await _async_find_asset_or_404(asset_identifier, session)
    try:
        return await price_resolver.get_token_prices(asset, currency, interval)
    except exceptions.SlugNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (exceptions.PriceFeedError, client_exceptions.ClientError) as e:
        logger.warning(f"Price history of {asset_identifier} unavailable, e: {e!r}")
        raise HTTPException(status_code=502, detail="Price feed unavailable")
