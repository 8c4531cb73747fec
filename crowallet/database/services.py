from datetime import datetime
from decimal import Decimal

import sqlalchemy
from sqlalchemy import orm
from sqlalchemy.ext import asyncio as sql_asyncio

from crowallet import data, enums, exceptions
from crowallet.database import models


async def async_find_wallet(
    identifier: str, session: sql_asyncio.AsyncSession
) -> models.Wallet | None:
    query = sqlalchemy.select(models.Wallet).where(
        models.Wallet.identifier == identifier
    )
    found = await session.execute(query)
    return found.scalars().first()


async def async_save_wallet(
    wallet_draft: data.WalletDraft, session: sql_asyncio.AsyncSession
) -> models.Wallet:
    wallet_model = await async_find_wallet(wallet_draft.identifier, session)
    if not wallet_model:
        wallet_model = models.Wallet(identifier=wallet_draft.identifier)
        session.add(wallet_model)
    wallet_model.name = wallet_draft.name
    wallet_model.address = wallet_draft.address
    wallet_model.address_index = wallet_draft.address_index
    wallet_model.derivation_path_standard = wallet_draft.derivation_path_standard.value
    wallet_model.wallet_type = wallet_draft.wallet_type.value
    wallet_model.network_address_prefix = wallet_draft.network_address_prefix
    await session.commit()
    return wallet_model


async def async_find_asset(
    identifier: str, session: sql_asyncio.AsyncSession
) -> models.Asset | None:
    query = sqlalchemy.select(models.Asset).where(models.Asset.identifier == identifier)
    found = await session.execute(query)
    return found.scalars().first()


def _fill_asset_model(asset_model: models.Asset, asset: data.Asset) -> None:
    asset_model.asset_type = asset.asset_type.value
    asset_model.mainnet_symbol = asset.mainnet_symbol
    asset_model.symbol = asset.symbol
    asset_model.name = asset.name
    asset_model.decimals = asset.decimals
    asset_model.balance = str(asset.balance)
    asset_model.address = asset.address
    if asset.config:
        asset_model.chain_name = asset.config.chain_name.value
        asset_model.node_url = asset.config.node_url
        asset_model.indexing_url = asset.config.indexing_url
        asset_model.explorer_url = asset.config.explorer_url
        asset_model.address_prefix = asset.config.address_prefix


async def async_save_assets(
    assets: list[data.Asset], session: sql_asyncio.AsyncSession
) -> None:
    wallet_models: dict[str, models.Wallet] = {}
    for asset in assets:
        if asset.wallet_id not in wallet_models:
            wallet_model = await async_find_wallet(asset.wallet_id, session)
            if not wallet_model:
                raise exceptions.WalletNotFoundError(
                    f"Wallet {asset.wallet_id} of asset {asset.identifier} is not saved"
                )
            wallet_models[asset.wallet_id] = wallet_model
        asset_model = await async_find_asset(asset.identifier, session)
        if not asset_model:
            asset_model = models.Asset(identifier=asset.identifier)
            session.add(asset_model)
        _fill_asset_model(asset_model, asset)
        asset_model.wallet_id = wallet_models[asset.wallet_id].id
    await session.commit()


def convert_asset_model(asset_model: models.Asset, wallet_id: str) -> data.Asset:
    config = None
    if asset_model.chain_name:
        config = data.AssetConfig(
            chain_name=enums.SupportedChainName(asset_model.chain_name),
            node_url=asset_model.node_url,
            indexing_url=asset_model.indexing_url,
            explorer_url=asset_model.explorer_url,
            address_prefix=asset_model.address_prefix,
        )
    return data.Asset(
        identifier=asset_model.identifier,
        wallet_id=wallet_id,
        asset_type=enums.UserAssetType(asset_model.asset_type),
        mainnet_symbol=asset_model.mainnet_symbol,
        symbol=asset_model.symbol,
        name=asset_model.name,
        decimals=asset_model.decimals,
        balance=Decimal(asset_model.balance),
        address=asset_model.address,
        config=config,
    )


async def async_find_wallet_assets(
    wallet_identifier: str, session: sql_asyncio.AsyncSession
) -> list[data.Asset]:
    wallet_model = await async_find_wallet(wallet_identifier, session)
    if not wallet_model:
        raise exceptions.WalletNotFoundError(f"Wallet {wallet_identifier} not found")
    query = sqlalchemy.select(models.Asset).where(
        models.Asset.wallet_id == wallet_model.id
    )
    found = await session.execute(query)
    return [
        convert_asset_model(asset_model, wallet_identifier)
        for asset_model in found.scalars().all()
    ]


async def async_find_all_assets(
    session: sql_asyncio.AsyncSession,
) -> list[data.Asset]:
    query = sqlalchemy.select(models.Asset).options(
        orm.selectinload(models.Asset.wallet)
    )
    found = await session.execute(query)
    return [
        convert_asset_model(
            asset_model, asset_model.wallet.identifier if asset_model.wallet else ""
        )
        for asset_model in found.scalars().all()
    ]


def convert_wallet_model(
    wallet_model: models.Wallet, assets: list[data.Asset]
) -> data.WalletDraft:
    return data.WalletDraft(
        identifier=wallet_model.identifier,
        name=wallet_model.name,
        address=wallet_model.address,
        address_index=wallet_model.address_index,
        derivation_path_standard=enums.DerivationPathStandard(
            wallet_model.derivation_path_standard
        ),
        wallet_type=enums.WalletType(wallet_model.wallet_type),
        network_address_prefix=wallet_model.network_address_prefix,
        assets=assets,
    )


async def async_find_wallet_draft(
    identifier: str, session: sql_asyncio.AsyncSession
) -> data.WalletDraft:
    wallet_model = await async_find_wallet(identifier, session)
    if not wallet_model:
        raise exceptions.WalletNotFoundError(f"Wallet {identifier} not found")
    assets = await async_find_wallet_assets(identifier, session)
    return convert_wallet_model(wallet_model, assets)


async def async_find_market_price_model(
    asset_type: enums.UserAssetType,
    asset_symbol: str,
    currency: str,
    session: sql_asyncio.AsyncSession,
) -> models.AssetMarketPrice | None:
    query = sqlalchemy.select(models.AssetMarketPrice).where(
        models.AssetMarketPrice.asset_type == asset_type.value,
        models.AssetMarketPrice.asset_symbol == asset_symbol,
        models.AssetMarketPrice.currency == currency,
    )
    found = await session.execute(query)
    return found.scalars().first()


async def async_save_market_price(
    market_price: data.AssetMarketPrice, session: sql_asyncio.AsyncSession
) -> None:
    price_model = await async_find_market_price_model(
        market_price.asset_type,
        market_price.asset_symbol,
        market_price.currency,
        session,
    )
    if not price_model:
        price_model = models.AssetMarketPrice(
            asset_type=market_price.asset_type.value,
            asset_symbol=market_price.asset_symbol,
            currency=market_price.currency,
        )
        session.add(price_model)
    price_model.price = market_price.price
    price_model.daily_change = market_price.daily_change
    price_model.time_updated = datetime.now()
    await session.commit()


def convert_market_price_model(
    price_model: models.AssetMarketPrice,
) -> data.AssetMarketPrice:
    return data.AssetMarketPrice(
        asset_symbol=price_model.asset_symbol,
        currency=price_model.currency,
        price=price_model.price,
        daily_change=price_model.daily_change,
        asset_type=enums.UserAssetType(price_model.asset_type),
    )


async def async_find_market_price(
    asset_type: enums.UserAssetType,
    asset_symbol: str,
    currency: str,
    session: sql_asyncio.AsyncSession,
) -> data.AssetMarketPrice | None:
    price_model = await async_find_market_price_model(
        asset_type, asset_symbol, currency, session
    )
    if not price_model:
        return None
    return convert_market_price_model(price_model)


async def async_find_converted_asset(
    identifier: str, session: sql_asyncio.AsyncSession
) -> data.Asset | None:
    query = (
        sqlalchemy.select(models.Asset)
        .where(models.Asset.identifier == identifier)
        .options(orm.selectinload(models.Asset.wallet))
    )
    found = await session.execute(query)
    asset_model = found.scalars().first()
    if not asset_model:
        return None
    wallet_id = asset_model.wallet.identifier if asset_model.wallet else ""
    return convert_asset_model(asset_model, wallet_id)
