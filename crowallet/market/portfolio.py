from decimal import Decimal, InvalidOperation

from crowallet import data


def get_asset_balance_price(
    asset: data.Asset, market_price: data.AssetMarketPrice
) -> Decimal:
    """
    Value of the asset balance in the currency of the market price
    """
    if not market_price.price:
        return Decimal(0)
    try:
        price = Decimal(market_price.price)
    except InvalidOperation:
        return Decimal(0)
    return asset.balance * price


def get_asset_market_value(
    asset: data.Asset,
    prices: dict[str, data.AssetMarketPrice],
    currency: str,
) -> Decimal:
    key = data.market_price_key(asset.asset_type, asset.mainnet_symbol, currency)
    market_price = prices.get(key)
    if not market_price or not market_price.price:
        return Decimal(0)
    if asset.mainnet_symbol != market_price.asset_symbol:
        return Decimal(0)
    return get_asset_balance_price(asset, market_price)


def sort_assets_by_market_value(
    assets: list[data.Asset],
    prices: dict[str, data.AssetMarketPrice],
    currency: str,
) -> list[tuple[data.Asset, Decimal]]:
    valued_assets = [
        (asset, get_asset_market_value(asset, prices, currency)) for asset in assets
    ]
    valued_assets.sort(key=lambda x: x[1], reverse=True)
    return valued_assets
