from decimal import Decimal

from crowallet import data, enums
from crowallet.market import portfolio
from tests.test_unit import utils


def _price(
    symbol: str,
    price: str,
    asset_type: enums.UserAssetType = enums.UserAssetType.TENDERMINT,
) -> data.AssetMarketPrice:
    return data.AssetMarketPrice(
        asset_symbol=symbol, currency="USD", price=price, asset_type=asset_type
    )


def test_getting_asset_balance_price() -> None:
    asset = utils.create_asset(balance=Decimal("1500"))
    assert portfolio.get_asset_balance_price(asset, _price("CRO", "0.08")) == Decimal(
        "120"
    )


def test_valuing_asset_without_price_at_zero() -> None:
    asset = utils.create_asset(balance=Decimal("1500"))
    assert portfolio.get_asset_balance_price(asset, _price("CRO", "")) == 0
    assert portfolio.get_asset_balance_price(asset, _price("CRO", "n/a")) == 0
    assert portfolio.get_asset_market_value(asset, {}, "USD") == 0


def test_sorting_assets_by_market_value() -> None:
    cro_asset = utils.create_asset(balance=Decimal("1000"))
    eth_asset = utils.create_asset(
        identifier="eth-mainnet",
        asset_type=enums.UserAssetType.EVM,
        mainnet_symbol="ETH",
        chain_name=enums.SupportedChainName.ETHEREUM,
        balance=Decimal("0.5"),
    )
    atom_asset = utils.create_asset(
        identifier="atom-mainnet",
        mainnet_symbol="ATOM",
        chain_name=enums.SupportedChainName.COSMOS_HUB,
        balance=Decimal("3"),
    )
    prices = {
        market_price.key: market_price
        for market_price in [
            _price("CRO", "0.08"),
            _price("ETH", "2000", enums.UserAssetType.EVM),
        ]
    }
    sorted_assets = portfolio.sort_assets_by_market_value(
        [cro_asset, atom_asset, eth_asset], prices, "USD"
    )
    assert [asset.identifier for asset, _ in sorted_assets] == [
        "eth-mainnet",
        "cro-mainnet",
        "atom-mainnet",
    ]
    assert sorted_assets[0][1] == Decimal("1000")
    assert sorted_assets[2][1] == 0
