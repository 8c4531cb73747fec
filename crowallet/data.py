from decimal import Decimal

import pydantic

from crowallet import enums, exceptions


class AssetConfig(pydantic.BaseModel):
    chain_name: enums.SupportedChainName
    node_url: str | None = None
    indexing_url: str | None = None
    explorer_url: str | None = None
    address_prefix: str | None = None
    fee_gas_limit: str | None = None
    fee_amount: str | None = None
    is_ledger_support_disabled: bool = False


class Asset(pydantic.BaseModel):
    identifier: str
    wallet_id: str = ""
    asset_type: enums.UserAssetType
    mainnet_symbol: str
    symbol: str
    name: str = ""
    decimals: int = 0
    balance: Decimal = Decimal(0)
    address: str = ""
    config: AssetConfig | None = None

    @property
    def chain_name(self) -> enums.SupportedChainName | None:
        if not self.config:
            return None
        return self.config.chain_name

    def accepts_address(self, address: str, allow_override: bool = False) -> bool:
        return allow_override or not self.address or self.address == address

    def assign_address(self, address: str, allow_override: bool = False) -> None:
        """
        Sets the chain address of the asset, an already derived address can only be
        replaced through an explicit migration
        """
        if not self.accepts_address(address, allow_override):
            raise exceptions.AssetAddressImmutableError(
                f"Asset {self.identifier} already has address {self.address}"
            )
        self.address = address


class WalletDraft(pydantic.BaseModel):
    identifier: str
    name: str = ""
    address: str = ""
    address_index: int = 0
    derivation_path_standard: enums.DerivationPathStandard = (
        enums.DerivationPathStandard.BIP44
    )
    wallet_type: enums.WalletType = enums.WalletType.NORMAL
    network_address_prefix: str = "cro"
    assets: list[Asset] = pydantic.Field(default_factory=list)


class AssetMarketPrice(pydantic.BaseModel):
    asset_symbol: str
    currency: str
    price: str = ""
    daily_change: str = ""
    asset_type: enums.UserAssetType

    @property
    def key(self) -> str:
        return market_price_key(self.asset_type, self.asset_symbol, self.currency)


def market_price_key(
    asset_type: enums.UserAssetType, mainnet_symbol: str, currency: str
) -> str:
    return f"{asset_type.value}-{mainnet_symbol}-{currency}"


class TokenSlug(pydantic.BaseModel):
    slug: str
    symbol: str
    tags: list[str] | None = None


class TokenPriceRecord(TokenSlug):
    usd_price: Decimal
    usd_price_change_24h: Decimal | None = None


class TokenFiatPrice(pydantic.BaseModel):
    fiat_price: str
    daily_change: str


class TokenPriceSeries(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="allow")

    prices: list[list[float]]


class FiatRates(pydantic.BaseModel):
    currency: str
    rates: dict[str, Decimal]


class ExchangeRatesResponse(pydantic.BaseModel):
    data: FiatRates


class LedgerAddressEntry(pydantic.BaseModel):
    index: int
    public_address: str
    derivation_path: str
    balance: str = "0"


class AppConnectionStatus(pydantic.BaseModel):
    chain_name: enums.SupportedChainName
    connected: bool
    message: str = ""
    error_kind: enums.DeviceErrorKind | None = None

