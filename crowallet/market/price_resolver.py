import asyncio
import logging
from decimal import Decimal

from crowallet import data, enums, exceptions, http_utils, token_lists
from crowallet.config import config
from crowallet.market.slug_cache import SlugCache

log = logging.getLogger(__name__)

USD = "USD"


def format_decimal(value: Decimal) -> str:
    return format(value.normalize(), "f")


class PriceResolver:
    NATIVE_TOKEN_SLUGS = ("crypto-com-coin", "ethereum", "cosmos")
    CRONOS_ECOSYSTEM_TAG = "cronos-ecosystem"

    def __init__(
        self,
        slug_cache: SlugCache | None = None,
        price_api_v1_url: str = config.crypto_com_price_api_v1_url,
        price_api_v2_url: str = config.crypto_com_price_api_v2_url,
        fiat_rate_api_url: str = config.coinbase_ticker_api_base_url,
        whitelisted_crc20_symbols: frozenset[str] = token_lists.CRC20_MAINNET_TOKEN_SYMBOLS,
        whitelisted_erc20_symbols: frozenset[str] = token_lists.ERC20_MAINNET_TOKEN_SYMBOLS,
    ) -> None:
        self._slug_cache = slug_cache if slug_cache is not None else SlugCache()
        self._price_api_v1_url = price_api_v1_url
        self._price_api_v2_url = price_api_v2_url
        self._fiat_rate_api_url = fiat_rate_api_url
        self._whitelisted_crc20_symbols = whitelisted_crc20_symbols
        self._whitelisted_erc20_symbols = whitelisted_erc20_symbols
        self._slug_directory: list[data.TokenSlug] = []
        self._slug_directory_lock = asyncio.Lock()
        self._slug_locks: dict[str, asyncio.Lock] = {}

    @property
    def slug_cache(self) -> SlugCache:
        return self._slug_cache

    async def get_asset_price(
        self, asset: data.Asset, currency: str
    ) -> data.AssetMarketPrice:
        """
        Returns the fiat price of the asset, a failed lookup gives empty price and
        daily change instead of an error
        """
        try:
            token_price = await self.get_token_price_from_crypto_com(asset, currency)
        except Exception as e:
            log.warning(
                f"Could not get price of {asset.mainnet_symbol} in {currency}, e: {e!r}"
            )
            return data.AssetMarketPrice(
                asset_symbol=asset.mainnet_symbol,
                currency=currency,
                price="",
                daily_change="",
                asset_type=asset.asset_type,
            )
        return data.AssetMarketPrice(
            asset_symbol=asset.mainnet_symbol,
            currency=currency,
            price=token_price.fiat_price,
            daily_change=token_price.daily_change,
            asset_type=asset.asset_type,
        )

    async def retrieve_all_assets_prices(
        self, assets: list[data.Asset], currency: str
    ) -> dict[str, data.AssetMarketPrice]:
        prices: dict[str, data.AssetMarketPrice] = {}
        for asset in assets:
            key = data.market_price_key(asset.asset_type, asset.mainnet_symbol, currency)
            if key in prices:
                continue
            prices[key] = await self.get_asset_price(asset, currency)
        return prices

    async def get_token_prices(
        self, asset: data.Asset, fiat_currency: str, interval: str
    ) -> data.TokenPriceSeries:
        slug = await self.resolve_slug(asset)
        if not slug:
            raise exceptions.SlugNotFoundError(
                f"Couldn't find a valid slug name for {asset.symbol}"
            )
        url = f"{self._price_api_v2_url}/{interval}/{slug}/"
        response = await http_utils.async_request(url, params={"convert": fiat_currency})
        if not isinstance(response, dict) or not response.get("prices"):
            raise exceptions.PriceFeedError(
                f"Could not find requested token price info for {slug}"
            )
        return data.TokenPriceSeries.model_validate(response)

    async def get_token_price_from_crypto_com(
        self, asset: data.Asset, fiat_currency: str
    ) -> data.TokenFiatPrice:
        slug = await self.resolve_slug(asset)
        if not slug:
            raise exceptions.SlugNotFoundError(
                f"Couldn't find a valid slug name for {asset.mainnet_symbol}"
            )
        token_price = await self._async_fetch_token_price_record(slug)
        usd_to_fiat_rate = Decimal(1)
        if fiat_currency != USD:
            usd_to_fiat_rate = await self.get_fiat_to_fiat_rate(USD, fiat_currency)
        fiat_price = token_price.usd_price * usd_to_fiat_rate
        daily_change = ""
        if token_price.usd_price_change_24h is not None:
            daily_change = format_decimal(token_price.usd_price_change_24h)
        return data.TokenFiatPrice(
            fiat_price=format_decimal(fiat_price), daily_change=daily_change
        )

    async def get_crypto_to_fiat_rate(
        self, crypto_symbol: str, fiat_currency: str
    ) -> Decimal:
        url = f"{self._fiat_rate_api_url}/exchange-rates"
        response = await http_utils.async_request(url, params={"currency": crypto_symbol})
        rates = data.ExchangeRatesResponse.model_validate(response).data
        if rates.currency != crypto_symbol or fiat_currency not in rates.rates:
            raise exceptions.ExchangeRateNotFoundError(
                f"Could not find {crypto_symbol} to {fiat_currency} rate"
            )
        return rates.rates[fiat_currency]

    async def get_fiat_to_fiat_rate(
        self, from_fiat_symbol: str, to_fiat_symbol: str
    ) -> Decimal:
        return await self.get_crypto_to_fiat_rate(from_fiat_symbol, to_fiat_symbol)

    async def resolve_slug(self, asset: data.Asset) -> str | None:
        cached_slug = self._slug_cache.get(asset.identifier)
        if cached_slug:
            log.debug(f"Using cached slug {cached_slug} for {asset.identifier}")
            return cached_slug
        lock = self._slug_locks.setdefault(asset.identifier, asyncio.Lock())
        async with lock:
            cached_slug = self._slug_cache.get(asset.identifier)
            if cached_slug:
                return cached_slug
            slug = await self._async_find_supported_slug(asset)
            if slug:
                self._slug_cache.set(asset.identifier, slug)
            return slug

    async def load_slug_directory(self) -> list[data.TokenSlug]:
        async with self._slug_directory_lock:
            if not self._slug_directory:
                url = f"{self._price_api_v2_url}/all-tokens"
                response = await http_utils.async_request(url)
                if not response:
                    raise exceptions.SlugDirectoryUnavailableError(
                        "Could not fetch token slug list"
                    )
                self._slug_directory = [
                    data.TokenSlug.model_validate(entry) for entry in response
                ]
                log.info(f"Loaded {len(self._slug_directory)} token slugs")
        return self._slug_directory

    async def _async_find_supported_slug(self, asset: data.Asset) -> str | None:
        slug_directory = await self.load_slug_directory()
        candidates = [
            token_slug
            for token_slug in slug_directory
            if token_slug.symbol == asset.mainnet_symbol
        ]
        if not candidates:
            log.warning(f"No slug candidates for symbol {asset.mainnet_symbol}")
            return None
        token_prices = await asyncio.gather(
            *[
                self._async_fetch_token_price_record(candidate.slug)
                for candidate in candidates
            ]
        )
        for token_price in token_prices:
            if self._is_supported_token(asset, token_price):
                return token_price.slug
        log.warning(
            f"None of {[c.slug for c in candidates]} is supported for {asset.identifier}"
        )
        return None

    def _is_supported_token(
        self, asset: data.Asset, token_price: data.TokenPriceRecord
    ) -> bool:
        tags = token_price.tags or []
        match asset.asset_type:
            case enums.UserAssetType.CRC_20_TOKEN:
                if token_price.symbol in self._whitelisted_crc20_symbols:
                    return True
                if self.CRONOS_ECOSYSTEM_TAG in tags:
                    return True
            case enums.UserAssetType.ERC_20_TOKEN:
                if token_price.symbol.upper() in self._whitelisted_erc20_symbols:
                    return True
        return token_price.slug in self.NATIVE_TOKEN_SLUGS

    async def _async_fetch_token_price_record(
        self, slug: str
    ) -> data.TokenPriceRecord:
        url = f"{self._price_api_v1_url}/tokens/{slug}"
        response = await http_utils.async_request(url)
        return data.TokenPriceRecord.model_validate(response)
