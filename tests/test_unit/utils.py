import asyncio
import typing
from decimal import Decimal
from unittest import mock

from crowallet import data, enums, exceptions
from crowallet.ledger.device import DeviceSession

V1_URL = "https://price.test/v1"
V2_URL = "https://price.test/v2"
FIAT_URL = "https://fiat.test/v2"


def create_asset(
    identifier: str = "cro-mainnet",
    asset_type: enums.UserAssetType = enums.UserAssetType.TENDERMINT,
    mainnet_symbol: str = "CRO",
    symbol: str | None = None,
    chain_name: enums.SupportedChainName | None = enums.SupportedChainName.CRYPTO_ORG,
    wallet_id: str = "wallet-1",
    balance: Decimal = Decimal(0),
    address: str = "",
) -> data.Asset:
    config = data.AssetConfig(chain_name=chain_name) if chain_name else None
    return data.Asset(
        identifier=identifier,
        wallet_id=wallet_id,
        asset_type=asset_type,
        mainnet_symbol=mainnet_symbol,
        symbol=symbol or mainnet_symbol,
        balance=balance,
        address=address,
        config=config,
    )


def create_ledger_draft(
    wallet_type: enums.WalletType = enums.WalletType.LEDGER,
    address_index: int = 0,
) -> data.WalletDraft:
    return data.WalletDraft(
        identifier="wallet-1",
        name="ledger wallet",
        address_index=address_index,
        wallet_type=wallet_type,
        derivation_path_standard=enums.DerivationPathStandard.BIP44,
        network_address_prefix="cro",
        assets=[
            create_asset(),
            create_asset(
                identifier="cronos-mainnet",
                asset_type=enums.UserAssetType.EVM,
                chain_name=enums.SupportedChainName.CRONOS,
            ),
            create_asset(
                identifier="eth-mainnet",
                asset_type=enums.UserAssetType.EVM,
                mainnet_symbol="ETH",
                chain_name=enums.SupportedChainName.ETHEREUM,
            ),
            create_asset(
                identifier="atom-mainnet",
                mainnet_symbol="ATOM",
                chain_name=enums.SupportedChainName.COSMOS_HUB,
            ),
        ],
    )


CRO_ADDRESS = "cro1ledgeraddress"
EVM_ADDRESS = "0xLedgerEvmAddress"
COSMOS_ADDRESS = "cosmos1ledgeraddress"


class FakeDeviceSession(DeviceSession):
    """
    Records every device call in order and fails the chains listed in failures
    """

    def __init__(
        self,
        failures: dict[enums.SupportedChainName | str, Exception] | None = None,
        call_delay: float = 0.0,
    ) -> None:
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._failures = failures or {}
        self._call_delay = call_delay

    async def _async_call(self, name: str) -> None:
        self.calls.append(name)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self._call_delay)
            if name in self._failures:
                raise self._failures[name]
        finally:
            self.in_flight -= 1

    async def get_address(
        self,
        index: int,
        prefix: str,
        chain_name: enums.SupportedChainName,
        derivation_standard: enums.DerivationPathStandard,
        confirm_on_device: bool = False,
    ) -> str:
        await self._async_call(chain_name)
        if chain_name == enums.SupportedChainName.COSMOS_HUB:
            return f"{COSMOS_ADDRESS}{index or ''}"
        return f"{prefix}1ledgeraddress{index or ''}"

    async def get_eth_address(
        self,
        index: int,
        derivation_standard: enums.DerivationPathStandard,
        confirm_on_device: bool = False,
    ) -> str:
        await self._async_call("EVM")
        return f"{EVM_ADDRESS}{index or ''}"

    async def get_pub_key(
        self,
        index: int,
        chain_name: enums.SupportedChainName,
        derivation_standard: enums.DerivationPathStandard,
        confirm_on_device: bool = False,
    ) -> bytes:
        await self._async_call(f"pubkey-{chain_name.value}")
        return bytes([index])


def wrong_app_error() -> exceptions.DeviceError:
    return exceptions.DeviceError(kind=enums.DeviceErrorKind.WRONG_APP, status_word=0x6E00)


def create_feed(
    responses: dict[str, typing.Any],
) -> typing.Callable[..., typing.Coroutine[typing.Any, typing.Any, typing.Any]]:
    """
    Builds a replacement for http_utils.async_request answering from responses,
    exceptions stored as responses are raised
    """

    async def fake_request(
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, typing.Any] | None = None,
    ) -> typing.Any:
        if url not in responses:
            raise exceptions.InvalidHttpResponseError(404, url)
        response = responses[url]
        if isinstance(response, Exception):
            raise response
        return response

    return fake_request


def patch_feed(responses: dict[str, typing.Any]) -> typing.Any:
    return mock.patch(
        "crowallet.http_utils.async_request",
        side_effect=create_feed(responses),
    )


def token_record(
    slug: str,
    symbol: str,
    usd_price: str,
    change: str = "0.5",
    tags: list[str] | None = None,
) -> dict[str, typing.Any]:
    return {
        "slug": slug,
        "symbol": symbol,
        "usd_price": usd_price,
        "usd_price_change_24h": change,
        "tags": tags,
    }


def requested_urls(request_mock: mock.MagicMock) -> list[str]:
    return [call.args[0] for call in request_mock.call_args_list]
