import logging

from crowallet import data, enums
from crowallet.ledger.device import DeviceSession

log = logging.getLogger(__name__)

CRYPTO_ORG_COIN_TYPE = 394
TESTNET_COIN_TYPE = 1
EVM_COIN_TYPE = 60
COSMOS_HUB_COIN_TYPE = 118
COSMOS_HUB_ADDRESS_PREFIX = "cosmos"
ADDRESS_LIST_SIZE = 10


def get_coin_type(
    asset_type: enums.UserAssetType,
    chain_name: enums.SupportedChainName,
    is_testnet: bool = False,
) -> int:
    if asset_type in (
        enums.UserAssetType.EVM,
        enums.UserAssetType.CRC_20_TOKEN,
        enums.UserAssetType.ERC_20_TOKEN,
    ):
        return EVM_COIN_TYPE
    match chain_name:
        case enums.SupportedChainName.COSMOS_HUB:
            return COSMOS_HUB_COIN_TYPE
        case enums.SupportedChainName.CRYPTO_ORG:
            return TESTNET_COIN_TYPE if is_testnet else CRYPTO_ORG_COIN_TYPE
    return EVM_COIN_TYPE


def get_derivation_path(
    index: int,
    asset_type: enums.UserAssetType,
    chain_name: enums.SupportedChainName,
    derivation_standard: enums.DerivationPathStandard,
    is_testnet: bool = False,
) -> str:
    """
    BIP44 walks the address index, Ledger Live walks the account index
    """
    coin_type = get_coin_type(asset_type, chain_name, is_testnet)
    match derivation_standard:
        case enums.DerivationPathStandard.LEDGER_LIVE:
            return f"m/44'/{coin_type}'/{index}'/0/0"
    return f"m/44'/{coin_type}'/0'/0/{index}"


def is_testnet_prefix(prefix: str) -> bool:
    return prefix.startswith("t")


async def async_fetch_address_list(
    device: DeviceSession,
    asset_type: enums.UserAssetType,
    chain_name: enums.SupportedChainName,
    derivation_standard: enums.DerivationPathStandard,
    address_prefix: str = "cro",
    start: int = 0,
    end: int = ADDRESS_LIST_SIZE,
) -> list[data.LedgerAddressEntry]:
    is_testnet = False
    match (asset_type, chain_name):
        case (enums.UserAssetType.EVM, _):
            addresses = await device.get_eth_address_list(
                start, end, derivation_standard
            )
        case (enums.UserAssetType.TENDERMINT, enums.SupportedChainName.CRYPTO_ORG):
            is_testnet = is_testnet_prefix(address_prefix)
            addresses = await device.get_address_list(
                start, end, address_prefix, chain_name, derivation_standard
            )
        case (enums.UserAssetType.TENDERMINT, enums.SupportedChainName.COSMOS_HUB):
            addresses = await device.get_address_list(
                start, end, COSMOS_HUB_ADDRESS_PREFIX, chain_name, derivation_standard
            )
        case _:
            log.warning(f"Address list not supported for {asset_type}-{chain_name}")
            return []
    return [
        data.LedgerAddressEntry(
            index=start + offset,
            public_address=address,
            derivation_path=get_derivation_path(
                start + offset, asset_type, chain_name, derivation_standard, is_testnet
            ),
        )
        for offset, address in enumerate(addresses)
    ]
