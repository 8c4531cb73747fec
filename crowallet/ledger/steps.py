from dataclasses import dataclass

from crowallet import data, enums
from crowallet.ledger.derivation import COSMOS_HUB_ADDRESS_PREFIX


@dataclass(frozen=True)
class DerivationStep:
    chain_name: enums.SupportedChainName
    app_label: str
    asset_types: frozenset[enums.UserAssetType]
    chain_names: frozenset[enums.SupportedChainName] | None = None
    address_prefix: str | None = None
    is_evm: bool = False
    is_primary: bool = False
    await_app_switch: bool = True

    def matches(self, asset: data.Asset) -> bool:
        if asset.asset_type not in self.asset_types:
            return False
        if self.chain_names is None:
            return True
        return asset.chain_name in self.chain_names

    def resolve_prefix(self, wallet_draft: data.WalletDraft) -> str:
        if self.address_prefix:
            return self.address_prefix
        return wallet_draft.network_address_prefix


CRYPTO_ORG_STEP = DerivationStep(
    chain_name=enums.SupportedChainName.CRYPTO_ORG,
    app_label="Crypto.org",
    asset_types=frozenset([enums.UserAssetType.TENDERMINT, enums.UserAssetType.IBC]),
    chain_names=frozenset([enums.SupportedChainName.CRYPTO_ORG]),
    is_primary=True,
    await_app_switch=False,
)

EVM_STEP = DerivationStep(
    chain_name=enums.SupportedChainName.CRONOS,
    app_label="Ethereum",
    asset_types=frozenset(
        [
            enums.UserAssetType.EVM,
            enums.UserAssetType.CRC_20_TOKEN,
            enums.UserAssetType.ERC_20_TOKEN,
        ]
    ),
    is_evm=True,
)

COSMOS_HUB_STEP = DerivationStep(
    chain_name=enums.SupportedChainName.COSMOS_HUB,
    app_label="Cosmos",
    asset_types=frozenset([enums.UserAssetType.TENDERMINT]),
    chain_names=frozenset([enums.SupportedChainName.COSMOS_HUB]),
    address_prefix=COSMOS_HUB_ADDRESS_PREFIX,
)

LEDGER_DERIVATION_STEPS: tuple[DerivationStep, ...] = (
    CRYPTO_ORG_STEP,
    EVM_STEP,
    COSMOS_HUB_STEP,
)


def get_derivation_steps(wallet_type: enums.WalletType) -> tuple[DerivationStep, ...]:
    match wallet_type:
        case enums.WalletType.LEDGER:
            return LEDGER_DERIVATION_STEPS
    return ()
