import enum


class UserAssetType(str, enum.Enum):
    TENDERMINT = "TENDERMINT"
    IBC = "IBC"
    EVM = "EVM"
    CRC_20_TOKEN = "CRC_20_TOKEN"
    ERC_20_TOKEN = "ERC_20_TOKEN"


class SupportedChainName(str, enum.Enum):
    CRYPTO_ORG = "Crypto.org Chain"
    CRONOS = "Cronos Chain"
    ETHEREUM = "Ethereum"
    COSMOS_HUB = "Cosmos Hub"


class DerivationPathStandard(str, enum.Enum):
    BIP44 = "bip-44"
    LEDGER_LIVE = "ledger-live"


class WalletType(str, enum.Enum):
    NORMAL = "normal"
    LEDGER = "ledger"


class DeviceErrorKind(str, enum.Enum):
    DISCONNECTED = "DISCONNECTED"
    LOCKED = "LOCKED"
    WRONG_APP = "WRONG_APP"
    CONDITIONS_NOT_SATISFIED = "CONDITIONS_NOT_SATISFIED"
    ADDRESS_MISMATCH = "ADDRESS_MISMATCH"
    UNKNOWN = "UNKNOWN"


class StepState(str, enum.Enum):
    AWAITING_APP_SWITCH = "AWAITING_APP_SWITCH"
    DERIVING = "DERIVING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
