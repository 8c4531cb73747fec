import typing

from crowallet import enums

if typing.TYPE_CHECKING:
    from crowallet.ledger.sequencer import DerivationResult


class PriceResolverError(Exception):
    pass


class PriceFeedError(PriceResolverError):
    pass


class InvalidHttpResponseError(PriceFeedError):
    def __init__(self, status: int | None = None, url: str = "") -> None:
        super().__init__(f"Got response status {status} from {url}")
        self.status = status
        self.url = url


class SlugNotFoundError(PriceResolverError):
    pass


class SlugDirectoryUnavailableError(PriceFeedError):
    pass


class ExchangeRateNotFoundError(PriceFeedError):
    pass


class DeviceError(Exception):
    def __init__(
        self,
        kind: enums.DeviceErrorKind = enums.DeviceErrorKind.UNKNOWN,
        message: str = "",
        status_word: int | None = None,
    ) -> None:
        super().__init__(message or kind.value)
        self.kind = kind
        self.status_word = status_word


class InvalidWalletTypeError(Exception):
    pass


class AssetAddressImmutableError(Exception):
    pass


class WalletNotFoundError(Exception):
    pass


class LedgerDerivationError(Exception):
    def __init__(self, result: "DerivationResult") -> None:
        message = result.error.message if result.error else "Ledger derivation failed"
        super().__init__(message)
        self.result = result
