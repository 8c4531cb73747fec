"""
Contract of the hardware signing device used for address derivation.

Concrete sessions talk to the device transport and report every failure as an
exceptions.DeviceError carrying a DeviceErrorKind, so callers never have to
inspect error text.
"""
from abc import ABC, abstractmethod

from crowallet import enums, exceptions

WRONG_APP_STATUS_WORDS = frozenset([0x6E00, 0x6E01, 0x6D00, 0x6511])
LOCKED_STATUS_WORDS = frozenset([0x5515, 0x6982])
CONDITIONS_NOT_SATISFIED_STATUS_WORD = 0x6985


def error_kind_from_status_word(status_word: int | None) -> enums.DeviceErrorKind:
    if status_word is None:
        return enums.DeviceErrorKind.DISCONNECTED
    if status_word in WRONG_APP_STATUS_WORDS:
        return enums.DeviceErrorKind.WRONG_APP
    if status_word in LOCKED_STATUS_WORDS:
        return enums.DeviceErrorKind.LOCKED
    if status_word == CONDITIONS_NOT_SATISFIED_STATUS_WORD:
        return enums.DeviceErrorKind.CONDITIONS_NOT_SATISFIED
    return enums.DeviceErrorKind.UNKNOWN


def device_error_from_status_word(
    status_word: int | None, message: str = ""
) -> exceptions.DeviceError:
    kind = error_kind_from_status_word(status_word)
    if not message and status_word is not None:
        message = f"Device returned status 0x{status_word:04x}"
    return exceptions.DeviceError(kind=kind, message=message, status_word=status_word)


class DeviceSession(ABC):
    @abstractmethod
    async def get_address(
        self,
        index: int,
        prefix: str,
        chain_name: enums.SupportedChainName,
        derivation_standard: enums.DerivationPathStandard,
        confirm_on_device: bool = False,
    ) -> str:
        ...

    @abstractmethod
    async def get_eth_address(
        self,
        index: int,
        derivation_standard: enums.DerivationPathStandard,
        confirm_on_device: bool = False,
    ) -> str:
        ...

    @abstractmethod
    async def get_pub_key(
        self,
        index: int,
        chain_name: enums.SupportedChainName,
        derivation_standard: enums.DerivationPathStandard,
        confirm_on_device: bool = False,
    ) -> bytes:
        ...

    async def get_address_list(
        self,
        start: int,
        end: int,
        prefix: str,
        chain_name: enums.SupportedChainName,
        derivation_standard: enums.DerivationPathStandard,
    ) -> list[str]:
        addresses = []
        for index in range(start, end):
            address = await self.get_address(
                index, prefix, chain_name, derivation_standard, False
            )
            addresses.append(address)
        return addresses

    async def get_eth_address_list(
        self,
        start: int,
        end: int,
        derivation_standard: enums.DerivationPathStandard,
    ) -> list[str]:
        addresses = []
        for index in range(start, end):
            addresses.append(
                await self.get_eth_address(index, derivation_standard, False)
            )
        return addresses
