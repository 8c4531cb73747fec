"""
Drives a Ledger device through the chain apps a wallet needs, one derivation at a
time.

Each step waits for the user to open the right app on the device, issues exactly
one derivation call and writes the address onto the assets of that chain. The
first failing step stops the run, completed steps stay on the draft so the caller
can show what was derived, but nothing is persisted from here.
"""
import asyncio
import logging
from dataclasses import dataclass, field

from crowallet import data, enums, exceptions, spec
from crowallet.config import config
from crowallet.ledger import steps as derivation_steps
from crowallet.ledger.app_switch import AppSwitchSignal
from crowallet.ledger.device import DeviceSession
from crowallet.ledger.steps import DerivationStep

log = logging.getLogger(__name__)

GENERIC_DEVICE_MESSAGE = (
    "Cannot detect any Ledger device, please make sure it is connected, "
    "unlocked and no other wallet application is using it"
)
APP_MISMATCH_MESSAGE = (
    "Please open the {app_label} app on your Ledger device and try again"
)
ADDRESS_MISMATCH_MESSAGE = (
    "The connected Ledger derived {address} for {chain_name}, which differs from "
    "the address already stored for this wallet"
)
APP_MISMATCH_KINDS = frozenset(
    [
        enums.DeviceErrorKind.WRONG_APP,
        enums.DeviceErrorKind.CONDITIONS_NOT_SATISFIED,
    ]
)


@dataclass
class SequencerError:
    step: DerivationStep
    kind: enums.DeviceErrorKind
    message: str
    cause: Exception | None = None


@dataclass
class SequencerEvent:
    step: DerivationStep
    state: enums.StepState
    address: str = ""
    error: SequencerError | None = None


@dataclass
class DerivationResult:
    draft: data.WalletDraft
    completed_steps: list[DerivationStep] = field(default_factory=list)
    addresses: dict[enums.SupportedChainName, str] = field(default_factory=dict)
    failed_step: DerivationStep | None = None
    error: SequencerError | None = None

    @property
    def is_success(self) -> bool:
        return self.error is None


def classify_device_error(step: DerivationStep, error: Exception) -> SequencerError:
    if isinstance(error, exceptions.AssetAddressImmutableError):
        kind = enums.DeviceErrorKind.ADDRESS_MISMATCH
    elif isinstance(error, exceptions.DeviceError):
        kind = error.kind
    elif isinstance(error, (OSError, asyncio.TimeoutError)):
        kind = enums.DeviceErrorKind.DISCONNECTED
    else:
        kind = enums.DeviceErrorKind.UNKNOWN
    if kind in APP_MISMATCH_KINDS:
        message = APP_MISMATCH_MESSAGE.format(app_label=step.app_label)
    elif kind == enums.DeviceErrorKind.ADDRESS_MISMATCH:
        message = str(error)
    else:
        message = GENERIC_DEVICE_MESSAGE
    return SequencerError(step=step, kind=kind, message=message, cause=error)


class LedgerDerivationSequencer:
    def __init__(
        self,
        device: DeviceSession,
        app_switch_signal: AppSwitchSignal | None = None,
        app_switch_timeout: float = config.ledger_app_switch_timeout_seconds,
        progress_listener: spec.ProgressListener | None = None,
        steps: tuple[DerivationStep, ...] | None = None,
    ) -> None:
        self._device = device
        self._app_switch_signal = (
            app_switch_signal if app_switch_signal is not None else AppSwitchSignal()
        )
        self._app_switch_timeout = app_switch_timeout
        self._progress_listener = progress_listener
        self._steps = steps

    @property
    def app_switch_signal(self) -> AppSwitchSignal:
        return self._app_switch_signal

    async def run(
        self, wallet_draft: data.WalletDraft, migrate: bool = False
    ) -> DerivationResult:
        if wallet_draft.wallet_type != enums.WalletType.LEDGER:
            raise exceptions.InvalidWalletTypeError(
                f"Wallet {wallet_draft.identifier} is not a ledger wallet"
            )
        steps = self._steps or derivation_steps.get_derivation_steps(
            wallet_draft.wallet_type
        )
        result = DerivationResult(draft=wallet_draft)
        for step in steps:
            if step.await_app_switch:
                await self._async_await_app_switch(step)
            self._emit(SequencerEvent(step=step, state=enums.StepState.DERIVING))
            log.info(f"Deriving {step.chain_name.value} address on {step.app_label} app")
            try:
                address = await self._async_derive(step, wallet_draft)
                self._assign_step_address(step, wallet_draft, address, migrate)
            except Exception as e:
                error = classify_device_error(step, e)
                log.warning(
                    f"Derivation failed at {step.chain_name.value}, kind: {error.kind.value}, e: {e!r}"
                )
                result.failed_step = step
                result.error = error
                self._emit(
                    SequencerEvent(step=step, state=enums.StepState.FAILED, error=error)
                )
                return result
            result.completed_steps.append(step)
            result.addresses[step.chain_name] = address
            self._emit(
                SequencerEvent(
                    step=step, state=enums.StepState.SUCCEEDED, address=address
                )
            )
        log.info(f"Derived {len(result.completed_steps)} chain addresses")
        return result

    async def check_app_connected(
        self,
        step: DerivationStep,
        address_index: int = 0,
        address_prefix: str = "cro",
        derivation_standard: enums.DerivationPathStandard = enums.DerivationPathStandard.BIP44,
    ) -> data.AppConnectionStatus:
        probe_draft = data.WalletDraft(
            identifier="app-connection-check",
            address_index=address_index,
            derivation_path_standard=derivation_standard,
            wallet_type=enums.WalletType.LEDGER,
            network_address_prefix=address_prefix,
        )
        try:
            await self._async_derive(step, probe_draft)
        except Exception as e:
            error = classify_device_error(step, e)
            return data.AppConnectionStatus(
                chain_name=step.chain_name,
                connected=False,
                message=error.message,
                error_kind=error.kind,
            )
        return data.AppConnectionStatus(chain_name=step.chain_name, connected=True)

    async def _async_await_app_switch(self, step: DerivationStep) -> None:
        self._app_switch_signal.reset()
        self._emit(SequencerEvent(step=step, state=enums.StepState.AWAITING_APP_SWITCH))
        advanced = await self._app_switch_signal.wait(self._app_switch_timeout)
        if not advanced:
            log.warning(
                f"No confirmation of {step.app_label} app within {self._app_switch_timeout}s, "
                f"querying the device anyway"
            )

    async def _async_derive(
        self, step: DerivationStep, wallet_draft: data.WalletDraft
    ) -> str:
        if step.is_evm:
            return await self._device.get_eth_address(
                wallet_draft.address_index,
                wallet_draft.derivation_path_standard,
                False,
            )
        return await self._device.get_address(
            wallet_draft.address_index,
            step.resolve_prefix(wallet_draft),
            step.chain_name,
            wallet_draft.derivation_path_standard,
            False,
        )

    @staticmethod
    def _assign_step_address(
        step: DerivationStep,
        wallet_draft: data.WalletDraft,
        address: str,
        migrate: bool,
    ) -> None:
        matching_assets = [asset for asset in wallet_draft.assets if step.matches(asset)]
        if not all(
            asset.accepts_address(address, allow_override=migrate)
            for asset in matching_assets
        ):
            raise exceptions.AssetAddressImmutableError(
                ADDRESS_MISMATCH_MESSAGE.format(
                    address=address, chain_name=step.chain_name.value
                )
            )
        for asset in matching_assets:
            asset.assign_address(address, allow_override=migrate)
        if step.is_primary:
            wallet_draft.address = address

    def _emit(self, event: SequencerEvent) -> None:
        if self._progress_listener:
            self._progress_listener(event)
