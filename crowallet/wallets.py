"""
Wallet creation and ledger asset migration, the only places where derived
addresses get persisted
"""
import logging

from sqlalchemy.ext import asyncio as sql_asyncio

from crowallet import data, enums, exceptions
from crowallet.database import services
from crowallet.ledger.sequencer import LedgerDerivationSequencer

log = logging.getLogger(__name__)


def _attach_assets_to_wallet(wallet_draft: data.WalletDraft) -> None:
    for asset in wallet_draft.assets:
        if not asset.wallet_id:
            asset.wallet_id = wallet_draft.identifier


def find_assets_without_address(wallet_draft: data.WalletDraft) -> list[data.Asset]:
    return [asset for asset in wallet_draft.assets if not asset.address]


async def _async_persist_wallet(
    wallet_draft: data.WalletDraft, session: sql_asyncio.AsyncSession
) -> None:
    _attach_assets_to_wallet(wallet_draft)
    await services.async_save_wallet(wallet_draft, session)
    await services.async_save_assets(wallet_draft.assets, session)


async def async_create_wallet(
    wallet_draft: data.WalletDraft,
    session: sql_asyncio.AsyncSession,
    sequencer: LedgerDerivationSequencer | None = None,
) -> data.WalletDraft:
    """
    Normal wallets arrive with addresses derived from their software key and are
    saved as they are, ledger wallets are saved only after every chain address
    was derived on the device
    """
    match wallet_draft.wallet_type:
        case enums.WalletType.LEDGER:
            if not sequencer:
                raise ValueError("Ledger wallets need a derivation sequencer")
            result = await sequencer.run(wallet_draft)
            if not result.is_success:
                log.warning(
                    f"Not saving wallet {wallet_draft.identifier}, derivation failed"
                )
                raise exceptions.LedgerDerivationError(result)
    await _async_persist_wallet(wallet_draft, session)
    log.info(
        f"Saved {wallet_draft.wallet_type.value} wallet {wallet_draft.identifier} "
        f"with {len(wallet_draft.assets)} assets"
    )
    return wallet_draft


async def async_migrate_ledger_assets(
    wallet_identifier: str,
    new_assets: list[data.Asset],
    session: sql_asyncio.AsyncSession,
    sequencer: LedgerDerivationSequencer,
) -> data.WalletDraft:
    wallet_draft = await services.async_find_wallet_draft(wallet_identifier, session)
    if wallet_draft.wallet_type != enums.WalletType.LEDGER:
        raise exceptions.InvalidWalletTypeError(
            f"Wallet {wallet_identifier} is not a ledger wallet"
        )
    known_identifiers = {asset.identifier for asset in wallet_draft.assets}
    for asset in new_assets:
        if asset.identifier not in known_identifiers:
            wallet_draft.assets.append(asset)
    log.info(
        f"Migrating wallet {wallet_identifier}, "
        f"{len(find_assets_without_address(wallet_draft))} assets without address"
    )
    result = await sequencer.run(wallet_draft, migrate=True)
    if not result.is_success:
        raise exceptions.LedgerDerivationError(result)
    await _async_persist_wallet(wallet_draft, session)
    return wallet_draft
