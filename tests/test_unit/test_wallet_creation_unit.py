from unittest import mock

import pytest

from crowallet import data, enums, exceptions, wallets
from crowallet.ledger.sequencer import LedgerDerivationSequencer
from tests.test_unit import utils
from tests.test_unit.fixtures import ledger_draft  # noqa


def _create_sequencer(device: utils.FakeDeviceSession) -> LedgerDerivationSequencer:
    return LedgerDerivationSequencer(device, app_switch_timeout=0)


@pytest.mark.asyncio
async def test_saving_ledger_wallet_after_derivation(
    ledger_draft: data.WalletDraft,
) -> None:
    session = mock.AsyncMock()
    with mock.patch("crowallet.database.services.async_save_wallet") as save_wallet:
        with mock.patch(
            "crowallet.database.services.async_save_assets"
        ) as save_assets:
            wallet_draft = await wallets.async_create_wallet(
                ledger_draft, session, _create_sequencer(utils.FakeDeviceSession())
            )
    assert save_wallet.call_count == 1
    assert save_wallet.call_args[0][0].address == utils.CRO_ADDRESS
    saved_assets: list[data.Asset] = save_assets.call_args[0][0]
    assert all(asset.address for asset in saved_assets)
    assert wallets.find_assets_without_address(wallet_draft) == []


@pytest.mark.asyncio
async def test_not_saving_ledger_wallet_when_derivation_fails(
    ledger_draft: data.WalletDraft,
) -> None:
    device = utils.FakeDeviceSession(
        failures={enums.SupportedChainName.COSMOS_HUB: utils.wrong_app_error()}
    )
    with mock.patch("crowallet.database.services.async_save_wallet") as save_wallet:
        with mock.patch(
            "crowallet.database.services.async_save_assets"
        ) as save_assets:
            with pytest.raises(exceptions.LedgerDerivationError) as e:
                await wallets.async_create_wallet(
                    ledger_draft, mock.AsyncMock(), _create_sequencer(device)
                )
    assert save_wallet.call_count == 0
    assert save_assets.call_count == 0
    assert e.value.result.error.kind == enums.DeviceErrorKind.WRONG_APP
    assert "Cosmos" in str(e.value)


@pytest.mark.asyncio
async def test_requiring_sequencer_for_ledger_wallet(
    ledger_draft: data.WalletDraft,
) -> None:
    with pytest.raises(ValueError):
        await wallets.async_create_wallet(ledger_draft, mock.AsyncMock())


@pytest.mark.asyncio
async def test_saving_normal_wallet_without_device() -> None:
    wallet_draft = data.WalletDraft(
        identifier="wallet-2",
        address="cro1softwareaddress",
        assets=[utils.create_asset(wallet_id="", address="cro1softwareaddress")],
    )
    with mock.patch("crowallet.database.services.async_save_wallet") as save_wallet:
        with mock.patch(
            "crowallet.database.services.async_save_assets"
        ) as save_assets:
            await wallets.async_create_wallet(wallet_draft, mock.AsyncMock())
    assert save_wallet.call_count == 1
    assert save_assets.call_args[0][0][0].wallet_id == "wallet-2"


@pytest.mark.asyncio
async def test_migrating_new_assets_of_ledger_wallet() -> None:
    stored_draft = utils.create_ledger_draft()
    stored_draft.assets = stored_draft.assets[:1]
    stored_draft.assets[0].address = "cro1oldaddress"
    new_asset = utils.create_asset(
        identifier="atom-mainnet",
        mainnet_symbol="ATOM",
        chain_name=enums.SupportedChainName.COSMOS_HUB,
    )
    with mock.patch(
        "crowallet.database.services.async_find_wallet_draft"
    ) as find_draft:
        find_draft.return_value = stored_draft
        with mock.patch("crowallet.database.services.async_save_wallet"):
            with mock.patch(
                "crowallet.database.services.async_save_assets"
            ) as save_assets:
                wallet_draft = await wallets.async_migrate_ledger_assets(
                    "wallet-1",
                    [new_asset],
                    mock.AsyncMock(),
                    _create_sequencer(utils.FakeDeviceSession()),
                )
    assert [asset.identifier for asset in wallet_draft.assets] == [
        "cro-mainnet",
        "atom-mainnet",
    ]
    assert wallet_draft.assets[0].address == utils.CRO_ADDRESS
    assert wallet_draft.assets[1].address == utils.COSMOS_ADDRESS
    assert save_assets.call_count == 1


@pytest.mark.asyncio
async def test_refusing_to_migrate_normal_wallet() -> None:
    stored_draft = data.WalletDraft(identifier="wallet-2")
    with mock.patch(
        "crowallet.database.services.async_find_wallet_draft"
    ) as find_draft:
        find_draft.return_value = stored_draft
        with pytest.raises(exceptions.InvalidWalletTypeError):
            await wallets.async_migrate_ledger_assets(
                "wallet-2",
                [],
                mock.AsyncMock(),
                _create_sequencer(utils.FakeDeviceSession()),
            )
