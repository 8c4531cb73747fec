import pytest

from crowallet import data
from crowallet.market.price_resolver import PriceResolver
from tests.test_unit import utils


@pytest.fixture
def cro_asset() -> data.Asset:
    return utils.create_asset()


@pytest.fixture
def ledger_draft() -> data.WalletDraft:
    return utils.create_ledger_draft()


@pytest.fixture
def price_resolver() -> PriceResolver:
    return PriceResolver(
        price_api_v1_url=utils.V1_URL,
        price_api_v2_url=utils.V2_URL,
        fiat_rate_api_url=utils.FIAT_URL,
    )
