from crowallet import token_lists


def test_parsing_token_symbols_from_setting() -> None:
    symbols = token_lists.parse_token_symbols(" vvs, USDC ,,tonic ")
    assert symbols == frozenset(["VVS", "USDC", "TONIC"])


def test_parsing_empty_setting_to_no_symbols() -> None:
    assert token_lists.parse_token_symbols("") == frozenset()


def test_using_bundled_symbols_without_setting() -> None:
    assert "VVS" in token_lists.DEFAULT_CRC20_MAINNET_TOKEN_SYMBOLS
    assert "LINK" in token_lists.DEFAULT_ERC20_MAINNET_TOKEN_SYMBOLS
