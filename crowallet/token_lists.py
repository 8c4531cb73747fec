"""
Mainnet token symbols whose prices are trusted even when the price feed does not
tag them as native or Cronos ecosystem tokens.

The bundled sets are a curated default of well known tokens, deployments replace
them with the comma separated CRC20_TOKEN_SYMBOLS and ERC20_TOKEN_SYMBOLS
settings.
"""
from crowallet.config import config

DEFAULT_CRC20_MAINNET_TOKEN_SYMBOLS = frozenset(
    [
        "WCRO",
        "VVS",
        "USDC",
        "USDT",
        "DAI",
        "WBTC",
        "WETH",
        "BUSD",
        "TONIC",
        "SINGLE",
        "FER",
        "MMF",
        "ATOM",
        "SHIB",
        "DOGE",
        "MATIC",
        "AVAX",
        "FTM",
        "BIFI",
        "CRYSTL",
    ]
)

DEFAULT_ERC20_MAINNET_TOKEN_SYMBOLS = frozenset(
    [
        "USDT",
        "USDC",
        "DAI",
        "WBTC",
        "WETH",
        "LINK",
        "UNI",
        "AAVE",
        "MATIC",
        "SHIB",
        "MANA",
        "SAND",
        "AXS",
        "ENJ",
        "GRT",
        "COMP",
        "MKR",
        "CRV",
        "SUSHI",
        "YFI",
        "BAT",
        "CHZ",
        "APE",
        "LRC",
        "1INCH",
        "QNT",
    ]
)


def parse_token_symbols(symbols: str) -> frozenset[str]:
    return frozenset(
        symbol.strip().upper() for symbol in symbols.split(",") if symbol.strip()
    )


CRC20_MAINNET_TOKEN_SYMBOLS = (
    parse_token_symbols(config.crc20_token_symbols)
    or DEFAULT_CRC20_MAINNET_TOKEN_SYMBOLS
)
ERC20_MAINNET_TOKEN_SYMBOLS = (
    parse_token_symbols(config.erc20_token_symbols)
    or DEFAULT_ERC20_MAINNET_TOKEN_SYMBOLS
)
