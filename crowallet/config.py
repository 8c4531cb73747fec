import os

import dotenv

dotenv.load_dotenv()


class Config:
    crypto_com_price_api_v1_url = os.getenv(
        "CRYPTO_COM_PRICE_API_V1_URL", "https://price-api.crypto.com/price/v1"
    )
    crypto_com_price_api_v2_url = os.getenv(
        "CRYPTO_COM_PRICE_API_V2_URL", "https://price-api.crypto.com/price/v2"
    )
    coinbase_ticker_api_base_url = os.getenv(
        "COINBASE_TICKER_API_BASE_URL", "https://api.coinbase.com/v2"
    )
    http_timeout_seconds = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))
    ledger_app_switch_timeout_seconds = float(
        os.getenv("LEDGER_APP_SWITCH_TIMEOUT_SECONDS", "60")
    )
    default_currency = os.getenv("DEFAULT_CURRENCY", "USD")
    crc20_token_symbols = os.getenv("CRC20_TOKEN_SYMBOLS", "")
    erc20_token_symbols = os.getenv("ERC20_TOKEN_SYMBOLS", "")
    price_refresh_cron = os.getenv("PRICE_REFRESH_CRON", "*/5 * * * *")
    root_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    test_data_dir = os.path.join(root_dir, "tests", "test_data")
    db_url = os.getenv(
        "DATABASE_URL", f"sqlite+aiosqlite:///{os.path.join(root_dir, 'crowallet.db')}"
    )


config = Config()
