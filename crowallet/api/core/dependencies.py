from crowallet.market.price_resolver import PriceResolver

_price_resolver: PriceResolver | None = None


def get_price_resolver() -> PriceResolver:
    global _price_resolver
    if _price_resolver is None:
        _price_resolver = PriceResolver()
    return _price_resolver
