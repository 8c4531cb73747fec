
class SlugCache:
    """
    Maps asset identifiers to the price feed slug resolved for them, lives as long
    as the owning resolver
    """

    def __init__(self) -> None:
        self._cached_slugs: dict[str, str] = dict()

    def get(self, identifier: str) -> str | None:
        slug = self._cached_slugs.get(identifier)
        if not slug:
            return None
        return slug

    def set(self, identifier: str, slug: str) -> None:
        if not slug:
            return
        self._cached_slugs[identifier] = slug

    def clear(self) -> None:
        self._cached_slugs.clear()

    def __contains__(self, identifier: str) -> bool:
        return self.get(identifier) is not None

    def __len__(self) -> int:
        return len(self._cached_slugs)
