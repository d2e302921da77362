from .collection import Collection, CollectionItem


def register_models() -> list:
    return [Collection, CollectionItem]
