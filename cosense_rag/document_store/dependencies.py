from fastapi import Depends

from cosense_rag.config import Settings, get_settings
from cosense_rag.document_store.base import ObjectStoreBackend
from cosense_rag.document_store.backend import get_object_store_backend


def get_object_store(
    settings: Settings = Depends(get_settings),
) -> ObjectStoreBackend:
    return get_object_store_backend(settings)
