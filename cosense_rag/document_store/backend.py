from cosense_rag.config import Settings
from cosense_rag.document_store.base import ObjectStoreBackend
from cosense_rag.document_store.local.store import LocalObjectStore
from cosense_rag.document_store.s3.store import S3ObjectStore


def get_object_store_backend(settings: Settings) -> ObjectStoreBackend:
    if settings.OBJECT_STORE_BACKEND == "s3":
        if not settings.S3_BUCKET:
            raise ValueError("S3_BUCKET is not set")
        return S3ObjectStore(
            bucket=settings.S3_BUCKET,
            region=settings.S3_REGION,
            endpoint_url=settings.S3_ENDPOINT_URL,
            aws_access_key_id=settings.S3_ACCESS_KEY_ID,
            aws_secret_access_key=settings.S3_SECRET_ACCESS_KEY,
        )
    elif settings.OBJECT_STORE_BACKEND == "local":
        return LocalObjectStore(settings.LOCAL_STORE_PATH)
    else:
        raise ValueError(
            f"Unsupported object store backend: {settings.OBJECT_STORE_BACKEND}"
        )
