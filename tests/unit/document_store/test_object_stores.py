from pathlib import Path
from unittest.mock import MagicMock
import pytest
from botocore.exceptions import ClientError
from pytest_mock import MockerFixture

from cosense_rag.config import Settings
from cosense_rag.document_store.backend import get_object_store_backend
from cosense_rag.document_store.local.store import LocalObjectStore
from cosense_rag.document_store.s3.store import S3ObjectStore


class TestLocalObjectStore:
    @pytest.fixture
    def store(self, tmp_path: Path) -> LocalObjectStore:
        return LocalObjectStore(tmp_path)

    def test_put_and_get(self, store: LocalObjectStore) -> None:
        store.put_object("mdx/A.mdx", "---\ntitle: \"A\"\n---\n\n日本語")

        assert store.get_object("mdx/A.mdx") == "---\ntitle: \"A\"\n---\n\n日本語"

    def test_overwrite_keeps_single_object(self, store: LocalObjectStore) -> None:
        store.put_object("mdx/A.mdx", "first")
        store.put_object("mdx/A.mdx", "second")

        assert store.list_keys("mdx/") == ["mdx/A.mdx"]
        assert store.get_object("mdx/A.mdx") == "second"

    def test_get_missing(self, store: LocalObjectStore) -> None:
        assert store.get_object("mdx/missing.mdx") is None

    def test_delete(self, store: LocalObjectStore) -> None:
        store.put_object("notes/p.json", "{}")
        store.delete_object("notes/p.json")
        store.delete_object("notes/p.json")

        assert store.get_object("notes/p.json") is None

    def test_list_keys_by_prefix(self, store: LocalObjectStore) -> None:
        store.put_object("mdx/B.mdx", "b")
        store.put_object("mdx/A.mdx", "a")
        store.put_object("notes/p.json", "{}")

        assert store.list_keys("mdx/") == ["mdx/A.mdx", "mdx/B.mdx"]
        assert len(store.list_keys()) == 3

    def test_rejects_keys_outside_base(self, store: LocalObjectStore) -> None:
        with pytest.raises(ValueError):
            store.put_object("../escape.mdx", "x")


class TestS3ObjectStore:
    @pytest.fixture
    def mock_boto_client(self, mocker: MockerFixture) -> MagicMock:
        client = mocker.MagicMock()
        mocker.patch(
            "cosense_rag.document_store.s3.store.boto3.client", return_value=client
        )
        return client

    @pytest.fixture
    def store(self, mock_boto_client: MagicMock) -> S3ObjectStore:
        return S3ObjectStore(
            bucket="rag-bucket",
            region="auto",
            endpoint_url="https://account.r2.cloudflarestorage.com",
            aws_access_key_id="key",
            aws_secret_access_key="secret",
        )

    def test_client_configuration(self, mocker: MockerFixture) -> None:
        mock_client_factory = mocker.patch(
            "cosense_rag.document_store.s3.store.boto3.client"
        )

        S3ObjectStore(bucket="rag-bucket", endpoint_url="https://r2.example")

        mock_client_factory.assert_called_once_with(
            "s3", endpoint_url="https://r2.example"
        )

    def test_put_object(
        self, store: S3ObjectStore, mock_boto_client: MagicMock
    ) -> None:
        store.put_object("mdx/A.mdx", "本文")

        mock_boto_client.put_object.assert_called_once_with(
            Bucket="rag-bucket",
            Key="mdx/A.mdx",
            Body="本文".encode("utf-8"),
            ContentType="text/markdown; charset=utf-8",
        )

    def test_get_object(
        self, store: S3ObjectStore, mock_boto_client: MagicMock
    ) -> None:
        body = MagicMock()
        body.read.return_value = b"content"
        mock_boto_client.get_object.return_value = {"Body": body}

        assert store.get_object("mdx/A.mdx") == "content"

    def test_get_missing_object(
        self, store: S3ObjectStore, mock_boto_client: MagicMock
    ) -> None:
        mock_boto_client.get_object.side_effect = ClientError(
            {"Error": {"Code": "NoSuchKey", "Message": "missing"}}, "GetObject"
        )

        assert store.get_object("mdx/missing.mdx") is None

    def test_get_object_other_errors_propagate(
        self, store: S3ObjectStore, mock_boto_client: MagicMock
    ) -> None:
        mock_boto_client.get_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "GetObject"
        )

        with pytest.raises(ClientError):
            store.get_object("mdx/A.mdx")

    def test_list_keys(
        self, store: S3ObjectStore, mock_boto_client: MagicMock
    ) -> None:
        paginator = MagicMock()
        paginator.paginate.return_value = [
            {"Contents": [{"Key": "mdx/A.mdx"}, {"Key": "mdx/B.mdx"}]},
            {},
        ]
        mock_boto_client.get_paginator.return_value = paginator

        assert store.list_keys("mdx/") == ["mdx/A.mdx", "mdx/B.mdx"]
        paginator.paginate.assert_called_once_with(Bucket="rag-bucket", Prefix="mdx/")


def test_backend_factory_local(tmp_path: Path) -> None:
    settings = Settings(OBJECT_STORE_BACKEND="local", LOCAL_STORE_PATH=str(tmp_path))

    assert isinstance(get_object_store_backend(settings), LocalObjectStore)


def test_backend_factory_s3(mocker: MockerFixture) -> None:
    mocker.patch("cosense_rag.document_store.s3.store.boto3.client")
    settings = Settings(OBJECT_STORE_BACKEND="s3", S3_BUCKET="rag-bucket")

    store = get_object_store_backend(settings)

    assert isinstance(store, S3ObjectStore)
    assert store.bucket == "rag-bucket"


def test_settings_require_bucket_for_s3() -> None:
    with pytest.raises(ValueError):
        Settings(OBJECT_STORE_BACKEND="s3", S3_BUCKET=None)
