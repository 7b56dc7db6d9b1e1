"""Object storage access."""
from abc import ABC, abstractmethod
from dataclasses import dataclass

from google.cloud import storage


@dataclass(frozen=True)
class BlobInfo:
    name: str
    content_type: str | None


class ObjectStore(ABC):
    """Read and write named blobs in a bucket."""

    @abstractmethod
    def bucket_exists(self, bucket_name: str) -> bool:
        pass

    @abstractmethod
    def get_blob(self, bucket_name: str, name: str) -> BlobInfo | None:
        """Return blob metadata, or None when the blob does not exist."""
        pass

    @abstractmethod
    def download(self, bucket_name: str, name: str) -> bytes:
        pass

    @abstractmethod
    def upload(
        self, bucket_name: str, name: str, data: bytes, content_type: str | None = None, public: bool = False
    ) -> None:
        pass


class GCSObjectStore(ObjectStore):
    """Google Cloud Storage backed store."""

    def __init__(self, client: storage.Client | None = None) -> None:
        self.client = client or storage.Client()

    def bucket_exists(self, bucket_name: str) -> bool:
        return self.client.lookup_bucket(bucket_name) is not None

    def get_blob(self, bucket_name: str, name: str) -> BlobInfo | None:
        blob = self.client.bucket(bucket_name).get_blob(name)
        if blob is None:
            return None
        return BlobInfo(name=blob.name, content_type=blob.content_type)

    def download(self, bucket_name: str, name: str) -> bytes:
        return self.client.bucket(bucket_name).blob(name).download_as_bytes()

    def upload(
        self, bucket_name: str, name: str, data: bytes, content_type: str | None = None, public: bool = False
    ) -> None:
        blob = self.client.bucket(bucket_name).blob(name)
        blob.upload_from_string(
            data,
            content_type=content_type or "application/octet-stream",
            predefined_acl="publicRead" if public else None,
        )
