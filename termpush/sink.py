"""Storage sinks that receive exported files.

A sink takes an object key, the file bytes and a content type, and returns
the URL under which the object can be fetched. Any failure is raised as
SinkError so batch pushes can report it per locale.
"""

import threading
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .config import Settings, settings
from .errors import SinkError
from .logging import get_logger

logger = get_logger(__name__)


def locale_key(project_id: str, iso: str) -> str:
    """Object key for a project's locale file."""
    return f"site_{project_id}/locale/{iso}"


class StorageSink(ABC):
    @abstractmethod
    def upload(self, key: str, content: bytes, content_type: str) -> str:
        """Store content under key and return its URL.

        Raises:
            SinkError: If the object could not be stored
        """


@lru_cache(maxsize=1)
def get_s3_client():
    return boto3.client(
        "s3",
        endpoint_url=settings.S3_ENDPOINT_URL,
        aws_access_key_id=settings.S3_ACCESS_KEY,
        aws_secret_access_key=settings.S3_SECRET_KEY,
        region_name=settings.S3_REGION,
        config=Config(
            signature_version="s3v4",
            s3={"addressing_style": "path"},
        ),
    )


class S3Sink(StorageSink):
    """Uploads to an S3-compatible bucket."""

    def __init__(self, bucket: str, public_base_url: str, client=None):
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")
        self._client = client
        self._bucket_checked = False
        self._bucket_lock = threading.Lock()

    @property
    def client(self):
        if self._client is None:
            self._client = get_s3_client()
        return self._client

    def ensure_bucket_exists(self) -> None:
        # Pushes upload from several threads; only one may create the bucket
        with self._bucket_lock:
            if self._bucket_checked:
                return
            try:
                self.client.head_bucket(Bucket=self.bucket)
            except ClientError as e:
                error_code = e.response.get("Error", {}).get("Code")
                if error_code not in ("404", "NoSuchBucket"):
                    raise SinkError(f"Failed to check bucket: {e}") from e
                self._create_bucket()
            except BotoCoreError as e:
                raise SinkError(f"Failed to check bucket: {e}") from e
            self._bucket_checked = True

    def _create_bucket(self) -> None:
        logger.info("creating_bucket", bucket=self.bucket)
        try:
            self.client.create_bucket(Bucket=self.bucket)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            if error_code in ("BucketAlreadyOwnedByYou", "BucketAlreadyExists"):
                logger.info("bucket_already_exists", bucket=self.bucket, code=error_code)
                return
            raise SinkError(f"Failed to create bucket: {e}") from e
        except BotoCoreError as e:
            raise SinkError(f"Failed to create bucket: {e}") from e

    def upload(self, key: str, content: bytes, content_type: str) -> str:
        self.ensure_bucket_exists()
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.exception("upload_failed", key=key, error=str(e))
            raise SinkError(f"Failed to upload {key}: {e}") from e

        logger.info("file_uploaded", key=key, size=len(content))
        return f"{self.public_base_url}/{self.bucket}/{key}"


class DirectorySink(StorageSink):
    """Writes objects below a local directory, e.g. for CLI pushes.

    The object key is used as the relative path, so a push lays files out
    as <root>/site_<project>/locale/<iso>.
    """

    def __init__(self, root: str):
        self.root = Path(root)

    def upload(self, key: str, content: bytes, content_type: str) -> str:
        path = self.root / key
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            logger.exception("write_failed", path=str(path), error=str(e))
            raise SinkError(f"Failed to write {path}: {e}") from e

        logger.info("file_written", path=str(path), size=len(content))
        return path.resolve().as_uri()


def build_sink(config: Settings = settings, kind: str | None = None) -> StorageSink | None:
    """Create the sink selected by configuration (or by kind), None for 'none'."""
    kind = kind or config.SINK
    if kind == "s3":
        return S3Sink(config.S3_BUCKET_NAME, config.s3_public_base_url)
    if kind == "directory":
        return DirectorySink(config.SINK_DIRECTORY)
    return None
