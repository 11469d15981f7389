from __future__ import annotations
"""Object storage access backed by S3-compatible services."""
from datetime import datetime, timedelta, timezone
import logging
from typing import Callable

import boto3
from botocore.client import Config
from botocore.exceptions import ClientError

from .models import ObjectBody, ObjectListing, StoredObject
from .profiles import ConnectionProfile

LOGGER = logging.getLogger(__name__)

MISSING_OBJECT_CODES = {"NoSuchKey", "404", "NotFound"}
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _epoch_ms(last_modified: datetime) -> int:
    if last_modified.tzinfo is None:
        last_modified = last_modified.replace(tzinfo=timezone.utc)
    return (last_modified - EPOCH) // timedelta(milliseconds=1)


class BucketStorageService:
    """Lists and fetches objects from a single bucket."""

    def __init__(
        self,
        bucket_name: str,
        *,
        profile: ConnectionProfile | None = None,
        client_factory: Callable[..., object] | None = None,
    ):
        if not bucket_name:
            raise ValueError("bucket_name is required")
        self._bucket_name = bucket_name
        self._profile = profile
        self._client_factory = client_factory or boto3.client
        self._client = None

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    def list(self, prefix: str, delimiter: str) -> ObjectListing:
        """Return the immediate sub-prefixes and objects under ``prefix``.

        Raises:
            BotoCoreError | ClientError: when the listing call fails.
        """
        list_params = {"Bucket": self._bucket_name}
        if prefix:
            list_params["Prefix"] = prefix
        if delimiter:
            list_params["Delimiter"] = delimiter

        response = self._get_client().list_objects_v2(**list_params)
        prefixes = [common["Prefix"] for common in response.get("CommonPrefixes", [])]
        objects = [
            StoredObject(
                key=obj["Key"],
                size=int(obj.get("Size", 0)),
                uploaded_epoch_ms=_epoch_ms(obj["LastModified"]),
            )
            for obj in response.get("Contents", [])
        ]
        if response.get("IsTruncated"):
            LOGGER.warning("Listing for '%s' was truncated by the storage service", prefix)
        return ObjectListing(prefixes=prefixes, objects=objects)

    def get(self, key: str) -> ObjectBody | None:
        """Fetch an object, or ``None`` when the key does not exist."""

        try:
            response = self._get_client().get_object(Bucket=self._bucket_name, Key=key)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code in MISSING_OBJECT_CODES:
                LOGGER.debug("Object '%s' not found", key)
                return None
            raise
        return ObjectBody(
            key=key,
            stream=response.get("Body"),
            content_type=response.get("ContentType"),
            content_length=response.get("ContentLength"),
        )

    def _get_client(self):
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        config = Config(signature_version="s3v4")
        if self._profile is None:
            return self._client_factory("s3", config=config)
        return self._client_factory(
            "s3",
            endpoint_url=self._profile.endpoint_url or None,
            aws_access_key_id=self._profile.access_key,
            aws_secret_access_key=self._profile.secret_key,
            config=config,
        )
