"""Tests for storage sinks."""

import threading

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from termpush.config import Settings
from termpush.errors import SinkError
from termpush.push import PushOrchestrator
from termpush.sink import DirectorySink, S3Sink, build_sink, locale_key


class FakeS3Client:
    """Records S3 calls; optional errors keyed by operation name."""

    def __init__(self, errors=None):
        self.calls = []
        self.errors = errors or {}

    def _call(self, operation, **kwargs):
        self.calls.append((operation, kwargs))
        error = self.errors.get(operation)
        if error is not None:
            raise error
        return {}

    def head_bucket(self, **kwargs):
        return self._call("HeadBucket", **kwargs)

    def create_bucket(self, **kwargs):
        return self._call("CreateBucket", **kwargs)

    def put_object(self, **kwargs):
        return self._call("PutObject", **kwargs)


class FreshBucketClient(FakeS3Client):
    """Bucket that does not exist until the first CreateBucket call."""

    def __init__(self):
        super().__init__()
        self.created = False
        self.lock = threading.Lock()
        self.head_barrier = threading.Barrier(3, timeout=0.5)

    def head_bucket(self, **kwargs):
        self.calls.append(("HeadBucket", kwargs))
        try:
            # Let concurrent uploads reach the check together
            self.head_barrier.wait()
        except threading.BrokenBarrierError:
            pass
        with self.lock:
            if not self.created:
                raise client_error("404", "HeadBucket")
        return {}

    def create_bucket(self, **kwargs):
        self.calls.append(("CreateBucket", kwargs))
        with self.lock:
            if self.created:
                raise client_error("BucketAlreadyOwnedByYou", "CreateBucket")
            self.created = True
        return {}


def client_error(code, operation):
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


def test_locale_key():
    assert locale_key("42", "pt-BR") == "site_42/locale/pt-BR"


class TestS3Sink:
    def test_upload_puts_object_and_returns_url(self):
        client = FakeS3Client()
        sink = S3Sink("translations", "https://cdn.example.com/", client=client)

        url = sink.upload("site_demo/locale/fr", b"{}", "application/json; charset=utf-8")

        assert url == "https://cdn.example.com/translations/site_demo/locale/fr"
        assert client.calls == [
            ("HeadBucket", {"Bucket": "translations"}),
            ("PutObject", {
                "Bucket": "translations",
                "Key": "site_demo/locale/fr",
                "Body": b"{}",
                "ContentType": "application/json; charset=utf-8",
            }),
        ]

    def test_bucket_checked_once(self):
        client = FakeS3Client()
        sink = S3Sink("translations", "http://localhost:9000", client=client)

        sink.upload("a", b"1", "text/csv")
        sink.upload("b", b"2", "text/csv")

        assert [op for op, _ in client.calls] == ["HeadBucket", "PutObject", "PutObject"]

    @pytest.mark.parametrize("code", ["404", "NoSuchBucket"])
    def test_missing_bucket_is_created(self, code):
        client = FakeS3Client(errors={"HeadBucket": client_error(code, "HeadBucket")})
        sink = S3Sink("translations", "http://localhost:9000", client=client)

        sink.upload("a", b"1", "text/csv")

        assert [op for op, _ in client.calls] == ["HeadBucket", "CreateBucket", "PutObject"]

    @pytest.mark.parametrize("code", ["BucketAlreadyOwnedByYou", "BucketAlreadyExists"])
    def test_bucket_created_elsewhere_is_accepted(self, code):
        client = FakeS3Client(errors={
            "HeadBucket": client_error("404", "HeadBucket"),
            "CreateBucket": client_error(code, "CreateBucket"),
        })
        sink = S3Sink("translations", "http://localhost:9000", client=client)

        assert sink.upload("a", b"1", "text/csv") == "http://localhost:9000/translations/a"

    def test_create_failure_raises_sink_error(self):
        client = FakeS3Client(errors={
            "HeadBucket": client_error("404", "HeadBucket"),
            "CreateBucket": client_error("AccessDenied", "CreateBucket"),
        })
        sink = S3Sink("translations", "http://localhost:9000", client=client)

        with pytest.raises(SinkError, match="Failed to create bucket"):
            sink.upload("a", b"1", "text/csv")

    def test_concurrent_push_to_fresh_bucket(self, collector):
        client = FreshBucketClient()
        sink = S3Sink("translations", "http://localhost:9000", client=client)
        orchestrator = PushOrchestrator(collector, sink=sink, max_workers=3)

        summary = orchestrator.push("demo", "jsonflat", locale="all")

        assert [(r.locale, r.status) for r in summary.results] == [
            ("en", "ok"), ("fr", "ok"), ("de", "ok"),
        ]
        assert summary.failed == 0
        assert [op for op, _ in client.calls].count("CreateBucket") == 1

    def test_forbidden_bucket_raises(self):
        client = FakeS3Client(errors={"HeadBucket": client_error("403", "HeadBucket")})
        sink = S3Sink("translations", "http://localhost:9000", client=client)

        with pytest.raises(SinkError, match="Failed to check bucket"):
            sink.upload("a", b"1", "text/csv")

    def test_put_failure_raises_sink_error(self):
        client = FakeS3Client(errors={"PutObject": client_error("AccessDenied", "PutObject")})
        sink = S3Sink("translations", "http://localhost:9000", client=client)

        with pytest.raises(SinkError, match="Failed to upload a") as exc_info:
            sink.upload("a", b"1", "text/csv")

        assert isinstance(exc_info.value.__cause__, ClientError)

    def test_connection_failure_raises_sink_error(self):
        error = EndpointConnectionError(endpoint_url="http://localhost:9000")
        client = FakeS3Client(errors={"HeadBucket": error})
        sink = S3Sink("translations", "http://localhost:9000", client=client)

        with pytest.raises(SinkError):
            sink.upload("a", b"1", "text/csv")


class TestDirectorySink:
    def test_writes_file_at_key(self, tmp_path):
        sink = DirectorySink(str(tmp_path))

        url = sink.upload("site_demo/locale/fr", "Grüße".encode("utf-8"), "text/plain")

        path = tmp_path / "site_demo" / "locale" / "fr"
        assert path.read_text(encoding="utf-8") == "Grüße"
        assert url == path.resolve().as_uri()

    def test_overwrites_previous_push(self, tmp_path):
        sink = DirectorySink(str(tmp_path))

        sink.upload("k", b"old", "text/plain")
        sink.upload("k", b"new", "text/plain")

        assert (tmp_path / "k").read_bytes() == b"new"

    def test_write_failure_raises_sink_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        sink = DirectorySink(str(blocker))

        with pytest.raises(SinkError, match="Failed to write"):
            sink.upload("site_demo/locale/fr", b"x", "text/plain")


class TestBuildSink:
    def test_none(self):
        assert build_sink(Settings(SINK="none")) is None

    def test_directory(self, tmp_path):
        sink = build_sink(Settings(SINK="directory", SINK_DIRECTORY=str(tmp_path)))

        assert isinstance(sink, DirectorySink)
        assert sink.root == tmp_path

    def test_s3_uses_public_url(self):
        config = Settings(S3_PUBLIC_URL="https://cdn.example.com/", S3_BUCKET_NAME="bucket")

        sink = build_sink(config, kind="s3")

        assert isinstance(sink, S3Sink)
        assert sink.bucket == "bucket"
        assert sink.public_base_url == "https://cdn.example.com"

    def test_s3_public_url_falls_back_to_endpoint(self):
        config = Settings(S3_ENDPOINT_URL="http://minio:9000/", S3_PUBLIC_URL=None)

        assert config.s3_public_base_url == "http://minio:9000"
