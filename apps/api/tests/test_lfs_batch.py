import time

import pytest

from lfs_proxy.schemas.batch import BatchRequest
from lfs_proxy.schemas.store import StoreOptions, StoreTarget
from lfs_proxy.services import lfs_batch
from lfs_proxy.services.errors import SigningError, UnsupportedHashAlgorithmError, UnsupportedOperationError


def test_handle_batch_request_keeps_request_order(monkeypatch):
    calls: list[tuple[str, str, int]] = []

    def _fake_sign(*, options, bucket, object_id, method, expires_in):
        del options
        # Later objects finish first.
        time.sleep(0.01 * (5 - int(object_id[-1])))
        calls.append((object_id, method, expires_in))
        return f"https://{bucket}/{object_id}?signed={method}"

    monkeypatch.setattr(lfs_batch, "generate_presigned_object_url", _fake_sign)
    payload = BatchRequest(
        operation="upload",
        objects=[{"oid": f"oid{index}", "size": index * 10} for index in range(5)],
    )

    response = lfs_batch.handle_batch_request(payload, target=_target(), default_expiry=None, max_workers=5)

    assert [obj.oid for obj in response.objects] == [f"oid{index}" for index in range(5)]
    assert [obj.size for obj in response.objects] == [0, 10, 20, 30, 40]
    assert sorted(calls) == [(f"oid{index}", "PUT", 3600) for index in range(5)]
    for obj in response.objects:
        assert obj.authenticated is True
        assert list(obj.actions) == ["upload"]
        assert obj.actions["upload"].href == f"https://bucket.example.com/{obj.oid}?signed=PUT"
        assert obj.actions["upload"].expires_in == 3600
    assert response.transfer == "basic"
    assert response.hash_algo == "sha256"


def test_handle_batch_request_rejects_hash_algorithm_before_signing(monkeypatch):
    monkeypatch.setattr(lfs_batch, "generate_presigned_object_url", _unexpected_sign)
    payload = BatchRequest(operation="download", objects=[{"oid": "abc", "size": 1}], hash_algo="md5")

    with pytest.raises(UnsupportedHashAlgorithmError) as exc_info:
        lfs_batch.handle_batch_request(payload, target=_target(), default_expiry=None)

    assert exc_info.value.status_code == 409
    assert "'md5'" in exc_info.value.message


def test_handle_batch_request_names_null_hash_algorithm(monkeypatch):
    monkeypatch.setattr(lfs_batch, "generate_presigned_object_url", _unexpected_sign)
    payload = BatchRequest(operation="download", objects=[{"oid": "abc", "size": 1}], hash_algo=None)

    with pytest.raises(UnsupportedHashAlgorithmError) as exc_info:
        lfs_batch.handle_batch_request(payload, target=_target(), default_expiry=None)

    assert "'null'" in exc_info.value.message


def test_handle_batch_request_rejects_unknown_operation_before_signing(monkeypatch):
    monkeypatch.setattr(lfs_batch, "generate_presigned_object_url", _unexpected_sign)
    payload = BatchRequest(operation="verify", objects=[{"oid": "abc", "size": 1}])

    with pytest.raises(UnsupportedOperationError) as exc_info:
        lfs_batch.handle_batch_request(payload, target=_target(), default_expiry=None)

    assert exc_info.value.status_code == 422
    assert "'verify'" in exc_info.value.message


@pytest.mark.parametrize(
    ("requested", "default", "expected"),
    [
        (600, 1800, 600),
        (None, 1800, 1800),
        (None, None, 3600),
    ],
)
def test_handle_batch_request_resolves_expiry(monkeypatch, requested, default, expected):
    seen: list[int] = []

    def _fake_sign(*, options, bucket, object_id, method, expires_in):
        del options, bucket, object_id, method
        seen.append(expires_in)
        return "https://signed"

    monkeypatch.setattr(lfs_batch, "generate_presigned_object_url", _fake_sign)
    payload = BatchRequest(operation="download", objects=[{"oid": "abc", "size": 1}])

    response = lfs_batch.handle_batch_request(payload, target=_target(expiry=requested), default_expiry=default)

    assert seen == [expected]
    assert response.objects[0].actions["download"].expires_in == expected


def test_handle_batch_request_with_no_objects(monkeypatch):
    monkeypatch.setattr(lfs_batch, "generate_presigned_object_url", _unexpected_sign)
    payload = BatchRequest(operation="download", objects=[])

    response = lfs_batch.handle_batch_request(payload, target=_target(), default_expiry=None)

    assert response.objects == []


def test_handle_batch_request_fails_whole_batch_on_signing_error(monkeypatch):
    def _failing_sign(*, options, bucket, object_id, method, expires_in):
        del options, bucket, method, expires_in
        if object_id == "bad":
            raise SigningError("Failed to generate presigned URL: boom")
        return "https://signed"

    monkeypatch.setattr(lfs_batch, "generate_presigned_object_url", _failing_sign)
    payload = BatchRequest(
        operation="download",
        objects=[{"oid": "good", "size": 1}, {"oid": "bad", "size": 2}],
    )

    with pytest.raises(SigningError):
        lfs_batch.handle_batch_request(payload, target=_target(), default_expiry=None)


def _target(expiry: int | None = None) -> StoreTarget:
    options = StoreOptions(accessKeyId="user", secretAccessKey="pass", expiry=expiry)
    return StoreTarget(options=options, bucket="bucket.example.com")


def _unexpected_sign(**kwargs):
    raise AssertionError(f"signer should not be called: {kwargs}")
