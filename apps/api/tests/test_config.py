from lfs_proxy import config


def test_get_default_expiry_prefers_prefixed_variable(monkeypatch):
    monkeypatch.setenv("LFS_EXPIRY", "900")
    monkeypatch.setenv("EXPIRY", "1200")

    assert config.get_default_expiry() == 900


def test_get_default_expiry_falls_back_to_legacy_variable(monkeypatch):
    monkeypatch.delenv("LFS_EXPIRY", raising=False)
    monkeypatch.setenv("EXPIRY", "1200")

    assert config.get_default_expiry() == 1200


def test_get_default_expiry_ignores_garbage_and_clamps(monkeypatch):
    monkeypatch.delenv("EXPIRY", raising=False)

    monkeypatch.setenv("LFS_EXPIRY", "soon")
    assert config.get_default_expiry() == 3600

    monkeypatch.setenv("LFS_EXPIRY", "999999999")
    assert config.get_default_expiry() == 604800

    monkeypatch.setenv("LFS_EXPIRY", "   ")
    assert config.get_default_expiry() == 3600


def test_get_enforce_media_type_reads_truthy_values(monkeypatch):
    monkeypatch.setenv("LFS_ENFORCE_MEDIA_TYPE", "Yes")
    assert config.get_enforce_media_type() is True

    monkeypatch.setenv("LFS_ENFORCE_MEDIA_TYPE", "0")
    assert config.get_enforce_media_type() is False

    monkeypatch.delenv("LFS_ENFORCE_MEDIA_TYPE")
    assert config.get_enforce_media_type() is False


def test_get_cors_allow_origins_splits_list(monkeypatch):
    monkeypatch.setenv("LFS_CORS_ALLOW_ORIGINS", "https://a.example, https://b.example,,")

    assert config.get_cors_allow_origins() == ["https://a.example", "https://b.example"]


def test_get_signing_max_workers_has_floor(monkeypatch):
    monkeypatch.setenv("LFS_SIGNING_MAX_WORKERS", "0")

    assert config.get_signing_max_workers() == 1
