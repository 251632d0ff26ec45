import pytest

from studyhub.settings import Settings

ENV_KEYS = (
    "DB_URL",
    "STORAGE_MODE",
    "STORAGE_LOCAL_PATH",
    "BASE_URL",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_ANON_KEY",
    "SUPABASE_BUCKET",
    "S3_BUCKET",
    "S3_ACCESS_KEY_ID",
    "S3_SECRET_ACCESS_KEY",
    "S3_PRESIGNED_EXPIRY",
)


@pytest.fixture()
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env):
        s = Settings(_env_file=None)
        assert s.db_url == "sqlite:///studyhub.db"
        assert s.storage_mode == "auto"
        assert s.storage_local_path == "./uploads"
        assert s.supabase_bucket == "pdfs"
        assert s.s3_presigned_expiry == 604800
        assert s.max_upload_size == 5 * 1024 * 1024
        assert not s.has_supabase_credentials()
        assert not s.has_s3_credentials()

    def test_env_override(self, clean_env):
        clean_env.setenv("STORAGE_MODE", "remote-signed")
        clean_env.setenv("S3_BUCKET", "bucket")
        clean_env.setenv("S3_ACCESS_KEY_ID", "key")
        clean_env.setenv("S3_SECRET_ACCESS_KEY", "secret")
        s = Settings(_env_file=None)
        assert s.storage_mode == "remote-signed"
        assert s.has_s3_credentials()

    def test_service_role_key_preferred(self, clean_env):
        clean_env.setenv("SUPABASE_URL", "https://project.supabase.co")
        clean_env.setenv("SUPABASE_ANON_KEY", "anon")
        assert Settings(_env_file=None).supabase_key == "anon"

        clean_env.setenv("SUPABASE_SERVICE_ROLE_KEY", "service")
        s = Settings(_env_file=None)
        assert s.supabase_key == "service"
        assert s.has_supabase_credentials()

    def test_disk_base_url(self, clean_env):
        clean_env.setenv("BASE_URL", "https://api.example.com/")
        assert Settings(_env_file=None).disk_base_url == "https://api.example.com/uploads"
