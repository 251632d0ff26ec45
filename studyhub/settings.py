import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

STORAGE_MODES = ("auto", "disk", "remote-bucket", "remote-signed")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    db_url: str = "sqlite:///studyhub.db"

    storage_mode: str = "auto"
    storage_local_path: str = "./uploads"
    storage_url_path: str = "/uploads"
    base_url: str = "http://localhost:8000"

    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_anon_key: str = ""
    supabase_bucket: str = "pdfs"

    s3_bucket: str = ""
    s3_region: str = ""
    s3_access_key_id: str = ""
    s3_secret_access_key: str = ""
    s3_endpoint_url: str = ""
    s3_public_base_url: str = ""
    s3_presigned_expiry: int = 604800  # 7 days, the SigV4 maximum

    max_upload_size: int = 5 * 1024 * 1024
    max_document_size: int = 50 * 1024 * 1024
    max_images_per_request: int = 10

    log_level: str = "INFO"
    log_json: bool = False

    @property
    def supabase_key(self) -> str:
        """Service role key bypasses row-level security; the anon key is accepted as a fallback."""
        return self.supabase_service_role_key or self.supabase_anon_key

    @property
    def disk_base_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.storage_url_path.strip('/')}".rstrip("/")

    def has_supabase_credentials(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    def has_s3_credentials(self) -> bool:
        return bool(self.s3_bucket and self.s3_access_key_id and self.s3_secret_access_key)


settings = Settings()
