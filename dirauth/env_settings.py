from functools import lru_cache

from pydantic_settings import BaseSettings
from pydantic import Field


class EnvSettings(BaseSettings):
    secret_key: str = Field(..., alias="DIRAUTH_SECRET_KEY")
    sqlite_path: str = Field("data/dirauth.db", alias="SQLITE_PATH")

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_dir: str = Field("data/logs", alias="LOG_DIR")
    log_retention_days: int = Field(30, alias="LOG_RETENTION_DAYS")

    ldap_connect_timeout_s: float = Field(10.0, alias="LDAP_CONNECT_TIMEOUT_S")
    ldap_receive_timeout_s: float = Field(10.0, alias="LDAP_RECEIVE_TIMEOUT_S")

    class Config:
        populate_by_name = True


@lru_cache(maxsize=1)
def get_env() -> EnvSettings:
    return EnvSettings()
