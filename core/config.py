"""
配置文件 - 项目配置管理
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, field_validator
from typing import Optional


class DatabaseSettings(BaseModel):
    url: str = "sqlite+aiosqlite:///./paypoint.db"
    echo: bool = False


class StoreSettings(BaseModel):
    """Storefront the plugin runs for (host store scope)."""

    id: int = 0
    # Public base URL of the storefront, ending with "/". Derived from the
    # incoming request when unset.
    location: Optional[str] = None
    primary_currency_code: str = "USD"
    default_language: str = "en"

    @field_validator("location")
    @classmethod
    def _ensure_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        if v and not v.endswith("/"):
            return v + "/"
        return v

    @field_validator("primary_currency_code")
    @classmethod
    def _upper_currency(cls, v: str) -> str:
        u = (v or "").upper()
        if len(u) != 3 or not u.isalpha():
            raise ValueError("primary_currency_code must be ISO-4217 alpha-3")
        return u


class Settings(BaseSettings):
    """项目配置"""

    # 基础配置
    PROJECT_NAME: str = Field(default="PayPoint Payments Plugin")
    VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)

    # Admin configuration surface is guarded by a static bearer token
    ADMIN_API_TOKEN: Optional[str] = Field(
        default=None,
        description="Bearer token for Admin/PaymentPayPoint endpoints; admin routes reject all calls when unset",
    )

    # CORS配置
    CORS_ORIGINS: list = Field(default=["http://localhost:3000", "http://localhost:8000"])

    # 日志/请求体记录配置
    LOG_REQUEST_BODY_ENABLE_BY_DEFAULT: bool = Field(default=True)
    LOG_REQUEST_BODY_MAX_BYTES: int = Field(default=2048)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        """允许 JSON 字符串或逗号分隔字符串两种格式。"""
        if isinstance(v, list):
            return v
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("[") and s.endswith("]"):
                import json
                try:
                    arr = json.loads(s)
                    if isinstance(arr, list):
                        return arr
                except ValueError:
                    pass
            if "," in s:
                return [item.strip() for item in s.split(",") if item.strip()]
            return [s]
        return v


settings = Settings()
