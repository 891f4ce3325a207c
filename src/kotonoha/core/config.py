"""
配置管理 - 类似 Java 的 @ConfigurationProperties
"""
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from kotonoha.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """应用配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # API 配置
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]

    # OpenAI 兼容 API 配置（默认走 OpenRouter）
    # 保留 OPENROUTER_* / XAI_* 作为兼容别名，沿用 Edge Function 时代的环境变量。
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("OPENAI_API_KEY", "OPENROUTER_API_KEY", "XAI_API_KEY"),
    )
    openai_base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        validation_alias=AliasChoices("OPENAI_BASE_URL", "OPENROUTER_BASE_URL"),
    )
    openai_model: str = Field(
        default="x-ai/grok-4.1-fast",
        validation_alias=AliasChoices("OPENAI_MODEL", "OPENROUTER_MODEL"),
    )

    # 生成参数
    llm_temperature: float = 0.9
    llm_max_tokens: int = 4000
    llm_timeout: float = 60.0
    llm_max_retries: int = 2

    # OpenRouter 统计用请求头
    site_url: str = "https://kotonoha.vercel.app"
    app_title: str = "Kotonoha Generator"

    # 配置库（风格 / 概念 / 参考例 / 技巧）
    database_url: str = "sqlite:///./data/kotonoha.db"

    # 日志配置
    log_level: str = "INFO"

    def require_llm_credentials(self) -> None:
        """启动时校验大模型密钥，缺失即视为致命配置错误"""
        if not self.openai_api_key.strip():
            raise ConfigurationError(
                "OPENAI_API_KEY（或 OPENROUTER_API_KEY）未设置，无法启动生成服务"
            )


@lru_cache()
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()
