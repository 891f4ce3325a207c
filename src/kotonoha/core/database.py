"""
数据库连接管理 - 配置库的统一引擎
"""
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from kotonoha.core.config import get_settings


def build_engine(database_url: str):
    """按 URL 创建引擎；内存 SQLite 共享同一连接，便于测试和演示"""
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=False, **kwargs)
    return create_engine(database_url, echo=False, pool_pre_ping=True)


def create_tables(target_engine) -> None:
    """创建全部配置表"""
    import kotonoha.models  # noqa: F401  注册表模型

    SQLModel.metadata.create_all(target_engine)


# 创建全局数据库引擎
_settings = get_settings()
engine = build_engine(_settings.database_url)

__all__ = ["engine", "build_engine", "create_tables"]
