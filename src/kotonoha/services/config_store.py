"""
配置库读取 - 风格 / 参考例 / 写作技巧的只读查询

每次调用都新开 Session，不做任何跨请求缓存。
"""
from typing import Optional
from sqlmodel import Session, select

from kotonoha.core import get_logger
from kotonoha.models import KnowledgeChunk, ReferenceDiary, WritingStyle

logger = get_logger(__name__)

# 每次最多取出的候选条数
DEFAULT_POOL_LIMIT = 10


class ConfigStore:
    """
    配置库客户端

    只暴露读接口，流水线不会写回任何记录
    """

    def __init__(self, engine):
        self.engine = engine

    def get_style(self, slug: str) -> Optional[WritingStyle]:
        """按 slug 获取写作风格"""
        with Session(self.engine) as session:
            statement = select(WritingStyle).where(WritingStyle.slug == slug)
            return session.exec(statement).first()

    def list_examples(
        self,
        content_type: str,
        style_id: Optional[int] = None,
        limit: int = DEFAULT_POOL_LIMIT,
    ) -> list[ReferenceDiary]:
        """获取参考例候选"""
        with Session(self.engine) as session:
            statement = select(ReferenceDiary).where(ReferenceDiary.content_type == content_type)
            if style_id is not None:
                statement = statement.where(ReferenceDiary.style_id == style_id)
            statement = statement.order_by(ReferenceDiary.id).limit(limit)
            return list(session.exec(statement).all())

    def list_tips(
        self,
        category: str,
        style_id: Optional[int] = None,
        limit: int = DEFAULT_POOL_LIMIT,
    ) -> list[KnowledgeChunk]:
        """获取写作技巧候选"""
        with Session(self.engine) as session:
            statement = select(KnowledgeChunk).where(KnowledgeChunk.category == category)
            if style_id is not None:
                statement = statement.where(KnowledgeChunk.style_id == style_id)
            statement = statement.order_by(KnowledgeChunk.id).limit(limit)
            return list(session.exec(statement).all())


# 全局单例
_config_store: Optional[ConfigStore] = None


def get_config_store() -> ConfigStore:
    """获取配置库单例"""
    global _config_store
    if _config_store is None:
        from kotonoha.core.database import engine

        _config_store = ConfigStore(engine)
    return _config_store
