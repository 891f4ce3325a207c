"""
写作风格数据模型 - 类似 Java 的 Entity
"""
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WritingStyle(SQLModel, table=True):
    """
    写作风格模型

    既存放基础风格（如 pana_emotion），也存放掲示板的共通风格 board_common
    和概念覆盖层 board_concept_<id>。
    """
    __tablename__ = "writing_styles"

    # 主键
    id: Optional[int] = Field(default=None, primary_key=True)

    # 唯一标识
    slug: str = Field(index=True, unique=True, description="风格 slug")

    # 风格名称
    name: str = Field(default="", description="风格名称")

    # 指令内容：纯文本或 JSON 文本
    system_prompt: str = Field(default="", description="系统指令（纯文本或 JSON）")

    # 创建时间（UTC）
    created_at: datetime = Field(
        default_factory=_utcnow, sa_type=DateTime(timezone=True), description="创建时间"
    )

    # 更新时间（UTC）
    updated_at: datetime = Field(
        default_factory=_utcnow, sa_type=DateTime(timezone=True), description="更新时间"
    )
