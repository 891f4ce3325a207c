"""
知识片段数据模型 - 写作技巧
"""
from typing import Optional
from sqlmodel import SQLModel, Field


class KnowledgeChunk(SQLModel, table=True):
    """写作技巧等短文本片段，每次请求最多注入一条"""
    __tablename__ = "knowledge_chunks"

    id: Optional[int] = Field(default=None, primary_key=True)
    content: str = Field(description="片段内容")
    category: str = Field(index=True, description="分类，如 board_writing_tip")
    style_id: Optional[int] = Field(
        default=None, foreign_key="writing_styles.id", index=True, description="所属风格ID"
    )
