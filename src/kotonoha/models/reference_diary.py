"""
参考例数据模型 - 生成时的示例素材
"""
from typing import Optional
from sqlmodel import SQLModel, Field


class ReferenceDiary(SQLModel, table=True):
    """
    参考例

    只作为生成的参考素材，流水线从不修改它
    """
    __tablename__ = "reference_diaries"

    id: Optional[int] = Field(default=None, primary_key=True)

    title: str = Field(default="", description="标题")
    body: str = Field(default="", description="正文")

    # diary_logic / board_template / board_temp（概念模板）
    content_type: str = Field(index=True, description="内容类型")

    # 所属风格（概念模板没有所属风格）
    style_id: Optional[int] = Field(
        default=None, foreign_key="writing_styles.id", index=True, description="所属风格ID"
    )
