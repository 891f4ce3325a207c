"""
生成流水线的数据类型 - 请求、有效配置、素材、结果
"""
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kotonoha.core.exceptions import InvalidRequestError
from kotonoha.models.style_payload import FrameworkSection

DEFAULT_STYLE_SLUG = "pana_emotion"
DEFAULT_PATTERN_COUNT = 3
NO_TIP_SENTINEL = "なし"

# 必须由调用方显式给出的字段（JSON 名）
REQUIRED_FIELDS = ("contentType", "selectedKeywords")


class ContentType(str, Enum):
    """内容类型"""

    DIARY_LOGIC = "diary_logic"
    BOARD_TEMPLATE = "board_template"


class GenerationRequest(BaseModel):
    """生成请求（字段别名与前端 JSON 保持一致）"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    style_slug: str = Field(default=DEFAULT_STYLE_SLUG, alias="styleSlug", min_length=1)
    content_type: ContentType = Field(alias="contentType")
    concept_id: Optional[str] = Field(default=None, alias="conceptId")
    selected_keywords: list[str] = Field(alias="selectedKeywords")
    user_prompt: str = Field(default="", alias="userPrompt")
    pattern_count: int = Field(default=DEFAULT_PATTERN_COUNT, alias="patternCount", ge=1)

    @classmethod
    def from_payload(cls, payload: Any) -> "GenerationRequest":
        """
        从请求体构造并校验

        Raises:
            InvalidRequestError: 缺少必填字段或字段格式错误
        """
        if not isinstance(payload, dict):
            raise InvalidRequestError("リクエストボディはJSONオブジェクトである必要があります")

        missing = [name for name in REQUIRED_FIELDS if payload.get(name) is None]
        if missing:
            raise InvalidRequestError(
                f"必須パラメータが不足しています: {', '.join(missing)}", fields=missing
            )

        # null 视为未指定，交给默认值
        cleaned = {key: value for key, value in payload.items() if value is not None}
        try:
            return cls.model_validate(cleaned)
        except ValidationError as e:
            fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
            raise InvalidRequestError(
                f"パラメータが不正です: {', '.join(fields)}", fields=fields
            ) from e


class EffectiveConfig(BaseModel):
    """合并后的有效配置，提示词组装只读取它"""

    concept_mode: bool = False
    style_id: Optional[int] = None
    style_name: str = ""

    # 基础风格原文（纯文本风格直接使用）
    system_instruction: str = ""
    # 原文是否为 JSON 对象
    structured: bool = False

    rules: str = ""
    framework_sections: list[FrameworkSection] = Field(default_factory=list)
    tone_hints: str = ""
    dilemma_examples: list[str] = Field(default_factory=list)
    technique_examples: list[str] = Field(default_factory=list)
    vocabulary: list[str] = Field(default_factory=list)
    # 载荷中未被 schema 消费的键
    extra_sections: list[FrameworkSection] = Field(default_factory=list)

    concept_name: str = ""
    concept_focus: str = ""
    concept_tone: str = ""
    concept_keywords: list[str] = Field(default_factory=list)
    base_templates: list[str] = Field(default_factory=list)


class ReferenceExample(BaseModel):
    """参考例（只读快照）"""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    body: str = ""


class SampledMaterial(BaseModel):
    """抽样得到的参考例和技巧"""

    examples: list[ReferenceExample] = Field(default_factory=list)
    examples_text: str = ""
    tip: Optional[str] = None
    tip_text: str = ""


class ComposedPrompt(BaseModel):
    """发给大模型的两段指令"""

    model_config = ConfigDict(frozen=True)

    system_instruction: str
    user_instruction: str


class Pattern(BaseModel):
    """一个生成变体"""

    approach: str
    title: str
    content: str
    raw: str = ""


class GenerationResult(BaseModel):
    """生成结果（不落库）"""

    content: str
    patterns: list[Pattern]
    model: str
    applied_tip: str = NO_TIP_SENTINEL

    def to_response(self) -> dict:
        """转换为接口响应结构"""
        return {
            "success": True,
            "content": self.content,
            "patterns": [p.raw or p.content for p in self.patterns],
            "structuredPatterns": [
                {"approach": p.approach, "title": p.title, "content": p.content}
                for p in self.patterns
            ],
            "model": self.model,
            "appliedTip": self.applied_tip,
        }
