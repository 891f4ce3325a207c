"""
风格指令的结构化载荷 - writing_styles.system_prompt 中 JSON 文本的类型化版本

所有字段都可选。解析失败时退回空载荷并记录警告，永远不抛异常。
"""
import json
from typing import Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from kotonoha.core import get_logger

logger = get_logger(__name__)

CURRENT_SCHEMA_VERSION = 1


def _render_value(value) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return "、".join(value)
    return json.dumps(value, ensure_ascii=False, sort_keys=True)


class FrameworkSection(BaseModel):
    """构成框架中的一个段落"""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    description: str = ""


class KeyElements(BaseModel):
    """语气 / 烦恼例 / 技巧例"""

    model_config = ConfigDict(extra="ignore")

    tone: str = ""
    dilemmas: list[str] = Field(default_factory=list)
    techniques: list[str] = Field(default_factory=list)
    vocabulary: list[str] = Field(default_factory=list)


class StylePayload(BaseModel):
    """
    基础风格 / 共通风格

    未声明的键原样保留（extra="allow"），渲染时作为补充段落输出，不丢任何指示。
    """

    model_config = ConfigDict(extra="allow")

    schema_version: int = CURRENT_SCHEMA_VERSION
    rules: str = ""
    # 顶层 tone / vocabulary 与 key_elements 中的同名字段等价
    tone: str = ""
    vocabulary: list[str] = Field(default_factory=list)
    framework: dict[str, FrameworkSection] = Field(default_factory=dict)
    key_elements: KeyElements = Field(default_factory=KeyElements)

    @field_validator("framework", mode="before")
    @classmethod
    def _coerce_framework(cls, value):
        # 旧数据里段落可能直接写成字符串
        if not isinstance(value, dict):
            return value
        coerced = {}
        for key, section in value.items():
            if isinstance(section, str):
                coerced[key] = {"name": key, "description": section}
            else:
                coerced[key] = section
        return coerced

    def sorted_sections(self) -> list[FrameworkSection]:
        """按 key 字典序排列，保证渲染结果稳定"""
        return [self.framework[key] for key in sorted(self.framework)]

    def effective_tone(self) -> str:
        return self.key_elements.tone or self.tone

    def effective_vocabulary(self) -> list[str]:
        """key_elements 在前，顶层在后，去重保序"""
        merged = []
        for word in [*self.key_elements.vocabulary, *self.vocabulary]:
            if word and word not in merged:
                merged.append(word)
        return merged

    def extra_sections(self) -> list[FrameworkSection]:
        """未被 schema 消费的键，按 key 字典序转成段落"""
        extras = self.model_extra or {}
        return [
            FrameworkSection(name=key, description=_render_value(extras[key]))
            for key in sorted(extras)
            if extras[key] not in (None, "", [], {})
        ]


class ConceptPayload(BaseModel):
    """掲示板概念覆盖层"""

    model_config = ConfigDict(extra="ignore")

    schema_version: int = CURRENT_SCHEMA_VERSION
    focus: str = ""
    tone: str = ""
    example_keywords: list[str] = Field(default_factory=list)
    base_templates: list[str] = Field(default_factory=list)


PayloadT = TypeVar("PayloadT", bound=BaseModel)


def looks_like_json_object(raw: Optional[str]) -> bool:
    """粗略判断文本是否是 JSON 对象"""
    return bool(raw) and raw.strip().startswith("{")


def parse_payload(raw: Optional[str], model: type[PayloadT], source: str = "") -> PayloadT:
    """
    解析 JSON 文本为指定载荷

    Args:
        raw: system_prompt 原文，可能为空
        model: StylePayload 或 ConceptPayload
        source: 记录来源（slug），仅用于日志

    Returns:
        载荷实例；任何解析或校验失败都返回默认实例
    """
    if raw is None or not raw.strip():
        return model()

    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"配置 JSON 解析失败，使用空配置: source={source}, error={e}")
        return model()

    if not isinstance(data, dict):
        logger.warning(f"配置 JSON 不是对象，使用空配置: source={source}")
        return model()

    try:
        payload = model.model_validate(data)
    except ValidationError as e:
        logger.warning(f"配置字段校验失败，使用空配置: source={source}, error={e.errors()}")
        return model()

    if payload.schema_version > CURRENT_SCHEMA_VERSION:
        logger.warning(
            f"配置版本较新，按 v{CURRENT_SCHEMA_VERSION} 读取: "
            f"source={source}, version={payload.schema_version}"
        )
    return payload
