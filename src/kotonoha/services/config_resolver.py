"""
配置解析 - 把基础风格和概念覆盖层合并成一份有效配置
"""
from typing import Optional

from kotonoha.core import get_logger
from kotonoha.core.exceptions import ConfigNotFoundError
from kotonoha.models import (
    ConceptPayload,
    ContentType,
    EffectiveConfig,
    StylePayload,
    parse_payload,
)
from kotonoha.models.style_payload import looks_like_json_object
from kotonoha.services.config_store import ConfigStore

logger = get_logger(__name__)

BOARD_COMMON_SLUG = "board_common"
CONCEPT_SLUG_PREFIX = "board_concept_"


def concept_slug(concept_id: str) -> str:
    """概念 ID → 配置库 slug"""
    return f"{CONCEPT_SLUG_PREFIX}{concept_id}"


class ConfigResolver:
    """
    配置解析器

    掲示板 + 概念模式：board_common 与 board_concept_<id> 两层合并，
    任一层缺失或 JSON 损坏都只记录日志。
    其他情况：按 slug 读取基础风格，缺失即请求失败。
    """

    def __init__(self, store: ConfigStore):
        self.store = store

    def resolve(
        self,
        style_slug: str,
        content_type: ContentType,
        concept_id: Optional[str] = None,
    ) -> EffectiveConfig:
        if content_type == ContentType.BOARD_TEMPLATE and concept_id:
            return self._resolve_concept(concept_id)
        return self._resolve_style(style_slug)

    def _resolve_concept(self, concept_id: str) -> EffectiveConfig:
        common = self.store.get_style(BOARD_COMMON_SLUG)
        if common is None:
            logger.error(f"共通风格不存在: {BOARD_COMMON_SLUG}")

        slug = concept_slug(concept_id)
        concept = self.store.get_style(slug)
        if concept is None:
            logger.error(f"概念配置不存在: {slug}")

        common_data = parse_payload(
            common.system_prompt if common else None, StylePayload, source=BOARD_COMMON_SLUG
        )
        concept_data = parse_payload(
            concept.system_prompt if concept else None, ConceptPayload, source=slug
        )

        config = self._from_style_payload(common_data)
        config.concept_mode = True
        config.style_id = common.id if common else None
        config.style_name = common.name if common else ""
        config.structured = True
        config.concept_name = concept.name if concept else ""
        config.concept_focus = concept_data.focus
        config.concept_tone = concept_data.tone
        config.concept_keywords = list(concept_data.example_keywords)
        config.base_templates = list(concept_data.base_templates)
        return config

    def _resolve_style(self, style_slug: str) -> EffectiveConfig:
        style = self.store.get_style(style_slug)
        if style is None:
            raise ConfigNotFoundError(style_slug)

        raw = style.system_prompt or ""
        if looks_like_json_object(raw):
            config = self._from_style_payload(parse_payload(raw, StylePayload, source=style_slug))
            config.structured = True
        else:
            config = EffectiveConfig()

        config.style_id = style.id
        config.style_name = style.name
        config.system_instruction = raw
        return config

    @staticmethod
    def _from_style_payload(payload: StylePayload) -> EffectiveConfig:
        return EffectiveConfig(
            rules=payload.rules,
            framework_sections=payload.sorted_sections(),
            tone_hints=payload.effective_tone(),
            dilemma_examples=list(payload.key_elements.dilemmas),
            technique_examples=list(payload.key_elements.techniques),
            vocabulary=payload.effective_vocabulary(),
            extra_sections=payload.extra_sections(),
        )
