"""
数据模型模块
"""
from .writing_style import WritingStyle
from .reference_diary import ReferenceDiary
from .knowledge_chunk import KnowledgeChunk
from .style_payload import (
    ConceptPayload,
    FrameworkSection,
    KeyElements,
    StylePayload,
    parse_payload,
)
from .generation import (
    ComposedPrompt,
    ContentType,
    EffectiveConfig,
    GenerationRequest,
    GenerationResult,
    Pattern,
    ReferenceExample,
    SampledMaterial,
)
from .suggestion import SuggestionRequest, SuggestionResult

__all__ = [
    "WritingStyle",
    "ReferenceDiary",
    "KnowledgeChunk",
    "ConceptPayload",
    "FrameworkSection",
    "KeyElements",
    "StylePayload",
    "parse_payload",
    "ComposedPrompt",
    "ContentType",
    "EffectiveConfig",
    "GenerationRequest",
    "GenerationResult",
    "Pattern",
    "ReferenceExample",
    "SampledMaterial",
    "SuggestionRequest",
    "SuggestionResult",
]
