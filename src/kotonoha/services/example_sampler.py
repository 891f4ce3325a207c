"""
参考例抽样 - 为每次生成挑选最多 2 条参考例和 1 条写作技巧
"""
import random
from typing import Optional, Sequence

from kotonoha.core import get_logger
from kotonoha.models import (
    ContentType,
    EffectiveConfig,
    ReferenceDiary,
    ReferenceExample,
    SampledMaterial,
)
from kotonoha.services.config_store import ConfigStore

logger = get_logger(__name__)

MAX_EXAMPLES = 2
CONCEPT_TEMPLATE_CONTENT_TYPE = "board_temp"
BOARD_TIP_CATEGORY = "board_writing_tip"


def filter_by_base_templates(
    examples: Sequence[ReferenceDiary], base_templates: Sequence[str]
) -> list[ReferenceDiary]:
    """保留标题包含任一基础模板名的参考例"""
    names = [name for name in base_templates if name]
    return [ex for ex in examples if ex.title and any(name in ex.title for name in names)]


def sample_examples(
    pool: Sequence[ReferenceExample], rng: random.Random, k: int = MAX_EXAMPLES
) -> list[ReferenceExample]:
    """无放回均匀抽样，最多 k 条"""
    return rng.sample(list(pool), min(k, len(pool)))


def pick_tip(tips: Sequence[str], rng: random.Random) -> Optional[str]:
    """均匀随机挑一条技巧，候选为空时返回 None"""
    if not tips:
        return None
    return rng.choice(list(tips))


def format_examples(examples: Sequence[ReferenceExample]) -> str:
    """渲染为 参考例1、参考例2… 的文本块"""
    return "".join(
        f"\n=== 参考例{i} ===\nタイトル: {ex.title}\n{ex.body}\n"
        for i, ex in enumerate(examples, start=1)
    )


def format_tip(tip: Optional[str]) -> str:
    if not tip:
        return ""
    return f'【今回適用するテクニック】"{tip}"'


class ExampleSampler:
    """
    参考例抽样器

    随机性只存在于这里；rng 可注入，测试时传入固定种子
    """

    def __init__(self, store: ConfigStore, rng: Optional[random.Random] = None):
        self.store = store
        self.rng = rng or random.Random()

    def sample(self, config: EffectiveConfig, content_type: ContentType) -> SampledMaterial:
        examples = sample_examples(self._example_pool(config, content_type), self.rng)
        tip = pick_tip(self._tip_pool(config, content_type), self.rng)

        logger.info(f"参考例抽样完成: examples={len(examples)}, tip={'有' if tip else '无'}")
        return SampledMaterial(
            examples=examples,
            examples_text=format_examples(examples),
            tip=tip,
            tip_text=format_tip(tip),
        )

    def _example_pool(
        self, config: EffectiveConfig, content_type: ContentType
    ) -> list[ReferenceExample]:
        if config.concept_mode:
            candidates = filter_by_base_templates(
                self.store.list_examples(CONCEPT_TEMPLATE_CONTENT_TYPE),
                config.base_templates,
            )
        elif config.style_id is not None:
            candidates = self.store.list_examples(content_type.value, style_id=config.style_id)
        else:
            candidates = []
        return [ReferenceExample(title=ex.title, body=ex.body) for ex in candidates]

    def _tip_pool(self, config: EffectiveConfig, content_type: ContentType) -> list[str]:
        if content_type != ContentType.BOARD_TEMPLATE:
            return []

        tips = []
        if not config.concept_mode and config.style_id is not None:
            tips = self.store.list_tips(BOARD_TIP_CATEGORY, style_id=config.style_id)
        if not tips:
            # 风格没有专属技巧时退回全局技巧
            tips = self.store.list_tips(BOARD_TIP_CATEGORY)
        return [tip.content for tip in tips if tip.content]
