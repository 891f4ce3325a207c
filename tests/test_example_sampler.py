"""
参考例抽样测试
"""
import random
from collections import Counter

from kotonoha.models import (
    ContentType,
    EffectiveConfig,
    KnowledgeChunk,
    ReferenceDiary,
    ReferenceExample,
    WritingStyle,
)
from kotonoha.services.example_sampler import (
    ExampleSampler,
    filter_by_base_templates,
    format_examples,
    format_tip,
    pick_tip,
    sample_examples,
)


def test_sample_examples_without_replacement_and_capped() -> None:
    pool = [ReferenceExample(title=f"t{i}", body="b") for i in range(10)]

    chosen = sample_examples(pool, random.Random(1))

    assert len(chosen) == 2
    assert len({ex.title for ex in chosen}) == 2


def test_sample_examples_small_pool() -> None:
    pool = [ReferenceExample(title="only", body="b")]

    assert sample_examples(pool, random.Random(0)) == pool
    assert sample_examples([], random.Random(0)) == []


def test_sample_examples_is_roughly_uniform() -> None:
    pool = [ReferenceExample(title=str(i), body="") for i in range(4)]
    rng = random.Random(42)
    counts = Counter()

    for _ in range(4000):
        for ex in sample_examples(pool, rng):
            counts[ex.title] += 1

    # 每个元素期望被选中 2000 次
    assert all(1800 < count < 2200 for count in counts.values())


def test_pick_tip() -> None:
    assert pick_tip([], random.Random(0)) is None
    assert pick_tip(["a"], random.Random(0)) == "a"


def test_format_examples_numbered_blocks() -> None:
    text = format_examples(
        [ReferenceExample(title="一", body="本文一"), ReferenceExample(title="二", body="本文二")]
    )

    assert text == (
        "\n=== 参考例1 ===\nタイトル: 一\n本文一\n"
        "\n=== 参考例2 ===\nタイトル: 二\n本文二\n"
    )


def test_format_tip() -> None:
    assert format_tip(None) == ""
    assert format_tip("短く") == '【今回適用するテクニック】"短く"'


def test_filter_by_base_templates() -> None:
    examples = [
        ReferenceDiary(title="癒しの時間", body="", content_type="board_temp"),
        ReferenceDiary(title="疑問から始める", body="", content_type="board_temp"),
        ReferenceDiary(title="", body="", content_type="board_temp"),
    ]

    matched = filter_by_base_templates(examples, ["癒し"])

    assert [ex.title for ex in matched] == ["癒しの時間"]
    assert filter_by_base_templates(examples, []) == []


def test_concept_mode_samples_matching_templates_and_global_tip(store, add_records) -> None:
    add_records(
        ReferenceDiary(title="癒しA", body="a", content_type="board_temp"),
        ReferenceDiary(title="癒しB", body="b", content_type="board_temp"),
        ReferenceDiary(title="癒しC", body="c", content_type="board_temp"),
        ReferenceDiary(title="別物", body="x", content_type="board_temp"),
        KnowledgeChunk(content="技1", category="board_writing_tip"),
    )
    config = EffectiveConfig(concept_mode=True, base_templates=["癒し"])

    material = ExampleSampler(store, random.Random(3)).sample(config, ContentType.BOARD_TEMPLATE)

    assert len(material.examples) == 2
    assert all(ex.title.startswith("癒し") for ex in material.examples)
    assert material.tip == "技1"
    assert material.tip_text == '【今回適用するテクニック】"技1"'
    assert "=== 参考例1 ===" in material.examples_text


def test_style_mode_filters_by_style_and_content_type(store, add_records) -> None:
    style, other = add_records(
        WritingStyle(slug="pana_emotion", system_prompt="x"),
        WritingStyle(slug="other", system_prompt="y"),
    )
    add_records(
        ReferenceDiary(title="日記", body="d", content_type="diary_logic", style_id=style.id),
        ReferenceDiary(title="掲示板", body="b", content_type="board_template", style_id=style.id),
        ReferenceDiary(title="他人の日記", body="o", content_type="diary_logic", style_id=other.id),
    )
    config = EffectiveConfig(style_id=style.id)

    material = ExampleSampler(store, random.Random(0)).sample(config, ContentType.DIARY_LOGIC)

    assert [ex.title for ex in material.examples] == ["日記"]
    # 日记模式不注入技巧
    assert material.tip is None
    assert material.tip_text == ""


def test_style_tips_preferred_then_global_fallback(store, add_records) -> None:
    style, other = add_records(
        WritingStyle(slug="pana_emotion", system_prompt="x"),
        WritingStyle(slug="other", system_prompt="y"),
    )
    add_records(KnowledgeChunk(content="全体技", category="board_writing_tip", style_id=other.id))
    sampler = ExampleSampler(store, random.Random(0))

    fallback = sampler.sample(EffectiveConfig(style_id=style.id), ContentType.BOARD_TEMPLATE)
    assert fallback.tip == "全体技"

    add_records(KnowledgeChunk(content="専用技", category="board_writing_tip", style_id=style.id))
    own = sampler.sample(EffectiveConfig(style_id=style.id), ContentType.BOARD_TEMPLATE)
    assert own.tip == "専用技"


def test_empty_pool_yields_empty_material(store) -> None:
    material = ExampleSampler(store).sample(
        EffectiveConfig(concept_mode=True, base_templates=["癒し"]), ContentType.BOARD_TEMPLATE
    )

    assert material.examples == []
    assert material.examples_text == ""
    assert material.tip is None
