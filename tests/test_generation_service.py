"""
生成流水线编排测试
"""
import asyncio
import random
import threading

import pytest

from kotonoha.core.exceptions import ConfigNotFoundError, UpstreamError
from kotonoha.models import GenerationRequest, WritingStyle
from kotonoha.seed import seed_demo_data
from kotonoha.services.example_sampler import ExampleSampler
from kotonoha.services.generation_service import GenerationService

from conftest import FakeLLMService


def _service(store, llm, seed: int = 0) -> GenerationService:
    return GenerationService(
        store=store, llm_service=llm, sampler=ExampleSampler(store, random.Random(seed))
    )


def _request(**overrides) -> GenerationRequest:
    payload = {"contentType": "board_template", "selectedKeywords": ["カフェ"]}
    payload.update(overrides)
    return GenerationRequest.from_payload(payload)


def test_generate_with_seeded_concept(test_db, store, fake_llm) -> None:
    seed_demo_data(test_db)

    result = _service(store, fake_llm).generate(_request(conceptId="healing", patternCount=2))

    assert result.model == "fake/test-model"
    assert [p.title for p in result.patterns] == ["一つ目", "二つ目"]
    assert result.applied_tip.startswith("【今回適用するテクニック】")
    system, user = fake_llm.calls[0]
    assert "【今回のコンセプト: 癒しパートナー募集】" in system
    assert "癒しの時間を一緒に" in user


def test_missing_concept_still_produces_prompt(store, add_records, fake_llm) -> None:
    add_records(WritingStyle(slug="board_common", system_prompt="{}"))

    result = _service(store, fake_llm).generate(_request(conceptId="does-not-exist"))

    assert len(fake_llm.calls) == 1
    assert "【今回のコンセプト: 】" in fake_llm.calls[0][0]
    assert result.applied_tip == "なし"


def test_diary_without_tip_reports_none(test_db, store, fake_llm) -> None:
    seed_demo_data(test_db)

    result = _service(store, fake_llm).generate(_request(contentType="diary_logic"))

    assert result.applied_tip == "なし"
    assert "雨の日のカフェで" in fake_llm.calls[0][1]


def test_missing_style_fails_before_model_call(store, fake_llm) -> None:
    with pytest.raises(ConfigNotFoundError):
        _service(store, fake_llm).generate(_request(styleSlug="ghost", contentType="diary_logic"))

    assert fake_llm.calls == []


def test_upstream_error_propagates(store, add_records) -> None:
    add_records(WritingStyle(slug="pana_emotion", system_prompt="指示"))
    llm = FakeLLMService(error=UpstreamError("LLM API エラー: 500", status_code=500))

    with pytest.raises(UpstreamError):
        _service(store, llm).generate(_request())


def test_unformatted_completion_falls_back_to_single_pattern(store, add_records) -> None:
    add_records(WritingStyle(slug="pana_emotion", system_prompt="指示"))
    llm = FakeLLMService(completion="区切りのない文章")

    result = _service(store, llm).generate(_request())

    assert len(result.patterns) == 1
    assert result.patterns[0].title == "Pattern 1"
    assert result.content == "区切りのない文章"


def test_agenerate_matches_generate(store, add_records) -> None:
    add_records(WritingStyle(slug="pana_emotion", system_prompt="指示"))
    llm = FakeLLMService(completion="---パターン1---\nタイトル: 非同期\n\n本文")

    result = asyncio.run(_service(store, llm).agenerate(_request()))

    assert result.patterns[0].title == "非同期"


def test_prompt_is_stable_for_same_request(store, add_records) -> None:
    add_records(WritingStyle(slug="pana_emotion", system_prompt="指示"))
    service = _service(store, FakeLLMService(completion="x"))

    first, _ = service.prepare(_request())
    second, _ = service.prepare(_request())

    assert first == second


def test_to_response_shape(store, add_records, fake_llm) -> None:
    add_records(WritingStyle(slug="pana_emotion", system_prompt="指示"))

    response = _service(store, fake_llm).generate(_request(patternCount=2)).to_response()

    assert response["success"] is True
    assert response["patterns"][0].startswith("タイトル: 一つ目")
    assert response["structuredPatterns"][1] == {
        "approach": "提案型",
        "title": "二つ目",
        "content": "本文2",
    }
    assert response["appliedTip"] == "なし"


def test_json_base_style_tone_and_vocabulary_reach_the_model(store, add_records, fake_llm) -> None:
    add_records(
        WritingStyle(
            slug="pana_emotion",
            system_prompt='{"rules":"R","tone":"やさしく","vocabulary":["ぬくもり","寄り添う"]}',
        )
    )

    _service(store, fake_llm).generate(_request(contentType="diary_logic"))

    system, _ = fake_llm.calls[0]
    assert "やさしく" in system
    assert "ぬくもり、寄り添う" in system


class _ThreadRecordingStore:
    """记录配置库读取发生在哪个线程"""

    def __init__(self, store):
        self.store = store
        self.threads = []

    def get_style(self, slug):
        self.threads.append(threading.get_ident())
        return self.store.get_style(slug)

    def list_examples(self, *args, **kwargs):
        self.threads.append(threading.get_ident())
        return self.store.list_examples(*args, **kwargs)

    def list_tips(self, *args, **kwargs):
        self.threads.append(threading.get_ident())
        return self.store.list_tips(*args, **kwargs)


def test_agenerate_reads_config_off_the_event_loop(store, add_records) -> None:
    add_records(WritingStyle(slug="pana_emotion", system_prompt="指示"))
    recording = _ThreadRecordingStore(store)
    service = _service(recording, FakeLLMService(completion="本文"))

    loop_threads = []

    async def run():
        loop_threads.append(threading.get_ident())
        return await service.agenerate(_request())

    result = asyncio.run(run())

    assert result.content == "本文"
    assert recording.threads
    assert loop_threads[0] not in recording.threads
