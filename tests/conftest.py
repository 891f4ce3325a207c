"""
测试配置
"""
import os
import sys
import pytest

# 添加 src 目录到 Python 路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

# 设置测试环境变量（必须在导入 kotonoha 之前）
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPENAI_API_KEY"] = "test-key"


class FakeLLMService:
    """替代真实模型调用，记录收到的提示词"""

    model_name = "fake/test-model"

    def __init__(self, completion: str = "", error: Exception = None):
        self.completion = completion
        self.error = error
        self.calls = []

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if self.error:
            raise self.error
        return self.completion

    async def acomplete(self, system_prompt: str, user_prompt: str) -> str:
        return self.complete(system_prompt, user_prompt)


@pytest.fixture
def test_db():
    """测试数据库 fixture"""
    from sqlmodel import SQLModel
    from kotonoha.core.database import build_engine, create_tables

    engine = build_engine("sqlite://")
    create_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def store(test_db):
    from kotonoha.services.config_store import ConfigStore

    return ConfigStore(test_db)


@pytest.fixture
def add_records(test_db):
    """向测试库写入记录，返回刷新后的对象"""
    from sqlmodel import Session

    def _add(*records):
        with Session(test_db) as session:
            session.add_all(records)
            session.commit()
            for record in records:
                session.refresh(record)
        return records

    return _add


@pytest.fixture
def fake_llm():
    return FakeLLMService(
        completion="---パターン1---\nタイトル: 一つ目\n\n本文1\n\n---パターン2---\nタイトル: 二つ目\n\n本文2"
    )
