"""
生成服务 - 串联 配置解析 → 参考例抽样 → 提示词组装 → 模型调用 → 结果解析
"""
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from kotonoha.core import get_logger
from kotonoha.models import ComposedPrompt, GenerationRequest, GenerationResult
from kotonoha.models.generation import NO_TIP_SENTINEL
from kotonoha.services.config_resolver import ConfigResolver
from kotonoha.services.config_store import ConfigStore, get_config_store
from kotonoha.services.example_sampler import ExampleSampler
from kotonoha.services.llm_service import LLMService, get_llm_service
from kotonoha.services.prompt_composer import PromptComposer
from kotonoha.services.response_parser import parse_patterns

logger = get_logger(__name__)


class GenerationService:
    """
    生成流水线编排

    所有协作者通过构造函数注入；每次请求重新读取配置，不保留跨请求状态。
    ConfigNotFoundError / UpstreamError 直接向上抛出，其余降级在各组件内部消化。
    """

    def __init__(
        self,
        store: ConfigStore,
        llm_service: LLMService,
        sampler: Optional[ExampleSampler] = None,
        composer: Optional[PromptComposer] = None,
    ):
        self.resolver = ConfigResolver(store)
        self.sampler = sampler or ExampleSampler(store)
        self.composer = composer or PromptComposer()
        self.llm_service = llm_service

    def prepare(self, request: GenerationRequest) -> tuple[ComposedPrompt, str]:
        """
        调用模型之前的全部步骤

        Returns:
            (组装好的提示词, 实际注入的技巧文本)
        """
        logger.info(
            f"开始生成: style={request.style_slug}, type={request.content_type.value}, "
            f"concept={request.concept_id}, patterns={request.pattern_count}"
        )
        config = self.resolver.resolve(
            style_slug=request.style_slug,
            content_type=request.content_type,
            concept_id=request.concept_id,
        )
        material = self.sampler.sample(config, request.content_type)
        prompt = self.composer.compose(config, material, request)
        return prompt, material.tip_text

    def _build_result(
        self, request: GenerationRequest, completion: str, tip_text: str
    ) -> GenerationResult:
        patterns = parse_patterns(completion, expected_count=request.pattern_count)
        if len(patterns) != request.pattern_count:
            logger.warning(
                f"パターン数与请求不一致: requested={request.pattern_count}, parsed={len(patterns)}"
            )
        logger.info(f"生成完成: patterns={len(patterns)}")
        return GenerationResult(
            content=completion,
            patterns=patterns,
            model=self.llm_service.model_name,
            applied_tip=tip_text or NO_TIP_SENTINEL,
        )

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """同步执行完整流水线"""
        prompt, tip_text = self.prepare(request)
        completion = self.llm_service.complete(prompt.system_instruction, prompt.user_instruction)
        return self._build_result(request, completion, tip_text)

    async def agenerate(self, request: GenerationRequest) -> GenerationResult:
        """异步执行完整流水线；模型调用可被取消"""
        # 配置库读取是同步 IO，放到线程池里，不阻塞事件循环
        prompt, tip_text = await run_in_threadpool(self.prepare, request)
        completion = await self.llm_service.acomplete(
            prompt.system_instruction, prompt.user_instruction
        )
        return self._build_result(request, completion, tip_text)


# 全局单例
_generation_service: Optional[GenerationService] = None


def get_generation_service() -> GenerationService:
    """获取生成服务单例"""
    global _generation_service
    if _generation_service is None:
        _generation_service = GenerationService(
            store=get_config_store(),
            llm_service=get_llm_service(),
        )
    return _generation_service
