"""
服务模块
"""
from .llm_service import LLMService, get_llm_service
from .config_store import ConfigStore, get_config_store
from .config_resolver import ConfigResolver
from .example_sampler import ExampleSampler
from .prompt_composer import PromptComposer
from .response_parser import parse_patterns
from .generation_service import GenerationService, get_generation_service
from .suggestion_service import SuggestionService, get_suggestion_service

__all__ = [
    "LLMService",
    "get_llm_service",
    "ConfigStore",
    "get_config_store",
    "ConfigResolver",
    "ExampleSampler",
    "PromptComposer",
    "parse_patterns",
    "GenerationService",
    "get_generation_service",
    "SuggestionService",
    "get_suggestion_service",
]
