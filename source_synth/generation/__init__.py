"""LLM fallback for source config generation (Ollama)."""

from source_synth.generation.config import GenerationConfig
from source_synth.generation.fallback import GenerativeFallbackClient, TextGenerator
from source_synth.generation.ollama_client import OllamaClient, OllamaError
from source_synth.generation.parsing import extract_json_text, parse_json_object

__all__ = [
    "GenerationConfig",
    "GenerativeFallbackClient",
    "OllamaClient",
    "OllamaError",
    "TextGenerator",
    "extract_json_text",
    "parse_json_object",
]
