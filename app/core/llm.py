"""
LLM Client Initialization.

Builds the chat model used by the AI reviewer.  Keeping this separate from
config.py avoids mixing configuration parsing with external-client setup.
The instance is created in the lifespan and injected, never imported as a
module global, so review cycles can run against a substitute model in tests.
"""

from langchain_openai import ChatOpenAI
from pydantic import SecretStr

from app.core.config import settings


def build_llm() -> ChatOpenAI:
    """
    Build the LLM instance.

    Low temperature keeps the PASS/FAIL verdict near-deterministic and the
    token budget only needs to cover the fixed-format reply.  Retries are
    disabled: a failed call degrades to a FAIL verdict instead.
    """
    return ChatOpenAI(
        api_key=SecretStr(settings.OPENAI_API_KEY),
        model=settings.OPENAI_MODEL,
        temperature=settings.OPENAI_TEMPERATURE,
        max_tokens=settings.OPENAI_MAX_TOKENS,
        timeout=settings.OPENAI_TIMEOUT_SECONDS,
        max_retries=0,
    )
