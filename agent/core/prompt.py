from __future__ import annotations

from langchain_core.prompts import PromptTemplate

from config.settings import DEFAULT_SYSTEM_PROMPT


SYSTEM_PROMPT = DEFAULT_SYSTEM_PROMPT

CHAT_PROMPT = PromptTemplate.from_template(
    "{system_prompt}\n\nUser: {message}\n\nAssistant:"
)


def build_prompt(message: str, system_prompt: str = SYSTEM_PROMPT) -> str:
    return CHAT_PROMPT.format(system_prompt=system_prompt, message=message)
