"""Note-assistant actions built on a session controller"""

from typing import List

from .session_controller import SessionController


IMPROVE_TEMPLATE = (
    "Please improve the following note content by enhancing clarity, structure, "
    "and readability while preserving the original meaning and key information:\n\n"
    "{content}\n\n"
    "Please provide only the improved version without any additional commentary."
)

SUMMARIZE_TEMPLATE = (
    "Please provide a concise summary of the following note content, "
    "highlighting the key points and main ideas:\n\n"
    "{content}\n\n"
    "Please provide only the summary without any additional commentary."
)

GRAMMAR_TEMPLATE = (
    "Please fix any grammar, spelling, and punctuation errors in the following text "
    "while preserving the original meaning and style:\n\n"
    "{content}\n\n"
    "Please provide only the corrected version without any additional commentary."
)

TAGS_TEMPLATE = (
    "Generate relevant tags for this note content. "
    "Return only a comma-separated list of tags, no other text.\n\n"
    "{content}"
)

PROMPT_TEMPLATE = "Here is the context from my note:\n\n{content}\n\n{prompt}"

DEFAULT_NOTE_PROMPT = "Please help me with this content."


def parse_tags(text: str) -> List[str]:
    """Split a comma-separated reply into trimmed, non-empty tags"""
    return [tag.strip() for tag in text.split(",") if tag.strip()]


class NoteAssistant:
    """Fixed prompt templates for common note operations

    Every action is one submit() on the wrapped controller, so it shares
    the conversation history and token budget with free-form chat.
    """

    def __init__(self, controller: SessionController):
        self.controller = controller

    @staticmethod
    def _require(content: str, what: str = "Note content") -> str:
        if not content or not content.strip():
            raise ValueError(f"{what} is empty")
        return content

    async def improve_note(self, content: str) -> str:
        self._require(content)
        return await self.controller.submit(IMPROVE_TEMPLATE.format(content=content))

    async def summarize_note(self, content: str) -> str:
        self._require(content)
        return await self.controller.submit(SUMMARIZE_TEMPLATE.format(content=content))

    async def check_grammar(self, text: str) -> str:
        self._require(text, "Text")
        return await self.controller.submit(GRAMMAR_TEMPLATE.format(content=text))

    async def generate_tags(self, content: str) -> List[str]:
        self._require(content)
        reply = await self.controller.submit(TAGS_TEMPLATE.format(content=content))
        return parse_tags(reply)

    async def use_note_as_prompt(self, content: str, prompt: str = "") -> str:
        """Send a note as context together with a free-form prompt"""
        self._require(content)
        return await self.controller.submit(
            PROMPT_TEMPLATE.format(content=content, prompt=prompt or DEFAULT_NOTE_PROMPT)
        )
