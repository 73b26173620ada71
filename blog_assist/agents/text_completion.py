"""Free-form text completion agent used by the authoring endpoints."""

from pydantic import BaseModel

from blog_assist.agents.base_agent import BaseAgent


class TextCompletionInput(BaseModel):
    """Fully rendered user prompt."""

    prompt: str


class TextCompletionAgent(BaseAgent[TextCompletionInput, str]):
    """Return the model's plain-text answer to a prepared prompt.

    Callers own the task wording and post-process the text themselves.
    """

    @property
    def system_prompt(self) -> str:
        return (
            "You are a writing assistant for a professional multi-brand blog. "
            "Follow the output format requested in each prompt exactly."
        )

    @property
    def output_type(self) -> type[str]:
        return str

    def _build_prompt(self, input_data: TextCompletionInput) -> str:
        return input_data.prompt

    async def complete(self, prompt: str) -> str:
        return await self.run(TextCompletionInput(prompt=prompt))
