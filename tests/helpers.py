"""Shared test doubles and constants."""

USER_ID = "user-1"
OTHER_USER_ID = "user-2"

FENCED_RESPONSE = (
    "```json\n"
    '{"title":"T","summary":"S","keyPoints":["a","b","c","d"],"tags":["x","y","z"]}'
    "\n```"
)


class FakeCompletionClient:
    """Completion client returning a canned response and recording prompts."""

    def __init__(self, response: str = FENCED_RESPONSE) -> None:
        self.response = response
        self.prompts: list[str] = []
        self.model = "fake-model"

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.response
