"""Tests for the chat responder."""

import pytest

from llm.base import LLMError
from llm.prompts.chat import CHAT_SYSTEM_PROMPT, TRUNCATION_MARKER
from services.chat import ChatGenerationError, ChatResponder, MissingInputError
from services.types import Completion, DocumentContext


class TestChatResponder:
    """Tests for ChatResponder."""

    @pytest.fixture(autouse=True)
    def setup(self, mock_llm):
        """Set up test fixtures."""
        self.llm = mock_llm
        self.llm.generate.return_value = Completion(
            text="  Your white cell count is slightly high.  ", finish_reason="stop"
        )
        self.responder = ChatResponder(llm=mock_llm, context_max_chars=50)

    def test_grounded_prompt(self):
        """Test the grounded prompt includes filename, text and message."""
        context = DocumentContext(text="WBC 11.2 HIGH", filename="cbc.pdf")

        prompt = self.responder.build_prompt("Is my WBC normal?", context)

        assert "cbc.pdf" in prompt
        assert "WBC 11.2 HIGH" in prompt
        assert "Is my WBC normal?" in prompt

    def test_grounded_prompt_truncates_long_document(self):
        """Test exactly context_max_chars characters are kept, then the marker."""
        context = DocumentContext(text="\u2603" * 80 + "TAIL", filename="long.pdf")

        prompt = self.responder.build_prompt("Summarize", context)

        document = "\u2603" * 50 + TRUNCATION_MARKER
        assert f"DOCUMENT TEXT:\n{document}\n\nWhen answering" in prompt
        assert prompt.count("\u2603") == 50
        assert "TAIL" not in prompt

    def test_document_at_cap_is_kept_whole(self):
        """Test a document of exactly context_max_chars is not cut."""
        context = DocumentContext(text="y" * 50, filename="exact.pdf")

        prompt = self.responder.build_prompt("Summarize", context)

        assert f"DOCUMENT TEXT:\n{'y' * 50}\n\nWhen answering" in prompt
        assert TRUNCATION_MARKER not in prompt

    def test_short_document_is_not_marked(self):
        """Test the marker only appears when text was cut."""
        context = DocumentContext(text="short", filename="a.pdf")
        assert TRUNCATION_MARKER not in self.responder.build_prompt("hi", context)

    def test_general_prompt(self):
        """Test the general prompt is used without a document."""
        prompt = self.responder.build_prompt("What is LDL?", None)
        assert "What is LDL?" in prompt
        assert "cbc.pdf" not in prompt

    @pytest.mark.asyncio
    async def test_respond_returns_stripped_text(self):
        """Test a single LLM call with the chat system prompt."""
        answer = await self.responder.respond("Is my WBC normal?", None)

        assert answer == "Your white cell count is slightly high."
        self.llm.generate.assert_awaited_once()
        assert self.llm.generate.call_args.args[1] == CHAT_SYSTEM_PROMPT

    @pytest.mark.asyncio
    async def test_respond_missing_message(self):
        """Test blank messages are rejected without calling the LLM."""
        for message in (None, "", "   "):
            with pytest.raises(MissingInputError):
                await self.responder.respond(message, None)
        self.llm.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_respond_blocked(self):
        """Test an empty blocked reply raises with the finish reason."""
        self.llm.generate.return_value = Completion(text=None, finish_reason="refusal")

        with pytest.raises(ChatGenerationError) as exc_info:
            await self.responder.respond("hello", None)

        assert exc_info.value.finish_reason == "refusal"
        assert "refusal" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_respond_empty_reply(self):
        """Test an empty unblocked reply raises."""
        self.llm.generate.return_value = Completion(text="", finish_reason="stop")

        with pytest.raises(ChatGenerationError, match="empty response"):
            await self.responder.respond("hello", None)

    @pytest.mark.asyncio
    async def test_respond_propagates_llm_errors(self):
        """Test transport failures reach the caller."""
        self.llm.generate.side_effect = LLMError("down")

        with pytest.raises(LLMError):
            await self.responder.respond("hello", None)
