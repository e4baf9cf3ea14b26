"""
Test suite for prompt assembly.

Verifies message ordering, context truncation and question embedding.

System role: Verification of document chat prompt
"""

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from ragchat.core.prompt_builder import (
    MAX_CONTEXT_CHARS,
    SYSTEM_PROMPT,
    build_messages,
    truncate_context,
)
from ragchat.models.session import Turn


class TestBuildMessages:
    """Test suite for build_messages."""

    def test_empty_history_yields_system_then_question(self) -> None:
        # Act
        messages = build_messages([], "", "What is Docker?")

        # Assert
        assert len(messages) == 2
        assert isinstance(messages[0], SystemMessage)
        assert messages[0].content == SYSTEM_PROMPT
        assert isinstance(messages[1], HumanMessage)
        assert messages[1].content == "Question: What is Docker?"

    def test_history_is_kept_verbatim_between_system_and_question(self) -> None:
        # Arrange
        history = [
            Turn(role="user", content="What is the role?"),
            Turn(role="assistant", content="Backend engineer."),
        ]

        # Act
        messages = build_messages(history, "ctx", "What about the salary?")

        # Assert
        assert [type(m) for m in messages] == [SystemMessage, HumanMessage, AIMessage, HumanMessage]
        assert messages[1].content == "What is the role?"
        assert messages[2].content == "Backend engineer."
        assert messages[-1].content.endswith("Question: What about the salary?")

    def test_context_block_embedded_when_present(self) -> None:
        messages = build_messages([], "The salary is 100k.", "Salary?")

        content = messages[-1].content
        assert content.startswith("PDF content:\n```\nThe salary is 100k.\n```")
        assert content.index("The salary is 100k.") < content.index("Question: Salary?")

    def test_empty_context_omits_block(self) -> None:
        messages = build_messages([], "", "Hello?")
        assert "PDF content" not in messages[-1].content

    def test_none_context_treated_as_empty(self) -> None:
        messages = build_messages([], None, "Hello?")
        assert messages[-1].content == "Question: Hello?"

    def test_context_truncated_to_budget(self) -> None:
        # Arrange
        context = "x" * (MAX_CONTEXT_CHARS + 500)

        # Act
        messages = build_messages([], context, "q")

        # Assert
        assert messages[-1].content.count("x") == MAX_CONTEXT_CHARS

    def test_custom_budget(self) -> None:
        messages = build_messages([], "abcdefghij", "q", max_context_chars=4)
        assert "abcd\n```" in messages[-1].content
        assert "abcde" not in messages[-1].content

    def test_braces_in_context_and_question_are_literal(self) -> None:
        messages = build_messages([], '{"key": {value}}', "What is {this}?")

        assert '{"key": {value}}' in messages[-1].content
        assert "Question: What is {this}?" in messages[-1].content

    def test_deterministic(self) -> None:
        history = [Turn(role="user", content="a"), Turn(role="assistant", content="b")]
        first = build_messages(history, "ctx", "q")
        second = build_messages(history, "ctx", "q")
        assert [m.content for m in first] == [m.content for m in second]

    def test_does_not_mutate_history(self) -> None:
        history = [Turn(role="user", content="a"), Turn(role="assistant", content="b")]
        build_messages(history, "ctx", "q")
        assert len(history) == 2


class TestTruncateContext:
    """Test suite for truncate_context."""

    def test_short_context_unchanged(self) -> None:
        assert truncate_context("short") == "short"

    def test_none_becomes_empty(self) -> None:
        assert truncate_context(None) == ""
