"""Prompt templates for selection edits and chat."""

from coeditor.core.models import ChatMessage, Instruction

# =============================================================================
# Edit Instructions
# =============================================================================

EDIT_SYSTEM_PROMPTS: dict[Instruction, str] = {
    Instruction.SHORTEN: (
        "Rewrite the selection to be more concise while preserving all key meaning "
        "and important details. Return only the revised text, no explanations."
    ),
    Instruction.EXPAND: (
        "Expand the selection with additional relevant details, examples, or context. "
        "Add 2-3 more sentences with valuable information. "
        "Return only the expanded text, no explanations."
    ),
    Instruction.PARAPHRASE: (
        "Rewrite the selection using different wording while maintaining the exact "
        "same meaning and tone. Return only the paraphrased text, no explanations."
    ),
    # The editor converts tables locally; this prompt only serves direct API callers.
    Instruction.TABLE: (
        "Convert the selection into a well-structured HTML table. If the text contains "
        "lists or key-value pairs, organize them logically with appropriate headers. "
        "Return only valid HTML table markup (table/thead/tbody/tr/th/td tags)."
    ),
}


def build_edit_prompt(selection: str, instruction: Instruction) -> str:
    """Build the user prompt for a selection edit."""
    return f'Selection:\n"""{selection}"""\n\nInstruction: {instruction.value}'


# =============================================================================
# Chat
# =============================================================================

CHAT_SYSTEM_PROMPT = """You are a helpful assistant. Always respond with detailed, informative content using semantic HTML only. Structure your response as:
- 2-3 substantial <p> paragraphs (3-4 sentences each) with comprehensive information
- A <ul> with 4-6 detailed <li> bullet points providing specific insights, facts, or actionable information
- No markdown syntax, just clean HTML tags
- Be thorough and provide valuable, detailed information"""

_ROLE_LABELS = {
    "assistant": "Assistant",
    "system": "System",
    "user": "User",
}


def build_chat_prompt(messages: list[ChatMessage]) -> str:
    """Render the conversation as a single prompt for the latest reply."""
    conversation = "\n".join(
        f"{_ROLE_LABELS.get(m.role, 'User')}: {m.content}" for m in messages
    )
    return (
        f"Conversation so far:\n{conversation}\n\n"
        "Respond to the latest message with comprehensive, detailed information "
        "using the required HTML structure."
    )
