"""Fixed instructions sent ahead of every user message."""

SYSTEM_PROMPT = (
    "You are the company assistant, powered by Kimi. Answer clearly and "
    "concisely in the language of the question. Use markdown headings, "
    "bold text and bullet points where they help readability."
)

FILE_SYSTEM_PROMPT = (
    "You are a professional assistant. Use headings, bullets, and emojis "
    "to make answers clear and pleasant."
)

DEFAULT_FILE_QUESTION = "Summarise this document."


def file_question(question: str, file_id: str) -> str:
    """Embed a provider file reference after the user's question."""
    return f"{question}\n\n<file>{file_id}</file>"
