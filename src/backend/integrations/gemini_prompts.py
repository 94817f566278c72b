"""Prompt templates for the Gemini content endpoints.

Deterministic string builders so they can be unit-tested without calling
Gemini. Unknown analysis/enhancement types fall back to a generic prompt
instead of failing.
"""

from __future__ import annotations

_ANALYSIS_PROMPTS: dict[str, str] = {
    "summary": "Please provide a concise summary of the following text:",
    "sentiment": (
        "Analyze the sentiment of the following text and classify it as positive, "
        "negative, or neutral. Provide a brief explanation:"
    ),
    "keywords": "Extract the main keywords and key phrases from the following text:",
    "improve": (
        "Please improve the following text by making it clearer, more concise, "
        "and better structured:"
    ),
}

_ENHANCEMENT_PROMPTS: dict[str, str] = {
    "improve": (
        "Improve the following text by making it more engaging, clear, and "
        "well-structured. Maintain the original meaning but enhance readability:"
    ),
    "expand": (
        "Expand the following text by adding more details, examples, and "
        "explanations while maintaining the original tone and structure:"
    ),
    "simplify": (
        "Simplify the following text to make it easier to understand while "
        "preserving all important information:"
    ),
    "professional": "Rewrite the following text in a more professional and formal tone:",
    "casual": "Rewrite the following text in a more casual and conversational tone:",
}

_LENGTH_GUIDES: dict[str, str] = {
    "short": "Keep it brief, around 200-300 words.",
    "medium": "Make it moderately detailed, around 500-800 words.",
    "long": "Create a comprehensive piece, around 1000-1500 words.",
}

ANALYSIS_TYPES = tuple(_ANALYSIS_PROMPTS)
ENHANCEMENT_TYPES = tuple(_ENHANCEMENT_PROMPTS)
LENGTHS = tuple(_LENGTH_GUIDES)


def build_analysis_prompt(text: str, analysis_type: str = "summary") -> str:
    instruction = _ANALYSIS_PROMPTS.get(analysis_type, "Analyze the following text:")
    return f"{instruction}\n\n{text}"


def build_enhancement_prompt(text: str, enhancement_type: str = "improve") -> str:
    instruction = _ENHANCEMENT_PROMPTS.get(enhancement_type, "Enhance the following text:")
    return f"{instruction}\n\n{text}"


def build_document_prompt(
    topic: str, content_type: str = "article", length: str = "medium"
) -> str:
    length_guide = _LENGTH_GUIDES.get(length, "Use appropriate length for the content.")
    return (
        f'Create a well-structured {content_type} about "{topic}". {length_guide}\n'
        "\n"
        "Please include:\n"
        "- A compelling title\n"
        "- Clear headings and subheadings\n"
        "- Well-organized content\n"
        "- A proper conclusion\n"
        "\n"
        "Format it as clean text that can be easily inserted into a Google Doc."
    )
