"""Format retrieved sources as a prompt-ready context block."""

from .contracts import RetrievedSource

CONTEXT_HEADER = "Web search results:"


def format_sources_as_context(sources: list[RetrievedSource]) -> str:
    """
    Build the context block handed to the language model.

    Layout: a header line, then per source a blank line, a
    `[Source N: title](url)` line and the source content.

    Args:
        sources: Retrieved sources, in the order they should be numbered

    Returns:
        Formatted block, or "" when there are no sources
    """
    if not sources:
        return ""

    lines = [CONTEXT_HEADER]
    for idx, source in enumerate(sources, start=1):
        lines.append("")
        lines.append(f"[Source {idx}: {source.title}]({source.url})")
        lines.append(source.content)

    return "\n".join(lines)

