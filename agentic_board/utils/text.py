"""Text helpers shared by agents and the operator surface."""

ELLIPSIS = "..."


def summarize_content(content: str, max_length: int = 200) -> str:
    """
    One-line summary of an artifact: its first non-blank line, trimmed.

    Lines longer than max_length keep their first max_length - 3 characters
    followed by "...", so the result is exactly max_length long.

    Args:
        content: Full artifact text
        max_length: Maximum summary length, including the ellipsis

    Returns:
        The summary, or "" if the content has no non-blank line
    """
    if max_length <= len(ELLIPSIS):
        raise ValueError(f"max_length must be greater than {len(ELLIPSIS)}, got {max_length}")

    first_line = next((line for line in content.splitlines() if line.strip()), "")
    trimmed = first_line.strip()
    if len(trimmed) <= max_length:
        return trimmed
    return trimmed[:max_length - len(ELLIPSIS)] + ELLIPSIS


def preview(text: str, limit: int = 100) -> str:
    """Short single-line preview for log messages."""
    flat = " ".join(text.split())
    return flat if len(flat) <= limit else f"{flat[:limit]}..."
