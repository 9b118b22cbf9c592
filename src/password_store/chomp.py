"""Trailing line-terminator trimming for text captured from the store CLI."""


def chomp(text: str) -> str:
    """Remove exactly one trailing line terminator (``\\r\\n``, ``\\n`` or ``\\r``)."""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n") or text.endswith("\r"):
        return text[:-1]
    return text
