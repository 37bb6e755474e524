"""Repair of over-escaped punctuation in model output."""

from dbchat.constants import OVER_ESCAPED_PUNCTUATION


def sanitize(text: str) -> str:
    """Remove backslashes the model puts in front of punctuation.

    The model sometimes emits LaTeX-style escapes such as ``\\!`` which are
    invalid in JSON. A whole run of backslashes before a punctuation mark is
    dropped, so applying this twice gives the same result as applying it once.

    Args:
        text: Raw text

    Returns:
        Text with the escapes removed
    """
    return OVER_ESCAPED_PUNCTUATION.sub(r"\1", text)
