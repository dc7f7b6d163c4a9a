"""Comment content sanitization."""

import html

# Attribute-free formatting tags that survive sanitization
ALLOWED_TAGS = (
    "b",
    "i",
    "em",
    "strong",
    "code",
    "pre",
    "br",
    "p",
    "ul",
    "ol",
    "li",
    "blockquote",
)


def sanitize(content: str) -> str:
    """Sanitize comment content to prevent XSS.

    - Escapes all HTML entities
    - Re-enables the bare allowed formatting tags
    - Anything with attributes (``<b onclick=...>``) stays escaped
    """
    escaped = html.escape(content, quote=False)

    for tag in ALLOWED_TAGS:
        escaped = escaped.replace(f"&lt;{tag}&gt;", f"<{tag}>")
        escaped = escaped.replace(f"&lt;/{tag}&gt;", f"</{tag}>")
    escaped = escaped.replace("&lt;br/&gt;", "<br/>")

    return escaped
