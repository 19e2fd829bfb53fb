"""Input validation utilities."""
import html
import re
import bleach


class ValidationError(Exception):
    """Raised when input validation fails."""
    pass


# Only harmless formatting survives in free-text fields; no CSS, no JavaScript
ALLOWED_TAGS = ['p', 'br', 'strong', 'em', 'u', 'ul', 'ol', 'li', 'blockquote']

# Start of a tag, end tag, comment or declaration as an HTML parser sees it
MARKUP = re.compile(r'<[/!?]?[a-zA-Z]|<!--')


def sanitize_html(text):
    """Strip everything but a small allow-list of tags using bleach.

    Text without markup is stored exactly as given, so ``Noise > 85 dB & dust``
    keeps its literal ``>`` and ``&``. When every tag is stripped the entities
    bleach introduced are decoded again; a fragment that keeps allowed tags is
    returned as HTML.
    """
    if not text or not MARKUP.search(text):
        return text

    cleaned = bleach.clean(text, tags=ALLOWED_TAGS, attributes={}, strip=True)
    if MARKUP.search(cleaned):
        return cleaned

    plain = html.unescape(cleaned)
    # Escaped markup in the input must not come back to life
    return cleaned if MARKUP.search(plain) else plain


def format_pydantic_errors(exc):
    """Turn a pydantic ``ValidationError`` into one field-specific message.

    Missing, null and blank values read ``<field> is required``; every other failure
    keeps pydantic's own wording prefixed with the field path. Messages are
    joined with ``; `` in the order pydantic reports them.
    """
    messages = []
    for error in exc.errors():
        field = '.'.join(str(part) for part in error['loc']) or 'body'
        blank = isinstance(error.get('input'), str) and not error['input'].strip()
        if error['type'] in ('missing', 'string_too_short') or error.get('input', 0) is None or blank:
            message = f"{field} is required"
        else:
            message = f"{field}: {error['msg']}"
        if message not in messages:
            messages.append(message)
    return '; '.join(messages)
