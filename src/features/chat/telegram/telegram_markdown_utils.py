import re

# https://core.telegram.org/bots/api#markdownv2-style
MARKDOWN_V2_SPECIAL_CHARS = "_*[]()~`>#+-=|{}.!"

__SPECIAL_PATTERN = re.compile(f"([{re.escape(MARKDOWN_V2_SPECIAL_CHARS)}\\\\])")


def escape_markdown_v2(text: str | None) -> str:
    """
    Escapes user input so it renders literally inside a MarkdownV2 message.
    Every special character (and the backslash itself) gets a leading backslash.
    """
    if not text:
        return ""
    return __SPECIAL_PATTERN.sub(r"\\\1", text)
