"""Text normalization shared by both tokenizer backends."""

# Elements whose end marks a line break in extracted text
BLOCK_BREAK_TAGS = (
    "p",
    "div",
    "li",
    "dt",
    "dd",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "blockquote",
    "figcaption",
    "pre",
    "tr",
)


def normalize_text(text: str) -> str:
    """Collapse runs of whitespace per line and drop blank lines."""
    lines = (" ".join(line.split()) for line in text.split("\n"))
    return "\n".join(line for line in lines if line)


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def word_count(text: str) -> int:
    return len(text.split())
