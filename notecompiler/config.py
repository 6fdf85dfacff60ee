"""
Tunables for both compilers.

Defaults reproduce the published slide rules (6 list items, 150 words per
slide, image-text under 50 words, subtitle up to 30 words). A JSON file of
partial overrides can be loaded with ``load_config``.
"""

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

from .exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompilerConfig:
    # Chunking
    max_list_items: int = 6
    max_words: int = 150

    # Slide classification thresholds
    image_text_max_words: int = 50  # exclusive
    subtitle_max_words: int = 30  # inclusive
    continued_suffix: str = " (continued)"

    # End slide
    site_domain: str = "goos.io"

    # BeautifulSoup tree builder for the DOM paths
    dom_parser: str = "lxml"

    # src substrings that mark an image as content-width
    narrow_image_patterns: tuple[str, ...] = ("icon", "logo", "avatar", "profile", "thumb")

    def __post_init__(self):
        for name in ("max_list_items", "max_words", "image_text_max_words", "subtitle_max_words"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise ConfigError(f"{name} must be a positive integer", {name: value})


DEFAULT_CONFIG = CompilerConfig()


def load_config(path: Optional[str]) -> CompilerConfig:
    """Load a CompilerConfig from a JSON file of partial overrides."""
    if not path:
        return DEFAULT_CONFIG

    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigError(f"Cannot read config file: {e}", {"path": str(p)}) from e

    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a JSON object", {"path": str(p)})

    known = {f.name for f in fields(CompilerConfig)}
    overrides = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown config key %r in %s", key, p)
            continue
        if key == "narrow_image_patterns":
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(
                    "narrow_image_patterns must be a list of strings",
                    {"path": str(p), "value": value},
                )
            value = tuple(value)
        overrides[key] = value

    return replace(DEFAULT_CONFIG, **overrides)
