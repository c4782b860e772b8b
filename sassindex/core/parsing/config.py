"""
Parsing configuration data structures.

Defines LanguageConfig -- the declaration patterns and file extensions
for one stylesheet language.

Design principle: New dialects are added via config, not code changes.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Pattern, Set


@dataclass
class LanguageConfig:
    """
    Configuration for indexing a specific stylesheet language.

    Attributes:
        name: Human-readable name (e.g., "Sass")
        language_id: Editor language id (e.g., "sass")
        extensions: File extensions this config handles (e.g., {'.sass'})
        variable_pattern: Regex matching a variable declaration
        mixin_pattern: Regex matching a mixin declaration
        mixin_keyword: Keyword stripped from a mixin match to get its signature
        include_keyword: Keyword used to invoke a mixin in inserted snippets
        max_file_size: Skip full scans of files larger than this (chars)
    """
    # Identity
    name: str
    language_id: str
    extensions: Set[str] = field(default_factory=set)

    # Declaration grammar
    variable_pattern: Optional[Pattern[str]] = None
    mixin_pattern: Optional[Pattern[str]] = None
    mixin_keyword: str = "@mixin"
    include_keyword: str = "@include"

    max_file_size: int = 1_000_000

    def __post_init__(self):
        if isinstance(self.variable_pattern, str):
            self.variable_pattern = re.compile(self.variable_pattern)
        if isinstance(self.mixin_pattern, str):
            self.mixin_pattern = re.compile(self.mixin_pattern)
