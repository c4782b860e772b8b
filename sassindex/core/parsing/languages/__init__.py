"""
Language configurations for declaration extraction.

Supported languages:
- sass.py: Sass indented syntax (.sass) and SCSS (.scss)
"""

from .sass import SASS_CONFIG, SCSS_CONFIG, VARIABLE_PATTERN, MIXIN_PATTERN

__all__ = [
    'SASS_CONFIG',
    'SCSS_CONFIG',
    'VARIABLE_PATTERN',
    'MIXIN_PATTERN',
]
