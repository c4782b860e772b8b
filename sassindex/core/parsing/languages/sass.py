"""
Sass language configuration for declaration extraction.

Both dialects share one declaration grammar:

- variable: `$` followed by any non-whitespace run, then `:`
      $primary-color: #fff
- mixin: `@mixin`, optional space, a name token, optional space, an
  optional parenthesized argument list (matched permissively, not
  balanced)
      @mixin button($color, $size)

The patterns are kept exactly as editors already index them so stored
namespaces stay compatible.
"""

import re

from ..config import LanguageConfig


VARIABLE_PATTERN = re.compile(r"\${1}\S*:")
MIXIN_PATTERN = re.compile(r"@mixin ?\S+ ?\(?.*\)?")


SASS_CONFIG = LanguageConfig(
    name="Sass",
    language_id="sass",
    extensions={'.sass'},
    variable_pattern=VARIABLE_PATTERN,
    mixin_pattern=MIXIN_PATTERN,
)

SCSS_CONFIG = LanguageConfig(
    name="SCSS",
    language_id="scss",
    extensions={'.scss'},
    variable_pattern=VARIABLE_PATTERN,
    mixin_pattern=MIXIN_PATTERN,
)
