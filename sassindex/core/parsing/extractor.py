"""
DeclarationExtractor -- Turns matched declaration text into symbol entries.

Pure functions: no store access, no state. Given a fragment (the text a
declaration pattern matched) and the declaring file's base name, build the
SymbolEntry and the LineRecord naming where its namespace was written.

Usage:
    from sassindex.core.parsing.extractor import create_mixin

    entry, record = create_mixin("@mixin button($color, $size)", "_mixins.sass", line=3)
    entry.insert   # "@include button({1:$color}, {2:$size})"
    entry.title    # "$button"
"""

import re
from functools import partial
from typing import Iterator, Optional, Tuple

from ..symbols import SymbolEntry, SymbolKind, LineRecord, make_namespace
from .config import LanguageConfig
from .languages import SASS_CONFIG


# A mixin parameter: sigil followed by an identifier
PARAMETER_PATTERN = re.compile(r"\$[\w-]+")

Extraction = Tuple[SymbolEntry, LineRecord]


def create_variable(fragment: str, basename: str, line: Optional[int] = None) -> Extraction:
    """
    Build the entry for a variable declaration.

    The name is the fragment up to (not including) the first colon.
    """
    name = fragment.split(':')[0]
    namespace = make_namespace(basename, name)
    entry = SymbolEntry(
        title=name,
        insert=name,
        detail=f"({name.replace('$', '', 1)}) - {basename} Variable.",
        kind=SymbolKind.VARIABLE,
    )
    return entry, LineRecord(line, namespace)


def create_mixin(
    fragment: str,
    basename: str,
    line: Optional[int] = None,
    config: LanguageConfig = SASS_CONFIG,
) -> Extraction:
    """
    Build the entry for a mixin declaration.

    The keyword is stripped to get the signature (name + optional
    parameter list). Each parameter is wrapped in a numbered snippet
    placeholder, in order of appearance, so the inserted include call can
    be tabbed through.
    """
    rep = fragment.replace(config.mixin_keyword, '', 1).strip()
    namespace = make_namespace(basename, rep)

    counter = 0

    def placeholder(match: 're.Match[str]') -> str:
        nonlocal counter
        counter += 1
        return f"{{{counter}:{match.group(0)}}}"

    entry = SymbolEntry(
        title=f"${rep.split('(')[0].strip()}",
        insert=f"{config.include_keyword} {PARAMETER_PATTERN.sub(placeholder, rep)}",
        detail=f"Include {rep} - {basename} Mixin.",
        kind=SymbolKind.MIXIN,
    )
    return entry, LineRecord(line, namespace)


def extract_line(
    text: str,
    basename: str,
    line: Optional[int] = None,
    config: LanguageConfig = SASS_CONFIG,
) -> Optional[Extraction]:
    """
    Extract the declaration on a single line, if any.

    Both patterns are tested independently. When both match, the mixin
    result wins since it is evaluated last. Only the matched text is fed
    to the creators so results agree with a full-file scan.
    """
    result = None

    var_match = config.variable_pattern.search(text)
    if var_match:
        result = create_variable(var_match.group(0), basename, line)

    mixin_match = config.mixin_pattern.search(text)
    if mixin_match:
        result = create_mixin(mixin_match.group(0), basename, line, config)

    return result


def iter_declarations(
    text: str,
    basename: str,
    config: LanguageConfig = SASS_CONFIG,
) -> Iterator[Extraction]:
    """
    Yield every declaration in a full text.

    All variables first, then all mixins: two independent passes over the
    same input text. Records carry the line the match starts on.
    """
    for pattern, create in (
        (config.variable_pattern, create_variable),
        (config.mixin_pattern, partial(create_mixin, config=config)),
    ):
        for match in pattern.finditer(text):
            line = text.count('\n', 0, match.start())
            yield create(match.group(0), basename, line)
