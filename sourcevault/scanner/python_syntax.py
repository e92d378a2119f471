"""Syntax highlighting and significant code of Python files, from tokenize."""

import io
import keyword
import tokenize

from sourcevault.report.models import HighlightingType, LineSignificantCode, SyntaxHighlightingRule, TextRange
from sourcevault.utils.logging import logger

_NON_CODE_TOKENS = {
    tokenize.COMMENT,
    tokenize.NL,
    tokenize.NEWLINE,
    tokenize.INDENT,
    tokenize.DEDENT,
    tokenize.ENCODING,
    tokenize.ENDMARKER,
}

# f-strings are split into several tokens on Python 3.12+
_FSTRING_START = getattr(tokenize, "FSTRING_START", None)
_FSTRING_END = getattr(tokenize, "FSTRING_END", None)


class PythonSyntax:
    """Tokenizes one Python source text.

    Offsets follow the lines of the text, split the same way the report
    reader splits them.
    """

    def __init__(self, text: str):
        self.lines = [line.rstrip("\r\n") for line in io.StringIO(text, newline="")]

    def analyze(self, path: str) -> tuple[list[SyntaxHighlightingRule], list[LineSignificantCode]] | None:
        """Return highlighting rules and significant code spans, or None if the file does not tokenize."""
        try:
            tokens = list(tokenize.generate_tokens(io.StringIO("\n".join(self.lines)).readline))
        except (tokenize.TokenError, SyntaxError) as e:
            logger.warning(f"Cannot tokenize {path}, no highlighting produced: {e}")
            return None
        return self._highlighting(tokens), self._significant_code(tokens)

    def _highlighting(self, tokens: list[tokenize.TokenInfo]) -> list[SyntaxHighlightingRule]:
        rules = []
        fstring_starts = []
        previous = None
        for token in tokens:
            highlighting_type = None
            start, end = token.start, token.end

            if token.type == _FSTRING_START:
                fstring_starts.append(token.start)
            elif token.type == _FSTRING_END:
                start = fstring_starts.pop()
                if not fstring_starts:
                    highlighting_type = HighlightingType.HIGHLIGHTING_STRING
            elif fstring_starts:
                pass
            elif token.type == tokenize.STRING:
                highlighting_type = HighlightingType.HIGHLIGHTING_STRING
            elif token.type == tokenize.COMMENT:
                highlighting_type = HighlightingType.COMMENT
            elif token.type == tokenize.NUMBER:
                highlighting_type = HighlightingType.CONSTANT
            elif token.type == tokenize.NAME and keyword.iskeyword(token.string):
                highlighting_type = HighlightingType.KEYWORD
            elif token.type == tokenize.NAME and self._is_decorator(previous):
                highlighting_type = HighlightingType.ANNOTATION
                start = previous.start

            if highlighting_type is not None:
                text_range = self._clamp(start, end)
                if text_range is not None:
                    rules.append(SyntaxHighlightingRule(range=text_range, type=highlighting_type))
            previous = token
        return sorted(rules, key=lambda rule: rule.range.sort_key())

    def _significant_code(self, tokens: list[tokenize.TokenInfo]) -> list[LineSignificantCode]:
        spans: dict[int, tuple[int, int]] = {}
        for token in tokens:
            if token.type in _NON_CODE_TOKENS:
                continue
            (start_line, start_col), (end_line, end_col) = token.start, token.end
            for line in range(start_line, end_line + 1):
                if line > len(self.lines):
                    break
                first = start_col if line == start_line else 0
                last = end_col if line == end_line else len(self.lines[line - 1])
                last = min(last, len(self.lines[line - 1]))
                if line in spans:
                    first, last = min(first, spans[line][0]), max(last, spans[line][1])
                spans[line] = (first, last)
        return [
            LineSignificantCode(line=line, start_offset=first, end_offset=last)
            for line, (first, last) in sorted(spans.items())
            if first < last
        ]

    def _is_decorator(self, token: tokenize.TokenInfo | None) -> bool:
        if token is None or token.type != tokenize.OP or token.string != "@":
            return False
        line, col = token.start
        return not self.lines[line - 1][:col].strip()

    def _clamp(self, start: tuple[int, int], end: tuple[int, int]) -> TextRange | None:
        (start_line, start_col), (end_line, end_col) = start, end
        if end_line > len(self.lines):
            return None
        end_col = min(end_col, len(self.lines[end_line - 1]))
        if start_line == end_line and start_col >= end_col:
            return None
        return TextRange(start_line=start_line, start_offset=start_col, end_line=end_line, end_offset=end_col)
