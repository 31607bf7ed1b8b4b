## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from fractions import Fraction

import lark
from .errors import BasicLexError


BLANKS = ' \t'
DIGITS = '0123456789'

# Every accepted spelling of a statement keyword, mapped to its canonical form.
STATEMENT_SPELLINGS: dict[str, str] = {
    'PRINT': 'PRINT', 'PR': 'PRINT', 'P': 'PRINT', '?': 'PRINT',
    'INPUT': 'INPUT', 'IN': 'INPUT',
    'LET': 'LET', 'IF': 'IF', 'GOTO': 'GOTO', 'GOSUB': 'GOSUB', 'RETURN': 'RETURN',
    'END': 'END', 'REM': 'REM', 'LIST': 'LIST', 'RUN': 'RUN', 'CLEAR': 'CLEAR',
    'SAVE': 'SAVE', 'LOAD': 'LOAD', 'CLIPSAVE': 'CLIPSAVE', 'CLIPLOAD': 'CLIPLOAD',
    'BYE': 'BYE',
}

# Two-character relations in either order; the second character may follow blanks.
RELATION_PAIRS: dict[tuple[str, str], str] = {
    ('<', '>'): '<>', ('>', '<'): '<>',
    ('<', '='): '<=', ('=', '<'): '<=',
    ('>', '='): '>=', ('=', '>'): '>=',
}

SINGLE_CHARACTERS: dict[str, str] = {
    '+': 'ADD_OP', '-': 'ADD_OP', '*': 'MUL_OP', '/': 'MUL_OP',
    '(': '_LPAR', ')': '_RPAR', ',': '_COMMA',
}


def keyword_type(keyword: str) -> str:
    return '_' + keyword


class Scanner:
    """Single-use scanner over one physical input line."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.tokens: list[lark.Token] = []
        self.statement_expected = True

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else '\0'

    def _skip_blanks(self, pos: int) -> int:
        while pos < len(self.text) and self.text[pos] in BLANKS:
            pos += 1
        return pos

    def _emit(self, type_: str, value, start: int) -> None:
        self.tokens.append(lark.Token(type_, value, start_pos=start, line=1, column=start + 1,
                                      end_pos=self.pos, end_line=1, end_column=self.pos + 1))

    def _error(self, message: str, pos: int) -> BasicLexError:
        return BasicLexError(message, source=self.text, column=pos + 1, token=self.text[pos:pos+1])

    def match_spaced(self, spelling: str) -> int | None:
        """Match `spelling` case-insensitively at the current position, allowing blanks
        between its characters.  Returns the position just past the last matched
        character, or None.  Blanks after the final character are never consumed."""
        pos = self.pos
        for i, expected in enumerate(spelling):
            if i > 0:
                pos = self._skip_blanks(pos)
            if pos >= len(self.text) or self.text[pos].upper() != expected:
                return None
            pos += 1
        return pos

    def _match_statement_keyword(self) -> tuple[str, int] | None:
        best = None
        for spelling, keyword in STATEMENT_SPELLINGS.items():
            if (end := self.match_spaced(spelling)) is None:
                continue
            if best is None or len(spelling) > best[0]:
                best = (len(spelling), keyword, end)
        return best and best[1:]

    def scan(self) -> list[lark.Token]:
        self.pos = self._skip_blanks(0)
        if self._peek() in DIGITS:
            start = self.pos
            while self._peek() in DIGITS:
                self.pos += 1
            try:
                number = int(self.text[start:self.pos])
            except ValueError:
                raise self._error("Line number too large.", start) from None
            self._emit('LINE_NUMBER', number, start)

        while True:
            self.pos = self._skip_blanks(self.pos)
            if self.pos >= len(self.text): break
            if self.statement_expected and (found := self._match_statement_keyword()):
                self._keyword(*found)
            else:
                self._expression_token()

        self._emit('EOL', '', self.pos)
        return self.tokens

    def _keyword(self, keyword: str, end: int) -> None:
        start, self.pos = self.pos, end
        self._emit(keyword_type(keyword), keyword, start)
        self.statement_expected = keyword == 'THEN'
        if keyword == 'REM':
            start, self.pos = self.pos, len(self.text)
            self._emit('REMARK', self.text[start:], start)

    def _expression_token(self) -> None:
        start, ch = self.pos, self._peek()
        self.statement_expected = False

        if ch.isalpha():
            if (end := self.match_spaced('THEN')) is not None:
                return self._keyword('THEN', end)
            if not ch.isascii():
                raise self._error(f"Unexpected character `{ch}`.", start)
            self.pos += 1
            return self._emit('LETTER', ch.upper(), start)

        if ch in DIGITS or ch == '.':
            return self._number(start)

        if ch == '"':
            if (close := self.text.find('"', start + 1)) < 0:
                raise self._error("Unterminated string literal.", start)
            self.pos = close + 1
            return self._emit('STRING', self.text[start+1:close], start)

        if ch in '<>=':
            nxt = self._skip_blanks(start + 1)
            if (relation := RELATION_PAIRS.get((ch, self.text[nxt:nxt+1]))) is not None:
                self.pos = nxt + 1
                return self._emit('RELOP', relation, start)
            self.pos += 1
            return self._emit('EQUAL' if ch == '=' else 'RELOP', ch, start)

        if (type_ := SINGLE_CHARACTERS.get(ch)) is not None:
            self.pos += 1
            return self._emit(type_, ch, start)

        raise self._error(f"Unexpected character `{ch}`.", start)

    def _number(self, start: int) -> None:
        while self._peek() in DIGITS:
            self.pos += 1
        if self._peek() == '.':
            self.pos += 1
            while self._peek() in DIGITS:
                self.pos += 1
        literal = self.text[start:self.pos]
        if literal == '.':
            raise self._error("Expected digits in number.", start)
        try:
            value = Fraction(literal)
        except ValueError:
            # More digits than the interpreter converts from text.
            raise self._error("Number too large.", start) from None
        self._emit('NUMBER', value, start)


def tokenize(text: str) -> list[lark.Token]:
    """Split one input line into tokens, the last of which is always `EOL`."""
    return Scanner(text).scan()


class LineLexer(lark.lexer.Lexer):
    """Adapter handing the scanner's tokens to lark's LALR parser."""

    def __init__(self, lexer_conf):
        pass

    def lex(self, data):
        for token in tokenize(data):
            if token.type != 'EOL':
                yield token
