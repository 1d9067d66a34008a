"""
Lexer module for tokenizing clinic command scripts.

This module provides tokenization for the clinic command language,
handling quoted names, bracketed diagnoses, curly-braced drug types,
dates, times, dosages, frequencies and keywords.
"""

import re
from dataclasses import dataclass, field
from enum import Enum, auto


class TokenKind(Enum):
    """Token kinds for the clinic command lexer."""

    # Subjects
    PATIENT = auto()  # patient
    DRUG = auto()  # drug

    # Actions
    ADD = auto()  # add
    REMOVE = auto()  # remove
    EDIT = auto()  # edit
    REGISTER = auto()  # register
    STATUS = auto()  # status
    DIAGNOSE = auto()  # diagnose
    TREATMENT = auto()  # treatment
    TREATMENT_PERIOD = auto()  # to
    HELPCOMMANDS = auto()  # helpcommands

    # Literals
    PATIENT_NAME = auto()  # "Name_Surname"
    DATE = auto()  # dd/mm/yyyy
    DRUG_NAME = auto()  # "Paracetamol"
    DRUG_TYPE = auto()  # {pills}, {syrup}, {solution}, {candles}
    PATIENT_STATUS = auto()  # ASA-I .. ASA-VI
    DIAGNOSE_TEXT = auto()  # [free text written by the doctor]
    DOSAGE = auto()  # 500mg
    FREQUENCY = auto()  # "1 time per day", 2 times per day
    TIME = auto()  # 10:00


# Keywords mapping
KEYWORDS = {
    "patient": TokenKind.PATIENT,
    "drug": TokenKind.DRUG,
    "add": TokenKind.ADD,
    "remove": TokenKind.REMOVE,
    "edit": TokenKind.EDIT,
    "register": TokenKind.REGISTER,
    "status": TokenKind.STATUS,
    "diagnose": TokenKind.DIAGNOSE,
    "treatment": TokenKind.TREATMENT,
    "to": TokenKind.TREATMENT_PERIOD,
    "helpcommands": TokenKind.HELPCOMMANDS,
}

# Patterns for bare words that are not keywords, tried in order
WORD_PATTERNS = (
    (re.compile(r"^\d+mg$"), TokenKind.DOSAGE),
    (re.compile(r"^\d+ times? per day$"), TokenKind.FREQUENCY),
    (re.compile(r"^\d{2}:\d{2}$"), TokenKind.TIME),
    (re.compile(r"^[A-Z][A-Z0-9]*-[A-Z0-9]+$"), TokenKind.PATIENT_STATUS),
)

# Unquoted frequency phrase, matched at the cursor
FREQUENCY_PHRASE = re.compile(r"\d+ times? per day(?=\s|$)")

# Closing character for each delimited literal and the kind it yields
DELIMITED = {
    "[": ("]", TokenKind.DIAGNOSE_TEXT),
    "{": ("}", TokenKind.DRUG_TYPE),
}


@dataclass(frozen=True)
class Token:
    """Represents a single token from the lexer."""

    kind: TokenKind
    text: str
    # Source location, not part of token identity
    position: int = field(default=0, compare=False)
    line: int = field(default=1, compare=False)
    column: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, pos={self.position})"


class LexError(Exception):
    """Exception raised when a piece of input matches no lexical rule."""

    def __init__(
        self, message: str, word: str, position: int = 0, line: int = 1, column: int = 0
    ):
        self.word = word
        self.position = position
        self.line = line
        self.column = column
        super().__init__(f"{message} at line {line}, column {column}")


def classify_quoted(text: str) -> TokenKind:
    """
    Classify the content of a double-quoted string.

    The quotes carry no kind of their own, so the content decides:
    a leading digit makes a frequency, an underscore a patient name,
    anything else a drug name.

    Args:
        text: The string between the quotes

    Returns:
        The token kind for the quoted string
    """
    if text[:1].isdigit():
        return TokenKind.FREQUENCY
    if "_" in text:
        return TokenKind.PATIENT_NAME
    return TokenKind.DRUG_NAME


def classify_word(word: str) -> TokenKind | None:
    """Return the kind of a bare word, or None if no rule matches."""
    if word in KEYWORDS:
        return KEYWORDS[word]
    for pattern, kind in WORD_PATTERNS:
        if pattern.match(word):
            return kind
    return None


class CommandLexer:
    """
    Tokenizer for the clinic command language.

    Handles:
    - Keywords (patient, drug, add, ..., to, helpcommands)
    - Quoted strings, classified by content
    - Bracketed diagnose text [...] and curly-braced drug types {...}
    - Dates, times and dosages found by fixed-offset lookahead
    - Frequencies, quoted or as a bare phrase
    - Bare status codes
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 0
        # Trailing whitespace carries no tokens
        self.length = len(source.rstrip())

    def _current_char(self) -> str | None:
        """Return current character or None if at end."""
        if self.pos >= self.length:
            return None
        return self.source[self.pos]

    def _peek_char(self, offset: int = 1) -> str | None:
        """Peek at character at given offset from current position."""
        peek_pos = self.pos + offset
        if peek_pos >= self.length:
            return None
        return self.source[peek_pos]

    def _remaining(self) -> int:
        """Number of characters left to scan, including the current one."""
        return self.length - self.pos

    def _advance(self) -> str | None:
        """Advance position and return the character."""
        char = self._current_char()
        if char is not None:
            self.pos += 1
            if char == "\n":
                self.line += 1
                self.column = 0
            else:
                self.column += 1
        return char

    def _skip_whitespace(self) -> None:
        while self._current_char() is not None and self._current_char().isspace():
            self._advance()

    def _read_while(self, predicate) -> str:
        chars: list[str] = []
        while self._current_char() is not None and predicate(self._current_char()):
            chars.append(self._advance())  # type: ignore
        return "".join(chars)

    def _make_token(self, kind: TokenKind, text: str, start: tuple[int, int, int]) -> Token:
        position, line, column = start
        return Token(kind=kind, text=text, position=position, line=line, column=column)

    def _read_delimited(self, closing: str) -> str:
        """
        Read the text between an opening delimiter and ``closing``.

        A missing closing delimiter ends the literal at end of input.
        """
        self._advance()  # skip opening delimiter
        text = self._read_while(lambda char: char != closing)
        self._advance()  # skip closing delimiter, if any
        return text

    def _read_quoted(self) -> tuple[TokenKind, str]:
        """Read a double-quoted string and classify it."""
        text = self._read_delimited('"')
        return classify_quoted(text), text

    def _read_numeric(self) -> tuple[TokenKind, str] | None:
        """
        Read a digit-leading literal recognized by lookahead.

        Dates are found by '/' at offsets 2 and 5, times by ':' at offset 2,
        single-digit dosages by 'mg' at offsets 1 and 2. Each probe only runs
        when the input is long enough to hold the whole literal.

        Returns:
            The kind and text of the literal, or None to fall back to
            reading a plain word
        """
        remaining = self._remaining()

        if remaining >= 10 and self._peek_char(2) == "/" and self._peek_char(5) == "/":
            return TokenKind.DATE, self._read_while(lambda c: c.isdigit() or c == "/")

        if remaining >= 5 and self._peek_char(2) == ":":
            return TokenKind.TIME, self._read_while(lambda c: c.isdigit() or c == ":")

        if remaining >= 3 and self._peek_char(1) == "m" and self._peek_char(2) == "g":
            return TokenKind.DOSAGE, self._read_while(lambda c: c.isdigit() or c in "mg")

        match = FREQUENCY_PHRASE.match(self.source, self.pos, self.length)
        if match:
            for _ in range(match.end() - match.start()):
                self._advance()
            return TokenKind.FREQUENCY, match.group()

        return None

    def _read_word(self) -> Token:
        """Read a whitespace-delimited word and classify it."""
        start = (self.pos, self.line, self.column)
        word = self._read_while(lambda char: not char.isspace())
        kind = classify_word(word)
        if kind is None:
            raise LexError(f"Unknown word: {word!r}", word, *start)
        return self._make_token(kind, word, start)

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source string."""
        tokens: list[Token] = []

        while self.pos < self.length:
            self._skip_whitespace()

            if self.pos >= self.length:
                break

            char = self._current_char()
            start = (self.pos, self.line, self.column)

            # Quoted strings
            if char == '"':
                kind, text = self._read_quoted()
                tokens.append(self._make_token(kind, text, start))
                continue

            # Diagnose text and drug types
            if char in DELIMITED:
                closing, kind = DELIMITED[char]
                text = self._read_delimited(closing)
                tokens.append(self._make_token(kind, text, start))
                continue

            # Dates, times, dosages, frequencies
            if char.isdigit():
                literal = self._read_numeric()
                if literal is not None:
                    kind, text = literal
                    tokens.append(self._make_token(kind, text, start))
                    continue

            tokens.append(self._read_word())

        return tokens


def tokenize(source: str) -> list[Token]:
    """
    Tokenize a clinic command script.

    Args:
        source: The script text

    Returns:
        List of tokens in source order

    Raises:
        LexError: If a word matches no keyword or pattern, or a delimited
            literal is not closed
    """
    return CommandLexer(source).tokenize()
