"""
Lexical analyzer for the tag-based template engine.

Splits the template source into literal text runs and <{ ... }> tags,
classifying each tag body by a fixed, ordered set of recognizers.
The lexer never fails: unterminated and unknown tags degrade to text.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Pattern, Tuple

from .tokens import Token, TokenKind, FOR_SEPARATOR

logger = logging.getLogger(__name__)

OPEN_DELIMITER = "<{"
CLOSE_DELIMITER = "}>"


class TemplateLexer:
    """
    Template lexer.

    Recognizes the following tags (the body is stripped before matching):
    - <{ if cond }>, <{ elseif cond }>, <{ else }>, <{ /if }>
    - <{ for item in list }>, <{ for i, item in list }>, <{ /for }>
    - <{ switch expr }>, <{ case expr }>, <{ default }>, <{ /switch }>
    - <{ name.path | "default" | filter }>
    """

    # Recognizers in priority order: (pattern, token kind)
    _TAG_PATTERNS: List[Tuple[Pattern[str], TokenKind]] = [
        (re.compile(r'^if\s+(.+)$', re.S), TokenKind.IF),
        (re.compile(r'^elseif\s+(.+)$', re.S), TokenKind.ELSEIF),
        (re.compile(r'^else$'), TokenKind.ELSE),
        (re.compile(r'^/if$'), TokenKind.ENDIF),
        (re.compile(r'^for\s+(.+?)\s+in\s+(.+)$', re.S), TokenKind.FOR),
        (re.compile(r'^/for$'), TokenKind.ENDFOR),
        (re.compile(r'^switch\s+(.+)$', re.S), TokenKind.SWITCH),
        (re.compile(r'^case\s+(.+)$', re.S), TokenKind.CASE),
        (re.compile(r'^default$'), TokenKind.DEFAULT),
        (re.compile(r'^/switch$'), TokenKind.ENDSWITCH),
    ]

    # name(.name)* followed by any number of "| segment"
    _VAR_PATTERN = re.compile(r'^(\w+(?:\.\w+)*)((?:\s*\|\s*(?:"[^"]*"|\w+))*)$')
    _PIPE_SEGMENT = re.compile(r'\|\s*("[^"]*"|\w+)')

    def __init__(self, text: str):
        """
        Initializes the lexer with the template source.

        Args:
            text: Template source text
        """
        self.text = text
        self.length = len(text)
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenizes the whole source.

        Returns:
            Flat list of tokens in source order
        """
        self.tokens = []
        position = 0

        while position < self.length:
            tag_start = self.text.find(OPEN_DELIMITER, position)
            if tag_start == -1:
                self._emit_text(self.text[position:], position)
                break

            if tag_start > position:
                self._emit_text(self.text[position:tag_start], position)

            body_start = tag_start + len(OPEN_DELIMITER)
            tag_end = self.text.find(CLOSE_DELIMITER, body_start)
            if tag_end == -1:
                # No closing delimiter: the rest of the source is literal text
                self._emit_text(self.text[tag_start:], tag_start)
                break

            inner_start = self.text.find(OPEN_DELIMITER, body_start, tag_end)
            if inner_start != -1:
                # Unclosed tag before another opening delimiter is literal text
                self._emit_text(self.text[tag_start:inner_start], tag_start)
                position = inner_start
                continue

            position = tag_end + len(CLOSE_DELIMITER)
            token = self._classify(self.text[body_start:tag_end], tag_start)
            if token is None:
                # Unknown tag stays in the output as written
                self._emit_text(self.text[tag_start:position], tag_start)
            else:
                self.tokens.append(token)

        logger.debug(f"Tokenized template of length {self.length} into {len(self.tokens)} tokens")
        return self.tokens

    def _emit_text(self, text: str, position: int) -> None:
        """Appends a TEXT token, merging it with a preceding TEXT token."""
        if not text:
            return
        if self.tokens and self.tokens[-1].kind == TokenKind.TEXT:
            previous = self.tokens[-1]
            self.tokens[-1] = Token(TokenKind.TEXT, previous.value + text, position=previous.position)
            return
        self.tokens.append(Token(TokenKind.TEXT, text, position=position))

    def _classify(self, body: str, position: int) -> Optional[Token]:
        """
        Classifies a tag body.

        Args:
            body: Text between the delimiters
            position: Offset of the opening delimiter

        Returns:
            Token for a recognized tag or None for an unknown one
        """
        tag = body.strip()

        for pattern, kind in self._TAG_PATTERNS:
            match = pattern.match(tag)
            if not match:
                continue
            if kind == TokenKind.FOR:
                value = match.group(1).strip() + FOR_SEPARATOR + match.group(2).strip()
            elif match.groups():
                value = match.group(1).strip()
            else:
                value = ""
            return Token(kind, value, raw=tag, position=position)

        return self._classify_variable(tag, position)

    def _classify_variable(self, tag: str, position: int) -> Optional[Token]:
        """
        Parses the variable grammar: path, optional quoted default, filters.

        The default literal, if present, must be the first pipe segment.
        """
        match = self._VAR_PATTERN.match(tag)
        if not match:
            return None

        default: Optional[str] = None
        filters: List[str] = []
        for index, segment in enumerate(self._PIPE_SEGMENT.findall(match.group(2))):
            if segment.startswith('"'):
                if index != 0:
                    logger.debug(f"Default literal must come before filters in tag '{tag}'")
                    return None
                default = segment[1:-1]
            else:
                filters.append(segment)

        return Token(
            TokenKind.VAR,
            match.group(1),
            default=default,
            raw=tag,
            filters=tuple(filters),
            position=position,
        )


def tokenize(text: str) -> List[Token]:
    """
    Convenience function for tokenizing a template.

    Args:
        text: Template source

    Returns:
        List of tokens
    """
    lexer = TemplateLexer(text)
    return lexer.tokenize()


__all__ = [
    "TemplateLexer",
    "tokenize",
    "OPEN_DELIMITER",
    "CLOSE_DELIMITER",
]
