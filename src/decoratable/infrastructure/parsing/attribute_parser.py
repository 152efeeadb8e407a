"""Attribute parser: member metadata text -> ordered decorator references.

Grammar of one clause (KEYWORD is SetDecorator, GetDecorator or Decorator):

    KEYWORD = @ref
    KEYWORD = [@ref, @ref(args), ...]
    KEYWORD = {@ref, @ref(args), ...}

    ref  := @identifier(.identifier)*
    args := any text without "(", ")" or "@", kept unparsed

The keyword must not follow an identifier character or '.', so searching
for ``Decorator =`` never captures ``SetDecorator =``. A single reference
must not run on into an identifier or an unclosed "(", so malformed text
such as ``@count(3`` is ambiguous rather than truncated to ``@count``.
"""

from __future__ import annotations

import re
from functools import cache

from loguru import logger

from decoratable.domain.exceptions import ParseAmbiguityError
from decoratable.domain.model.enums import Kind
from decoratable.domain.model.spec import DecoratorSpec, ParsedAttribute

_REFERENCE = r"@(?P<name>[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)(?:\((?P<args>[^()@]*)\))?"
_REFERENCE_BARE = r"@[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*(?:\([^()@]*\))?"
_LIST_BODY = rf"\s*{_REFERENCE_BARE}(?:\s*,\s*{_REFERENCE_BARE})*\s*"

_REFERENCE_RE = re.compile(_REFERENCE)


@cache
def _clause_re(keyword: str) -> re.Pattern[str]:
    """Compiled clause pattern for one keyword."""
    expr = rf"{_REFERENCE_BARE}(?!\w|\.\w|\s*\()|\[{_LIST_BODY}\]|\{{{_LIST_BODY}\}}"
    return re.compile(rf"(?<![\w.]){keyword}\s*=\s*(?P<expr>{expr})")


@cache
def _mention_re(keyword: str) -> re.Pattern[str]:
    """Pattern detecting that a keyword is mentioned at all."""
    return re.compile(rf"(?<![\w.]){keyword}\s*=")


class AttributeParser:
    """Extracts decorator references of one kind from member metadata.

    Stateless parser - no state between parse() calls.

    Text with zero or several clauses for the keyword yields no references.
    When the keyword is mentioned but no unique clause is found, a warning
    is logged, or ParseAmbiguityError is raised if strict.
    """

    __slots__ = ("_strict",)

    def __init__(self, *, strict: bool = False) -> None:
        """Initialize parser.

        Args:
            strict: Raise on ambiguous text instead of ignoring it
        """
        self._strict = strict

    @property
    def strict(self) -> bool:
        """True if ambiguous text raises."""
        return self._strict

    def parse(self, text: str, kind: Kind) -> tuple[DecoratorSpec, ...]:
        """Parse the decorator references for a kind.

        Args:
            text: Free-text member metadata
            kind: Kind selecting the keyword

        Returns:
            References in source order (empty if none)

        Raises:
            TypeError: If text is not a string (FAIL-FIRST)
            ParseAmbiguityError: If strict and the text is ambiguous
        """
        if not isinstance(text, str):
            raise TypeError(f"text must be str, got {type(text).__name__}")

        keyword = kind.keyword
        matches = list(_clause_re(keyword).finditer(text))
        if len(matches) != 1:
            if _mention_re(keyword).search(text):
                self._ambiguous(keyword, text, len(matches))
            return ()

        expr = matches[0].group("expr")
        return tuple(
            DecoratorSpec(
                reference_name=ref.group("name"),
                raw_args_text=(ref.group("args") or "").strip(),
            )
            for ref in _REFERENCE_RE.finditer(expr)
        )

    def parse_member(self, member: str, text: str, kind: Kind) -> ParsedAttribute | None:
        """Parse one (member, kind) into a ParsedAttribute.

        Returns:
            ParsedAttribute, or None if the member is undecorated for kind
        """
        specs = self.parse(text, kind)
        if not specs:
            return None
        return ParsedAttribute(member=member, kind=kind, specs=specs)

    def _ambiguous(self, keyword: str, text: str, matches: int) -> None:
        """Report a keyword that has no unique clause."""
        if self._strict:
            raise ParseAmbiguityError(keyword=keyword, text=text, matches=matches)
        logger.warning(
            "Ignoring {} in {!r}: {} clauses found, expected exactly 1",
            keyword,
            text,
            matches,
        )
