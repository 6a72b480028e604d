"""Pattern-based extraction of Java API structure.

The parser does not build a syntax tree. It finds declaration headers with
regular expressions, locates bodies by balanced-brace counting, and strips
nested declarations out of a body before looking for that body's own
members. Input it cannot make sense of simply yields nothing; no method
here raises on malformed source.
"""

from __future__ import annotations

import re
from typing import List, Optional

from ..models import JavaField, JavaMethod, JavaParameter, JavaType, ParsedJavaFile
from .patterns import (
    FIELD_PATTERN,
    IMPORT_PATTERN,
    METHOD_PATTERN,
    MODIFIER_KEYWORDS,
    NESTED_TYPE_PATTERN,
    PACKAGE_PATTERN,
    PARAMETER_ANNOTATION_PATTERN,
    STATEMENT_KEYWORDS,
    TOP_LEVEL_TYPE_PATTERN,
)
from .scanning import (
    comment_spans,
    find_matching_brace,
    in_spans,
    member_text,
    normalize_source,
    split_top_level,
)


class JavaSourceParser:
    """Turns Java source text into a :class:`ParsedJavaFile`."""

    def parse(self, content: str) -> ParsedJavaFile:
        text = normalize_source(content)
        result = ParsedJavaFile()
        spans = comment_spans(text)

        for match in PACKAGE_PATTERN.finditer(text):
            if not in_spans(match.start(), spans):
                result.package_name = match.group(1)
                break

        result.imports = [
            match.group(1)
            for match in IMPORT_PATTERN.finditer(text)
            if not in_spans(match.start(), spans)
        ]
        result.types = self._parse_top_level_types(text)
        return result

    def _parse_top_level_types(self, text: str) -> List[JavaType]:
        types: List[JavaType] = []
        spans = comment_spans(text)
        position = 0
        while True:
            match = TOP_LEVEL_TYPE_PATTERN.search(text, position)
            if match is None:
                break
            if in_spans(match.start("kind"), spans):
                position = match.start("kind") + 1
                continue

            java_type = self._type_from_header(match)
            body_start = match.end() - 1
            body_end = find_matching_brace(text, body_start)
            if body_end > body_start:
                self._populate_body(java_type, text[body_start + 1 : body_end])
                position = body_end + 1
            else:
                position = match.end()
            types.append(java_type)
        return types

    def _parse_nested_types(self, body: str) -> List[JavaType]:
        nested: List[JavaType] = []
        spans = comment_spans(body)
        position = 0
        while True:
            match = NESTED_TYPE_PATTERN.search(body, position)
            if match is None:
                break
            if in_spans(match.start("kind"), spans):
                position = match.start("kind") + 1
                continue

            java_type = self._type_from_header(match)
            body_start = match.end() - 1
            body_end = find_matching_brace(body, body_start)
            if body_end > body_start:
                self._populate_body(java_type, body[body_start + 1 : body_end])
                # Deeper types belong to this one, not to the caller.
                position = body_end + 1
            else:
                position = match.end()
            nested.append(java_type)
        return nested

    def _populate_body(self, java_type: JavaType, body: str) -> None:
        members = member_text(body)
        java_type.methods = self._parse_methods(members)
        java_type.nested_types = self._parse_nested_types(body)
        if java_type.is_class:
            java_type.fields = self._parse_fields(members)

    @staticmethod
    def _type_from_header(match: re.Match[str]) -> JavaType:
        kind = match.group("kind")
        implements = match.group("implements")
        return JavaType(
            name=match.group("name"),
            is_interface=kind == "interface",
            is_class=kind == "class",
            is_abstract=match.group("abstract") is not None,
            type_params=_squash(match.group("params")),
            extends_type=_squash(match.group("extends")),
            implements_types=split_top_level(implements) if implements else [],
            jsdoc=_clean(match.group("doc")),
        )

    def _parse_methods(self, members: str) -> List[JavaMethod]:
        methods: List[JavaMethod] = []
        spans = comment_spans(members)
        for match in METHOD_PATTERN.finditer(members):
            if in_spans(match.start("name"), spans):
                continue
            return_type = " ".join(match.group("return").split())
            # Constructors leave a modifier at the head of the captured return text.
            if return_type.split(" ", 1)[0] in MODIFIER_KEYWORDS or return_type in STATEMENT_KEYWORDS:
                continue
            methods.append(
                JavaMethod(
                    name=match.group("name"),
                    return_type=return_type,
                    parameters=self._parse_parameters(match.group("params")),
                    jsdoc=_clean(match.group("doc")),
                )
            )
        return methods

    def _parse_fields(self, members: str) -> List[JavaField]:
        fields: List[JavaField] = []
        spans = comment_spans(members)
        for match in FIELD_PATTERN.finditer(members):
            if in_spans(match.start("visibility"), spans):
                continue
            field_type = match.group("type").strip()
            if field_type in STATEMENT_KEYWORDS:
                continue
            fields.append(
                JavaField(
                    name=match.group("name"),
                    type=field_type,
                    jsdoc=_clean(match.group("doc")),
                )
            )
        return fields

    @staticmethod
    def _parse_parameters(params: str) -> List[JavaParameter]:
        parameters: List[JavaParameter] = []
        if not params or not params.strip():
            return parameters

        for part in split_top_level(params):
            part = PARAMETER_ANNOTATION_PATTERN.sub("", part)
            part = re.sub(r"^final\s+", "", part.strip())
            if not part:
                continue
            is_varargs = "..." in part
            part = part.replace("...", "[] ")
            # The name is the last token; everything before it is the type.
            pieces = part.rsplit(None, 1)
            if len(pieces) != 2:
                continue
            param_type, name = pieces
            parameters.append(
                JavaParameter(
                    name=name.strip(),
                    type=" ".join(param_type.split()),
                    is_varargs=is_varargs,
                )
            )
        return parameters


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _squash(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return " ".join(value.split()) or None


def parse_java_source(content: str) -> ParsedJavaFile:
    """Convenience wrapper around :class:`JavaSourceParser`."""
    return JavaSourceParser().parse(content)


__all__ = ["JavaSourceParser", "parse_java_source"]
