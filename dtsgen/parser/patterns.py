"""Regular expressions and keyword tables used by the Java source parser."""

from __future__ import annotations

import re

# A single /** ... */ block; never runs past the first closing marker.
_DOC = r"(?P<doc>/\*\*(?:(?!\*/)[\s\S])*\*/\s*)?"
_ANNOTATIONS = r"(?:@\w+(?:\([^)]*\))?\s*)*"
# Type parameters with at most one level of nested angle brackets.
_TYPE_PARAMS = r"(?:<(?P<params>(?:[^<>]|<[^<>]*>)+)>)?"
_EXTENDS = r"(?:\s+extends\s+(?P<extends>[\w.<>,\s]+?))?"
_IMPLEMENTS = r"(?:\s+implements\s+(?P<implements>[\w.<>,\s]+?))?"

PACKAGE_PATTERN = re.compile(r"\bpackage\s+([\w.]+)\s*;")
IMPORT_PATTERN = re.compile(r"\bimport\s+([\w.*]+)\s*;")

TOP_LEVEL_TYPE_PATTERN = re.compile(
    _DOC
    + _ANNOTATIONS
    + r"\bpublic\s+(?:(?:(?P<abstract>abstract)|final|static|strictfp)\s+)*"
    + r"(?P<kind>interface|class)\s+(?P<name>\w+)"
    + _TYPE_PARAMS
    + _EXTENDS
    + _IMPLEMENTS
    + r"\s*\{"
)

NESTED_TYPE_PATTERN = re.compile(
    _DOC
    + _ANNOTATIONS
    + r"(?:(?:public|protected|private|static|(?P<abstract>abstract)|final|strictfp)\s+)*"
    + r"\b(?P<kind>interface|class)\s+(?P<name>\w+)"
    + _TYPE_PARAMS
    + _EXTENDS
    + _IMPLEMENTS
    + r"\s*\{"
)

# Headers whose bodies are cut out of a parent body before member matching.
EXCISED_DECLARATION_PATTERN = re.compile(
    _DOC
    + _ANNOTATIONS
    + r"(?:(?:public|protected|private|static|abstract|final|strictfp)\s+)*"
    + r"\b(?P<kind>interface|class|enum)\s+\w+[^{;]*\{"
)

METHOD_PATTERN = re.compile(
    _DOC
    + _ANNOTATIONS
    + r"(?:(?:public|protected|private|static|abstract|default|synchronized|final|native|strictfp)\s+)*"
    + r"(?:<(?:[^<>]|<[^<>]*>)+>\s+)?"
    + r"(?<!@)\b(?P<return>\w[\w.<>,?\[\]\s]*?)\s+(?P<name>\w+)\s*\((?P<params>(?:[^()]|\([^()]*\))*)\)"
    + r"\s*(?:throws\s+[\w.,\s]+?)?\s*;"
)

FIELD_PATTERN = re.compile(
    _DOC
    + _ANNOTATIONS
    + r"\b(?P<visibility>public|protected|private)\s+"
    + r"(?:(?:static|final|transient|volatile)\s+)*"
    + r"(?P<type>\w[\w.<>?\[\]]*(?:,\s*[\w.<>?\[\]]+)*)\s+(?P<name>\w+)\s*[;=]"
)

PARAMETER_ANNOTATION_PATTERN = re.compile(r"@\w+(?:\([^)]*\))?\s*")

LINE_COMMENT_OR_LITERAL_PATTERN = re.compile(
    r"(?P<block>/\*[\s\S]*?\*/)"
    r"|(?P<string>\"(?:\\.|[^\"\\\n])*\")"
    r"|(?P<char>'(?:\\.|[^'\\\n])*')"
    r"|(?P<line>//[^\n]*)"
)

# A captured "return type" equal to one of these is a constructor or a
# stray modifier, never a method.
MODIFIER_KEYWORDS = frozenset(
    {
        "public",
        "protected",
        "private",
        "abstract",
        "static",
        "final",
        "synchronized",
        "native",
        "strictfp",
    }
)

STATEMENT_KEYWORDS = frozenset(
    {
        "return",
        "if",
        "else",
        "for",
        "while",
        "switch",
        "case",
        "break",
        "continue",
        "throw",
        "try",
        "catch",
        "finally",
        "new",
        "this",
        "super",
    }
)


__all__ = [
    "EXCISED_DECLARATION_PATTERN",
    "FIELD_PATTERN",
    "IMPORT_PATTERN",
    "LINE_COMMENT_OR_LITERAL_PATTERN",
    "METHOD_PATTERN",
    "MODIFIER_KEYWORDS",
    "NESTED_TYPE_PATTERN",
    "PACKAGE_PATTERN",
    "PARAMETER_ANNOTATION_PATTERN",
    "STATEMENT_KEYWORDS",
    "TOP_LEVEL_TYPE_PATTERN",
]
