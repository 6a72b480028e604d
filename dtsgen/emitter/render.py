"""Rendering of parsed Java files as TypeScript declaration text."""

from __future__ import annotations

from typing import List, Optional

from ..models import JavaField, JavaMethod, JavaType, ParsedJavaFile
from ..parser.scanning import split_top_level
from .types import ConversionContext, TypeConverter

INDENT = "    "


def reindent_doc(jsdoc: Optional[str], indent: str) -> List[str]:
    """Re-indent a ``/** ... */`` block line by line without reparsing it."""
    if not jsdoc:
        return []
    lines: List[str] = []
    for line in jsdoc.split("\n"):
        trimmed = line.strip()
        if trimmed.startswith("*"):
            lines.append(f"{indent} {trimmed}")
        else:
            lines.append(f"{indent}{trimmed}")
    return lines


class DeclarationRenderer:
    """Produces the ``.d.ts`` text for one parsed Java file."""

    def __init__(self, converter: TypeConverter, *, header_title: str = "Java API") -> None:
        self.converter = converter
        self.header_title = header_title

    def render(self, parsed: ParsedJavaFile, current_path: str) -> str:
        lines: List[str] = [
            "/**",
            f" * Generated from Java file for {self.header_title}",
            f" * Package: {parsed.package_name}",
            " */",
            "",
        ]
        context = ConversionContext(parsed=parsed, current_path=current_path)
        for java_type in parsed.types:
            self._render_type(lines, java_type, context, "", None)
            lines.append("")
        return "\n".join(lines) + "\n"

    def _render_type(
        self,
        lines: List[str],
        java_type: JavaType,
        context: ConversionContext,
        indent: str,
        enclosing: Optional[str],
    ) -> None:
        """Append ``java_type`` and its namespace of nested types.

        ``enclosing`` is the name of the immediately enclosing type, or None
        at file level; a supertype spelled with that name stays a plain local
        reference instead of going through import resolution.
        """
        context = context.with_type_params(java_type.type_params)
        lines.extend(reindent_doc(java_type.jsdoc, indent))

        keyword = "export class" if java_type.is_class else "export interface"
        header = f"{indent}{keyword} {java_type.name}"
        if java_type.type_params:
            header += f"<{java_type.type_params}>"
        if java_type.extends_type:
            header += f" extends {self._supertypes(java_type.extends_type, enclosing, context, ', ')}"
        lines.append(header + " {")

        member_indent = indent + INDENT
        for method in java_type.methods:
            self._render_method(lines, method, context, member_indent)
        if java_type.is_class:
            for java_field in java_type.fields:
                self._render_field(lines, java_field, context, member_indent)
        lines.append(f"{indent}}}")

        if not java_type.nested_types:
            return

        if enclosing is None:
            lines.append("")
        lines.append(f"{indent}export namespace {java_type.name} {{")
        for nested in java_type.nested_types:
            if nested.is_marker:
                lines.extend(reindent_doc(nested.jsdoc, member_indent))
                alias = self._supertypes(nested.extends_type or "", java_type.name, context, " & ")
                lines.append(f"{member_indent}export type {nested.name} = {alias};")
            else:
                self._render_type(lines, nested, context, member_indent, java_type.name)
        lines.append(f"{indent}}}")

    def _supertypes(
        self,
        extends_type: str,
        enclosing: Optional[str],
        context: ConversionContext,
        separator: str,
    ) -> str:
        converted = []
        for supertype in split_top_level(extends_type):
            if enclosing is None:
                converted.append(self.converter.convert(supertype, context))
            else:
                converted.append(self.converter.convert_for_nested(supertype, enclosing, context))
        return separator.join(converted)

    def _render_method(
        self, lines: List[str], method: JavaMethod, context: ConversionContext, indent: str
    ) -> None:
        lines.extend(reindent_doc(method.jsdoc, indent))
        params = []
        for param in method.parameters:
            ts_type = self.converter.convert(param.type, context)
            if param.is_varargs:
                params.append(f"...{param.name}: {ts_type}")
            else:
                params.append(f"{param.name}: {ts_type}")
        return_type = self.converter.convert(method.return_type, context)
        lines.append(f"{indent}{method.name}({', '.join(params)}): {return_type};")

    def _render_field(
        self, lines: List[str], java_field: JavaField, context: ConversionContext, indent: str
    ) -> None:
        lines.extend(reindent_doc(java_field.jsdoc, indent))
        lines.append(f"{indent}{java_field.name}: {self.converter.convert(java_field.type, context)};")


__all__ = ["DeclarationRenderer", "INDENT", "reindent_doc"]
