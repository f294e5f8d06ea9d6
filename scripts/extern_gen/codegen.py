"""
Code generation utilities

Provides the text writer used by the emitters and helpers for Haxe
comments, string literals and identifiers.
"""

from typing import Optional

from .errors import ExternGenError


# Haxe reserved keywords; members named like these cannot be declared
HAXE_KEYWORDS = {
    'abstract', 'break', 'case', 'cast', 'catch', 'class', 'continue',
    'default', 'do', 'dynamic', 'else', 'enum', 'extends', 'extern',
    'false', 'final', 'for', 'function', 'if', 'implements', 'import',
    'in', 'inline', 'interface', 'macro', 'new', 'null', 'operator',
    'overload', 'override', 'package', 'private', 'public', 'return',
    'static', 'switch', 'this', 'throw', 'true', 'try', 'typedef',
    'untyped', 'using', 'var', 'while',
}


class CodeGen:
    """Code generation helper with indentation support

    Paired regions are kept on a stack: begin() writes the opening line and
    remembers the closing line, end() writes it back at the indentation the
    region was opened with.
    """

    def __init__(self, indent_str: str = '  '):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str: str = indent_str
        self._stack: list[tuple[str, bool]] = []

    def line(self, text: str = ''):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append('')

    def indent(self):
        """Increase indentation"""
        self._indent += 1

    def dedent(self):
        """Decrease indentation"""
        if self._indent > 0:
            self._indent -= 1

    def begin(self, header: str, footer: str = '}', indent: bool = True):
        """Open a paired region"""
        self.line(header)
        self._stack.append((footer, indent))
        if indent:
            self.indent()

    def end(self):
        """Close the innermost open region"""
        footer, indented = self._stack.pop()
        if indented:
            self.dedent()
        self.line(footer)

    @property
    def depth(self) -> int:
        """Number of open regions"""
        return len(self._stack)

    def block(self, header: str, footer: str = '}', indent: bool = True):
        """Context manager for code blocks"""
        return _BlockContext(self, header, footer, indent)

    def comment(self, text: str):
        """Add a doc comment"""
        self.line('/**')
        for text_line in text.replace('*/', '* /').splitlines():
            self.line(f'  {text_line}'.rstrip())
        self.line('**/')

    def extend(self, other: 'CodeGen'):
        """Append another buffer's lines at the current indentation"""
        for text in other._lines:
            self.line(text)

    def output(self) -> str:
        """Get generated code as string"""
        return '\n'.join(self._lines)


class _BlockContext:
    """Context manager for indented code blocks"""

    def __init__(self, gen: CodeGen, header: str, footer: str, indent: bool):
        self._gen = gen
        self._header = header
        self._footer = footer
        self._indent = indent

    def __enter__(self):
        self._gen.begin(self._header, self._footer, self._indent)
        return self

    def __exit__(self, *args):
        self._gen.end()


class ConditionalRegion:
    """Preprocessor region that is opened and closed as members require

    Example:
        #if WITH_EDITORONLY_DATA
        ...
        #end // WITH_EDITORONLY_DATA
    """

    def __init__(self, gen: CodeGen, guard: str):
        self._gen = gen
        self._guard = guard
        self._depth: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self._depth is not None

    def toggle(self, active: bool):
        """Make the region state match `active`"""
        if active and not self.is_open:
            self._gen.begin(f'#if {self._guard}', f'#end // {self._guard}', indent=False)
            self._depth = self._gen.depth
        elif not active and self.is_open:
            self.close()

    def close(self):
        if not self.is_open:
            return
        if self._gen.depth != self._depth:
            raise ExternGenError(f'unbalanced regions inside #if {self._guard}')
        self._gen.end()
        self._depth = None


def escaped(text: str) -> str:
    """Escape text for a double-quoted Haxe string"""
    return text.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n')


def is_valid_identifier(name: str) -> bool:
    """Check if a name can be declared as a Haxe field or argument"""
    return bool(name) and name.isidentifier() and name not in HAXE_KEYWORDS
