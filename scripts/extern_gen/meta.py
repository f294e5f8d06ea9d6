"""
Declaration prelude and annotations shared by all extern kinds
"""

from typing import TYPE_CHECKING

from .codegen import CodeGen, escaped
from .headers import resolve_header_path

if TYPE_CHECKING:
    from .config import GeneratorConfig
    from .registry import TypeDescriptor


def gen_prelude(gen: CodeGen, descr: 'TypeDescriptor', config: 'GeneratorConfig'):
    """Autogeneration notice and package statement"""
    gen.comment(config.prelude)
    pack = descr.haxe_type.pack
    if pack:
        gen.line(f"package {'.'.join(pack)};")
        gen.line()


def gen_doc(gen: CodeGen, text: str):
    if text:
        gen.comment(text)


def gen_type_metas(gen: CodeGen, descr: 'TypeDescriptor', config: 'GeneratorConfig'):
    """@:umodule and @:glueCppIncludes

    Raises HeaderPathError if a header path cannot be resolved.
    """
    if descr.module:
        gen.line(f'@:umodule("{escaped(descr.module)}")')
    paths = [resolve_header_path(header, descr.package, config) for header in descr.headers]
    includes = ', '.join(f'"{escaped(path)}"' for path in dict.fromkeys(paths))
    gen.line(f'@:glueCppIncludes({includes})')
