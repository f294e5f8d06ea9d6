"""
Enum declaration module

Generates extern enums.
"""

from typing import TYPE_CHECKING

from .codegen import CodeGen, escaped
from .meta import gen_prelude, gen_doc, gen_type_metas

if TYPE_CHECKING:
    from .config import GeneratorConfig
    from .ir import NativeEnumValue
    from .registry import EnumDescriptor


class EnumGenerator:
    """Generates enum declarations"""

    def __init__(self, config: 'GeneratorConfig'):
        self.config = config

    def generate(self, descr: 'EnumDescriptor', gen: CodeGen):
        """Generate an extern enum"""
        native = descr.native

        gen_prelude(gen, descr, self.config)
        gen_doc(gen, native.tooltip)
        gen_type_metas(gen, descr, self.config)

        cpp_type = native.cpp_type or native.name
        gen.line(f'@:uname("{escaped(cpp_type.replace("::", "."))}")')
        if native.is_enum_class:
            gen.line('@:class')

        with gen.block(f'@:uextern extern enum {descr.haxe_type.name} {{'):
            # the last entry is the implicit _MAX value
            for value in native.values[:-1]:
                self._gen_value(value, gen)

    def _gen_value(self, value: 'NativeEnumValue', gen: CodeGen):
        comment = value.tooltip
        if value.display_name:
            if comment:
                comment += f'\n@DisplayName {value.display_name}'
            else:
                comment = value.display_name
        gen_doc(gen, comment)
        if value.display_name:
            gen.line(f'@DisplayName("{escaped(value.display_name)}")')
        gen.line(f'{value.name};')
