"""
Class and struct declaration module

Generates extern classes, interfaces and structs with their properties
and methods.
"""

from typing import Optional, Union, TYPE_CHECKING
import logging

from .codegen import CodeGen, ConditionalRegion, is_valid_identifier
from .ir import (
    NativeProperty, NativeFunction, PropertyCategory, PropertyFlags,
    FunctionFlags, Visibility,
)
from .meta import gen_prelude, gen_doc, gen_type_metas
from .registry import TypeKind

if TYPE_CHECKING:
    from .config import GeneratorConfig
    from .func import FuncGenerator
    from .ir import NativeClass, NativeStruct
    from .registry import TypeRegistry, ClassDescriptor, StructDescriptor
    from .types import TypeMapper

logger = logging.getLogger(__name__)

NO_EXPORT_WARNING = 'WARNING: This type is defined as NoExport by UHT. It will be empty because of it'


class StructGenerator:
    """Generates class, interface and struct declarations"""

    def __init__(self, registry: 'TypeRegistry', type_mapper: 'TypeMapper',
                 func_gen: 'FuncGenerator', config: 'GeneratorConfig'):
        self.registry = registry
        self.type_mapper = type_mapper
        self.func_gen = func_gen
        self.config = config

    def generate_class(self, descr: 'ClassDescriptor', gen: CodeGen):
        """Generate an extern class or interface"""
        native = descr.native
        is_interface = descr.kind == TypeKind.INTERFACE

        gen_prelude(gen, descr, self.config)
        gen_doc(gen, self._doc(native.tooltip, native.no_export))
        gen_type_metas(gen, descr, self.config)

        decl = f"@:uextern extern {'interface' if is_interface else 'class'} {descr.haxe_type.name}"
        if not is_interface:
            superclass = self._supertype(native.super_path, native.name)
            if superclass:
                decl += f' extends {superclass}'

        # interfaces extending other interfaces use `extends`
        keyword = 'extends' if is_interface else 'implements'
        for iface_path in native.interfaces:
            iface = self.registry.lookup(iface_path)
            if iface is None:
                logger.debug('%s: interface %s was never collected', native.name, iface_path)
                continue
            if iface.kind != TypeKind.NONE:
                decl += f' {keyword} {iface.haxe_type}'

        with gen.block(decl + ' {'):
            if not native.no_export:
                self.generate_fields(native, gen)

    def generate_struct(self, descr: 'StructDescriptor', gen: CodeGen):
        """Generate an extern struct"""
        native = descr.native

        gen_prelude(gen, descr, self.config)
        gen_doc(gen, self._doc(native.tooltip, native.no_export))
        gen_type_metas(gen, descr, self.config)

        decl = f'@:uextern extern class {descr.haxe_type.name}'
        superstruct = self._supertype(native.super_path, native.name)
        if superstruct:
            decl += f' extends {superstruct}'

        with gen.block(decl + ' {'):
            if not native.no_export:
                self.generate_fields(native, gen)

    def generate_fields(self, native: Union['NativeClass', 'NativeStruct'], gen: CodeGen):
        """Generate the properties and methods declared by a type"""
        editor_only = ConditionalRegion(gen, self.config.editor_only_guard)
        # reflection lists members in reverse, restore the C++ declaration order
        for member in reversed(native.members):
            if isinstance(member, NativeProperty):
                self._gen_property(member, editor_only, gen)
            elif isinstance(member, NativeFunction):
                self._gen_function(native, member, editor_only, gen)
            else:
                logger.debug('member %r is not a property or function', member)
        editor_only.close()

    def _gen_property(self, prop: NativeProperty, editor_only: ConditionalRegion, gen: CodeGen):
        if prop.is_protected and prop.category == PropertyCategory.BOOL:
            # protected bools may be bit-fields, which cannot be bound
            logger.debug('property %s: protected bool skipped', prop.name)
            return
        if prop.visibility == Visibility.PRIVATE:
            logger.debug('property %s: private', prop.name)
            return
        if not is_valid_identifier(prop.name):
            logger.debug('property %s: reserved or invalid name', prop.name)
            return
        prop_type = self.type_mapper.resolve(prop)
        if prop_type is None:
            return

        editor_only.toggle(prop.is_editor_only)
        gen_doc(gen, prop.tooltip)
        access = 'private var' if prop.is_protected else 'public var'
        read_only = '(default, never)' if prop.has_any(PropertyFlags.CONST_PARM) else ''
        gen.line(f'{access} {prop.name}{read_only} : {prop_type};')

    def _gen_function(self, native: Union['NativeClass', 'NativeStruct'], func: NativeFunction,
                      editor_only: ConditionalRegion, gen: CodeGen):
        if func.owner != native.path:
            # overridden and inherited functions are declared by their owner
            return
        if func.has_any(FunctionFlags.PRIVATE):
            return
        buf = self.func_gen.generate(func)
        if buf is None:
            return
        # functions are never editor-only
        editor_only.close()
        gen.extend(buf)

    def _supertype(self, super_path: str, name: str) -> Optional[str]:
        if not super_path:
            return None
        descr = self.registry.lookup_supported(super_path)
        if descr is None:
            logger.debug('%s: supertype %s was never collected', name, super_path)
            return None
        return str(descr.haxe_type)

    @staticmethod
    def _doc(tooltip: str, no_export: bool) -> str:
        if no_export:
            return f'{NO_EXPORT_WARNING}\n\n{tooltip}'.rstrip()
        return tooltip
