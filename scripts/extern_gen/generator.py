"""
Main generator module

Orchestrates the two passes of extern generation: the host registers every
native type it encounters, then finish_export() renders one Haxe source per
registered class, struct and enum.
"""

from typing import Optional
import logging

from .codegen import CodeGen
from .config import GeneratorConfig
from .enum import EnumGenerator
from .errors import UnknownTypeError
from .func import FuncGenerator
from .ir import NativeType, ReflectionDump
from .registry import (
    TypeRegistry, TypeRef, TypeKind, TypeDescriptor,
    ClassDescriptor, StructDescriptor, EnumDescriptor, NonClassDescriptor,
)
from .struct import StructGenerator
from .types import TypeMapper

logger = logging.getLogger(__name__)


class Generator:
    """Main extern generator"""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self.registry = TypeRegistry(self.config)
        self.type_mapper = TypeMapper(self.registry, self.config)
        self.func_gen = FuncGenerator(self.type_mapper)
        self.struct_gen = StructGenerator(self.registry, self.type_mapper, self.func_gen, self.config)
        self.enum_gen = EnumGenerator(self.config)

    def register_type(self, native: NativeType, header: str, module: str) -> TypeDescriptor:
        """Register a native type; may be called many times for the same type

        Structs and enums remember every distinct header they were reported with.
        """
        descr = self.registry.register(native, header, module)
        if isinstance(descr, NonClassDescriptor):
            descr.add_header(header)
        return descr

    def collect(self, dump: ReflectionDump):
        """Register every type of a reflection dump"""
        for entry in dump.entries:
            for header in entry.headers:
                self.register_type(entry.native, header, entry.module)
        logger.info('collected %d types', len(self.registry))

    def generate(self, descr: TypeDescriptor) -> str:
        """Generate the Haxe source of one registered type"""
        gen = CodeGen(self.config.indent)
        if isinstance(descr, ClassDescriptor):
            self.struct_gen.generate_class(descr, gen)
        elif isinstance(descr, StructDescriptor):
            self.struct_gen.generate_struct(descr, gen)
        elif isinstance(descr, EnumDescriptor):
            self.enum_gen.generate(descr, gen)
        else:
            raise UnknownTypeError(descr.native)
        return gen.output() + '\n'

    def finish_export(self) -> list[tuple[TypeRef, str]]:
        """Generate every registered type, once all types are collected

        Returns (type, source) pairs; the caller saves each source at
        type.file_path(config.extension) under its output root.
        Raises HeaderPathError if a header path cannot be resolved.
        """
        results = []
        passes = (
            ('classes', (TypeKind.CLASS, TypeKind.INTERFACE)),
            ('structs', (TypeKind.STRUCT,)),
            ('enums', (TypeKind.ENUM,)),
        )
        for label, kinds in passes:
            descriptors = self.registry.all_of_kind(*kinds)
            logger.info('generating %d %s', len(descriptors), label)
            for descr in descriptors:
                logger.info('got %s', descr.native.name)
                results.append((descr.haxe_type, self.generate(descr)))
        return results
