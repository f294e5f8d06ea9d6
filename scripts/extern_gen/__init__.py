"""
extern_gen - Haxe extern generation for reflected native types

Walks a captured copy of a reflected class hierarchy (classes, structs,
enums, their properties and functions) and emits Haxe extern declarations
so that Haxe code can call into the native types.
"""

from .ir import (
    ReflectionDump, DumpEntry,
    NativeClass, NativeStruct, NativeEnum, NativeEnumValue,
    NativeProperty, NativeFunction,
    PropertyCategory, PropertyFlags, FunctionFlags, Visibility,
)
from .config import GeneratorConfig
from .errors import ExternGenError, HeaderPathError, UnknownTypeError
from .registry import (
    TypeRegistry, TypeRef, TypeKind, TypeDescriptor,
    ClassDescriptor, StructDescriptor, EnumDescriptor,
)
from .headers import resolve_header_path
from .types import TypeMapper
from .codegen import CodeGen, ConditionalRegion
from .func import FuncGenerator
from .struct import StructGenerator
from .enum import EnumGenerator
from .generator import Generator

__all__ = [
    'ReflectionDump', 'DumpEntry',
    'NativeClass', 'NativeStruct', 'NativeEnum', 'NativeEnumValue',
    'NativeProperty', 'NativeFunction',
    'PropertyCategory', 'PropertyFlags', 'FunctionFlags', 'Visibility',
    'GeneratorConfig',
    'ExternGenError', 'HeaderPathError', 'UnknownTypeError',
    'TypeRegistry', 'TypeRef', 'TypeKind', 'TypeDescriptor',
    'ClassDescriptor', 'StructDescriptor', 'EnumDescriptor',
    'resolve_header_path',
    'TypeMapper',
    'CodeGen', 'ConditionalRegion',
    'FuncGenerator',
    'StructGenerator',
    'EnumGenerator',
    'Generator',
]
