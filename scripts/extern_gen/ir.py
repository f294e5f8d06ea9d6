"""
IR (Intermediate Representation) module

Captured copy of the host's reflected object model. The host copies the
attributes the generator needs into these dataclasses once, at collection
time; nothing here points back into host-owned memory. Native types refer
to each other by their stable identity string (`path`, for example
`/Script/Engine.Actor`).
"""

from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from functools import reduce
from typing import Optional, Union
import json
import logging

logger = logging.getLogger(__name__)


class PropertyCategory(Enum):
    """Reflected property category, decided once at capture"""
    STRUCT = 'struct'
    OBJECT = 'object'
    CLASS = 'class'
    BYTE = 'byte'
    INT8 = 'int8'
    INT16 = 'int16'
    INT = 'int'
    INT64 = 'int64'
    UINT16 = 'uint16'
    UINT32 = 'uint32'
    UINT64 = 'uint64'
    FLOAT = 'float'
    DOUBLE = 'double'
    BOOL = 'bool'
    NAME = 'name'
    STR = 'str'
    ARRAY = 'array'
    INTERFACE = 'interface'
    MAP = 'map'
    DELEGATE = 'delegate'
    MULTICAST_DELEGATE = 'multicast_delegate'
    LAZY_OBJECT = 'lazy_object'
    ASSET_OBJECT = 'asset_object'
    UNKNOWN = 'unknown'

    @classmethod
    def parse(cls, value: str) -> 'PropertyCategory':
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


NUMERIC_CATEGORIES = frozenset({
    PropertyCategory.BYTE, PropertyCategory.INT8, PropertyCategory.INT16,
    PropertyCategory.INT, PropertyCategory.INT64, PropertyCategory.UINT16,
    PropertyCategory.UINT32, PropertyCategory.UINT64,
    PropertyCategory.FLOAT, PropertyCategory.DOUBLE,
})


class PropertyFlags(Flag):
    """Property flags relevant to extern generation"""
    NONE = 0
    CONST_PARM = auto()
    REFERENCE_PARM = auto()
    OUT_PARM = auto()
    RETURN_PARM = auto()
    EDITOR_ONLY = auto()
    UOBJECT_WRAPPER = auto()


class FunctionFlags(Flag):
    """Function flags relevant to extern generation"""
    NONE = 0
    PUBLIC = auto()
    PROTECTED = auto()
    PRIVATE = auto()
    STATIC = auto()
    FINAL = auto()
    CONST = auto()


class Visibility(Enum):
    PUBLIC = 'public'
    PROTECTED = 'protected'
    PRIVATE = 'private'


def _parse_flags(flag_type, names) -> Flag:
    """Combine flag names (e.g. ['CONST_PARM', 'OUT_PARM']) into a flag value

    Names the model does not track are ignored.
    """
    known = []
    for name in names or []:
        flag = flag_type.__members__.get(name.upper())
        if flag is None:
            logger.debug('ignoring unknown %s %s', flag_type.__name__, name)
            continue
        known.append(flag)
    return reduce(lambda acc, flag: acc | flag, known, flag_type.NONE)


@dataclass
class NativeProperty:
    """Reflected property (member field or function parameter)"""
    name: str
    category: PropertyCategory
    flags: PropertyFlags = PropertyFlags.NONE
    visibility: Visibility = Visibility.PUBLIC
    array_dim: int = 1
    type_path: str = ''        # struct, object class or enum identity
    meta_class_path: str = ''  # subclass-of target for class properties
    enum_path: str = ''        # backing enum of numeric properties
    inner: Optional['NativeProperty'] = None  # array element
    tooltip: str = ''

    def has_any(self, flags: PropertyFlags) -> bool:
        return bool(self.flags & flags)

    @property
    def is_return(self) -> bool:
        return self.has_any(PropertyFlags.RETURN_PARM)

    @property
    def is_editor_only(self) -> bool:
        return self.has_any(PropertyFlags.EDITOR_ONLY)

    @property
    def is_protected(self) -> bool:
        return self.visibility == Visibility.PROTECTED


@dataclass
class NativeFunction:
    """Reflected function"""
    name: str
    owner: str  # identity of the declaring type
    flags: FunctionFlags = FunctionFlags.NONE
    params: list[NativeProperty] = field(default_factory=list)
    tooltip: str = ''

    def has_any(self, flags: FunctionFlags) -> bool:
        return bool(self.flags & flags)


Member = Union[NativeProperty, NativeFunction]


@dataclass
class NativeClass:
    """Reflected class or interface"""
    path: str
    name: str  # C++ name, with prefix (e.g. AActor)
    package: str
    super_path: str = ''
    interfaces: list[str] = field(default_factory=list)
    is_interface: bool = False
    no_export: bool = False
    tooltip: str = ''
    # Reflection order, which is the reverse of declaration order
    members: list[Member] = field(default_factory=list)


@dataclass
class NativeStruct:
    """Reflected script struct"""
    path: str
    name: str
    package: str
    super_path: str = ''
    no_export: bool = False
    tooltip: str = ''
    members: list[Member] = field(default_factory=list)


@dataclass
class NativeEnumValue:
    name: str
    tooltip: str = ''
    display_name: str = ''


@dataclass
class NativeEnum:
    """Reflected enum; values end with the implicit _MAX entry"""
    path: str
    name: str
    package: str
    cpp_type: str = ''
    is_enum_class: bool = False
    values: list[NativeEnumValue] = field(default_factory=list)
    tooltip: str = ''


NativeType = Union[NativeClass, NativeStruct, NativeEnum]


@dataclass
class DumpEntry:
    """One native type as reported by the host, with its declaration sites"""
    native: NativeType
    headers: list[str]
    module: str = ''


@dataclass
class ReflectionDump:
    """Reflected types captured from the host, in collection order"""
    entries: list[DumpEntry] = field(default_factory=list)

    @classmethod
    def load(cls, json_path: str) -> 'ReflectionDump':
        """Load a dump from a JSON file"""
        with open(json_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'ReflectionDump':
        """Create a dump from a dictionary

        Expected shape: {"classes": [...], "structs": [...], "enums": [...]},
        each entry carrying "header" or "headers" and "module".
        """
        entries = []
        parsers = (
            ('classes', cls._parse_class),
            ('structs', cls._parse_struct),
            ('enums', cls._parse_enum),
        )
        for key, parse in parsers:
            for decl in data.get(key, []):
                headers = decl.get('headers')
                if headers is None:
                    headers = [decl.get('header', '')]
                entries.append(DumpEntry(
                    native=parse(decl),
                    headers=list(headers),
                    module=decl.get('module', ''),
                ))
        return cls(entries=entries)

    @staticmethod
    def _path(decl: dict) -> str:
        return decl.get('path') or f"{decl.get('package', '')}.{decl['name']}"

    @classmethod
    def _parse_class(cls, decl: dict) -> NativeClass:
        """Parse class declaration"""
        path = cls._path(decl)
        return NativeClass(
            path=path,
            name=decl['name'],
            package=decl.get('package', ''),
            super_path=decl.get('super', ''),
            interfaces=list(decl.get('interfaces', [])),
            is_interface=decl.get('is_interface', False),
            no_export=decl.get('no_export', False),
            tooltip=decl.get('tooltip', ''),
            members=[cls._parse_member(m, path) for m in decl.get('members', [])],
        )

    @classmethod
    def _parse_struct(cls, decl: dict) -> NativeStruct:
        """Parse struct declaration"""
        path = cls._path(decl)
        return NativeStruct(
            path=path,
            name=decl['name'],
            package=decl.get('package', ''),
            super_path=decl.get('super', ''),
            no_export=decl.get('no_export', False),
            tooltip=decl.get('tooltip', ''),
            members=[cls._parse_member(m, path) for m in decl.get('members', [])],
        )

    @classmethod
    def _parse_enum(cls, decl: dict) -> NativeEnum:
        """Parse enum declaration"""
        values = []
        for item in decl.get('values', []):
            if isinstance(item, str):
                item = {'name': item}
            values.append(NativeEnumValue(
                name=item['name'],
                tooltip=item.get('tooltip', ''),
                display_name=item.get('display_name', ''),
            ))
        return NativeEnum(
            path=cls._path(decl),
            name=decl['name'],
            package=decl.get('package', ''),
            cpp_type=decl.get('cpp_type', decl['name']),
            is_enum_class=decl.get('is_enum_class', False),
            values=values,
            tooltip=decl.get('tooltip', ''),
        )

    @classmethod
    def _parse_member(cls, decl: dict, owner: str) -> Member:
        """Parse a member; functions default to being owned by the enclosing type"""
        if decl.get('kind') == 'function':
            return NativeFunction(
                name=decl['name'],
                owner=decl.get('owner') or owner,
                flags=_parse_flags(FunctionFlags, decl.get('flags')),
                params=[cls._parse_property(p) for p in decl.get('params', [])],
                tooltip=decl.get('tooltip', ''),
            )
        return cls._parse_property(decl)

    @classmethod
    def _parse_property(cls, decl: dict) -> NativeProperty:
        """Parse property declaration"""
        inner = decl.get('inner')
        return NativeProperty(
            name=decl.get('name', ''),
            category=PropertyCategory.parse(decl.get('category', '')),
            flags=_parse_flags(PropertyFlags, decl.get('flags')),
            visibility=Visibility(decl.get('visibility', 'public')),
            array_dim=decl.get('array_dim', 1),
            type_path=decl.get('type', ''),
            meta_class_path=decl.get('meta_class', ''),
            enum_path=decl.get('enum', ''),
            inner=cls._parse_property(inner) if inner is not None else None,
            tooltip=decl.get('tooltip', ''),
        )

    def natives(self) -> list[NativeType]:
        return [entry.native for entry in self.entries]
