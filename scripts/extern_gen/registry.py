"""
Type registry module

Binds every collected native type to its target-language identity. The
registry has no generation logic; the mapper and the emitters only look
types up in it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union
import logging

from .config import GeneratorConfig
from .ir import NativeClass, NativeStruct, NativeEnum, NativeType

logger = logging.getLogger(__name__)


class TypeKind(Enum):
    CLASS = 'class'
    INTERFACE = 'interface'
    STRUCT = 'struct'
    ENUM = 'enum'
    NONE = 'none'


@dataclass(frozen=True)
class TypeRef:
    """Fully qualified target-language type (package path + name)"""
    pack: tuple[str, ...]
    name: str
    kind: TypeKind = field(default=TypeKind.NONE, compare=False)

    def __str__(self) -> str:
        return '.'.join(self.pack + (self.name,))

    def file_path(self, ext: str = 'hx') -> str:
        """Path of the generated file, relative to the output root"""
        return '/'.join(self.pack + (f'{self.name}.{ext}',))


@dataclass
class TypeDescriptor:
    """Registered native type"""
    native: NativeType
    haxe_type: TypeRef
    module: str = ''
    headers: list[str] = field(default_factory=list)

    @property
    def kind(self) -> TypeKind:
        return self.haxe_type.kind

    @property
    def package(self) -> str:
        return self.native.package


@dataclass
class ClassDescriptor(TypeDescriptor):
    pass


@dataclass
class NonClassDescriptor(TypeDescriptor):
    """Struct or enum; may be declared across several headers"""

    def add_header(self, header: str) -> bool:
        """Append a declaration site; returns False if already known"""
        if header in self.headers:
            return False
        self.headers.append(header)
        return True


@dataclass
class StructDescriptor(NonClassDescriptor):
    pass


@dataclass
class EnumDescriptor(NonClassDescriptor):
    pass


class TypeRegistry:
    """Registry of native types keyed by native identity"""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self._descriptors: dict[str, TypeDescriptor] = {}

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, native: Union[NativeType, str]) -> bool:
        return self._key(native) in self._descriptors

    def register(self, native: NativeType, header: str, module: str) -> TypeDescriptor:
        """Register a native type (idempotent per identity)

        A type seen before is returned unchanged: its module and header
        were fixed by the first registration.
        """
        existing = self._descriptors.get(native.path)
        if existing is not None:
            return existing

        if isinstance(native, NativeClass):
            kind = TypeKind.INTERFACE if native.is_interface else TypeKind.CLASS
            descr_type = ClassDescriptor
        elif isinstance(native, NativeStruct):
            kind = TypeKind.STRUCT
            descr_type = StructDescriptor
        elif isinstance(native, NativeEnum):
            kind = TypeKind.ENUM
            descr_type = EnumDescriptor
        else:
            raise TypeError(f'Cannot register {native!r}')

        if native.name in self.config.none_kind_types:
            kind = TypeKind.NONE

        descr = descr_type(
            native=native,
            haxe_type=self._make_type_ref(native, module, kind),
            module=module,
            headers=[header],
        )
        self._descriptors[native.path] = descr
        logger.debug('registered %s as %s (%s)', native.path, descr.haxe_type, kind.value)
        return descr

    def lookup(self, native: Union[NativeType, str]) -> Optional[TypeDescriptor]:
        """Get descriptor by native type or identity, None if never registered"""
        return self._descriptors.get(self._key(native))

    def lookup_supported(self, native: Union[NativeType, str]) -> Optional[TypeDescriptor]:
        """Like lookup(), but types of kind NONE count as unknown"""
        descr = self.lookup(native)
        if descr is None or descr.kind == TypeKind.NONE:
            return None
        return descr

    def all_of_kind(self, *kinds: TypeKind) -> list[TypeDescriptor]:
        """All descriptors of the given kinds, in registration order"""
        return [d for d in self._descriptors.values() if d.kind in kinds]

    def _make_type_ref(self, native: NativeType, module: str, kind: TypeKind) -> TypeRef:
        root = self.config.root_package
        if not module or module in self.config.root_modules:
            pack = (root,)
        else:
            pack = (root, module.lower())

        name = native.name
        if kind == TypeKind.INTERFACE and name.startswith('U'):
            # The reflected class is UFoo, scripts implement IFoo
            name = 'I' + name[1:]
        return TypeRef(pack=pack, name=name, kind=kind)

    @staticmethod
    def _key(native: Union[NativeType, str]) -> str:
        return native if isinstance(native, str) else native.path
