"""
Generator configuration

Naming and formatting knobs shared by the registry, the type mapper and
the declaration emitters.
"""

from dataclasses import dataclass, field, fields


@dataclass(frozen=True)
class GeneratorConfig:
    """Configuration for extern generation"""
    root_package: str = 'unreal'
    # Modules whose types live directly in the root package
    root_modules: frozenset[str] = frozenset({'CoreUObject', 'Engine'})
    # Registered, but never referenced from a declaration
    none_kind_types: frozenset[str] = frozenset({'UInterface'})
    # Array element types that break the glue code (operators on TArray)
    array_inner_denylist: tuple[str, ...] = ('FStaticMeshComponentLODInfo',)
    editor_only_guard: str = 'WITH_EDITORONLY_DATA'
    indent: str = '  '
    fallback_header: str = 'CoreUObject.h'
    root_headers: tuple[str, ...] = ('Engine.h',)
    script_prefix: str = '/Script/'
    extension: str = 'hx'
    prelude: str = field(default=(
        'This file was autogenerated by UE4HaxeExternGenerator using UHT definitions. '
        'It only includes UPROPERTYs and UFUNCTIONs. Do not modify it!\n'
        'In order to add more definitions, create or edit a type with the same name/package, '
        'but with a `_Extra` suffix'
    ))

    @classmethod
    def from_dict(cls, data: dict) -> 'GeneratorConfig':
        """Create config from a dictionary, ignoring unknown keys"""
        kwargs = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if f.name in ('root_modules', 'none_kind_types'):
                value = frozenset(value)
            elif f.name in ('array_inner_denylist', 'root_headers'):
                value = tuple(value)
            kwargs[f.name] = value
        return cls(**kwargs)

    def qualified(self, name: str) -> str:
        """Name of a support type in the root package"""
        return f'{self.root_package}.{name}'
