"""
Type conversion module

Maps reflected properties to Haxe type expressions. Every lookup goes
through the registry; a property whose type cannot be expressed yields
None and the caller skips the member.
"""

from typing import Optional, TYPE_CHECKING
import logging

from .ir import NUMERIC_CATEGORIES, NativeProperty, PropertyCategory, PropertyFlags

if TYPE_CHECKING:
    from .config import GeneratorConfig
    from .registry import TypeRegistry

logger = logging.getLogger(__name__)

# Fixed-width numerics; unsigned 32/64 bit use wrappers so no bits are lost
NUMERIC_TYPES = {
    PropertyCategory.BYTE: 'UInt8',
    PropertyCategory.INT8: 'Int8',
    PropertyCategory.INT16: 'Int16',
    PropertyCategory.INT: 'Int32',
    PropertyCategory.INT64: 'Int64',
    PropertyCategory.UINT16: 'UInt16',
    PropertyCategory.UINT32: 'FakeUInt32',
    PropertyCategory.UINT64: 'FakeUInt64',
    PropertyCategory.FLOAT: 'Float32',
    PropertyCategory.DOUBLE: 'Float64',
}

BOOL_TYPE = 'Bool'


class TypeMapper:
    """Resolves native property types to Haxe type expressions"""

    def __init__(self, registry: 'TypeRegistry', config: Optional['GeneratorConfig'] = None):
        self.registry = registry
        self.config = config or registry.config

    def resolve(self, prop: NativeProperty) -> Optional[str]:
        """Get the Haxe type of a property, or None if unsupported"""
        base = self._base_type(prop)
        if base is None:
            return None
        return self.with_modifiers(base, prop)

    def with_modifiers(self, base: str, prop: NativeProperty) -> Optional[str]:
        """Wrap a base type according to the parameter flags

        Const is applied first and encloses the reference wrapper:
        unreal.Const<unreal.PRef<T>>
        """
        if prop.array_dim > 1:
            # TODO: support static array dimensions (e.g. SomeType SomeProp[8])
            logger.debug('%s: fixed size arrays are not supported', prop.name)
            return None

        is_const = prop.has_any(PropertyFlags.CONST_PARM)
        is_ref = prop.has_any(PropertyFlags.REFERENCE_PARM)
        is_out = prop.has_any(PropertyFlags.OUT_PARM)
        if prop.is_return:
            wrap_const = is_const
            wrap_ref = is_ref
        else:
            wrap_const = is_const or (is_ref and not is_out)
            wrap_ref = is_ref or is_out

        wrappers = []
        if wrap_const:
            wrappers.append(self.config.qualified('Const'))
        if wrap_ref:
            wrappers.append(self.config.qualified('PRef'))

        result = base
        for wrapper in reversed(wrappers):
            result = f'{wrapper}<{result}>'
        return result

    def _base_type(self, prop: NativeProperty) -> Optional[str]:
        """Resolve the unwrapped type, from the most common category to the least"""
        category = prop.category

        if category == PropertyCategory.STRUCT:
            return self._registered(prop.type_path, prop, 'struct')

        elif category in (PropertyCategory.OBJECT, PropertyCategory.CLASS):
            if category == PropertyCategory.CLASS and prop.has_any(PropertyFlags.UOBJECT_WRAPPER):
                meta = self._registered(prop.meta_class_path, prop, 'tsubclassof')
                if meta is None:
                    return None
                return f"{self.config.qualified('TSubclassOf')}<{meta}>"
            return self._registered(prop.type_path, prop, 'uclass')

        elif category in NUMERIC_CATEGORIES:
            if prop.enum_path:
                return self._registered(prop.enum_path, prop, 'uenum')
            return self.config.qualified(NUMERIC_TYPES[category])

        elif category == PropertyCategory.BOOL:
            return BOOL_TYPE

        elif category == PropertyCategory.NAME:
            return self.config.qualified('FName')

        elif category == PropertyCategory.STR:
            return self.config.qualified('FString')

        elif category == PropertyCategory.ARRAY:
            return self._array_type(prop)

        # interfaces, maps, delegates, lazy and asset pointers
        logger.debug('property %s (%s) not supported', prop.name, category.value)
        return None

    def _array_type(self, prop: NativeProperty) -> Optional[str]:
        if prop.inner is None:
            logger.debug('array %s has no inner property', prop.name)
            return None
        inner = self.resolve(prop.inner)
        if inner is None:
            return None
        if not self.can_build_array(inner):
            logger.debug('array %s of %s excluded', prop.name, inner)
            return None
        return f"{self.config.qualified('TArray')}<{inner}>"

    def can_build_array(self, inner: str) -> bool:
        """Check the element type against the array denylist

        Some element types fail to compile with TArray operators (e.g. the
        set operator) in the generated glue.
        """
        return not any(name in inner for name in self.config.array_inner_denylist)

    def _registered(self, path: str, prop: NativeProperty, what: str) -> Optional[str]:
        descr = self.registry.lookup_supported(path) if path else None
        if descr is None:
            # may happen if the type was never collected
            logger.debug('(%s) type not supported: %s (property %s)', what, path, prop.name)
            return None
        return str(descr.haxe_type)
