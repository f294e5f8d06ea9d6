import sys
from collections.abc import Callable
from pathlib import Path

import pytest

SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"
if str(SCRIPTS_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPTS_DIR))

from extern_gen import (  # noqa: E402
    Generator,
    NativeClass,
    NativeEnum,
    NativeEnumValue,
    NativeFunction,
    NativeProperty,
    NativeStruct,
    PropertyCategory,
    PropertyFlags,
    FunctionFlags,
    Visibility,
)

ACTOR_HEADER = "D:/UE4/Engine/Source/Runtime/Engine/Classes/GameFramework/Actor.h"
VECTOR_HEADER = "D:/UE4/Engine/Source/Runtime/CoreUObject/Public/UObject/NoExportTypes.h"


@pytest.fixture
def generator() -> Generator:
    return Generator()


@pytest.fixture
def make_prop() -> Callable[..., NativeProperty]:
    def _make_prop(
        name: str,
        category: PropertyCategory,
        *,
        flags: PropertyFlags = PropertyFlags.NONE,
        visibility: Visibility = Visibility.PUBLIC,
        **kwargs: object,
    ) -> NativeProperty:
        return NativeProperty(
            name=name, category=category, flags=flags, visibility=visibility, **kwargs
        )

    return _make_prop


@pytest.fixture
def make_func() -> Callable[..., NativeFunction]:
    def _make_func(
        name: str,
        owner: str,
        params: list[NativeProperty] | None = None,
        *,
        flags: FunctionFlags = FunctionFlags.PUBLIC,
        tooltip: str = "",
    ) -> NativeFunction:
        return NativeFunction(
            name=name, owner=owner, flags=flags, params=list(params or []), tooltip=tooltip
        )

    return _make_func


@pytest.fixture
def make_class() -> Callable[..., NativeClass]:
    def _make_class(name: str, package: str = "/Script/Engine", **kwargs: object) -> NativeClass:
        short = name[1:]
        return NativeClass(path=f"{package}.{short}", name=name, package=package, **kwargs)

    return _make_class


@pytest.fixture
def core_types(generator: Generator) -> dict[str, object]:
    """UObject, AActor, FVector and EBlendMode registered the way the host reports them"""
    uobject = NativeClass(path="/Script/CoreUObject.Object", name="UObject", package="/Script/CoreUObject")
    actor = NativeClass(
        path="/Script/Engine.Actor",
        name="AActor",
        package="/Script/Engine",
        super_path="/Script/CoreUObject.Object",
    )
    vector = NativeStruct(path="/Script/CoreUObject.Vector", name="FVector", package="/Script/CoreUObject")
    blend = NativeEnum(
        path="/Script/Engine.EBlendMode",
        name="EBlendMode",
        package="/Script/Engine",
        cpp_type="EBlendMode",
        values=[NativeEnumValue("BLEND_Opaque"), NativeEnumValue("BLEND_MAX")],
    )
    generator.register_type(uobject, "", "CoreUObject")
    generator.register_type(actor, ACTOR_HEADER, "Engine")
    generator.register_type(vector, VECTOR_HEADER, "CoreUObject")
    generator.register_type(blend, "D:/UE4/Engine/Source/Runtime/Engine/Classes/Engine/EngineTypes.h", "Engine")
    return {"uobject": uobject, "actor": actor, "vector": vector, "blend": blend}
