import json
from pathlib import Path

import pytest

from extern_gen import (
    Generator,
    GeneratorConfig,
    HeaderPathError,
    PropertyCategory,
    PropertyFlags,
    ReflectionDump,
    TypeKind,
    TypeRef,
    UnknownTypeError,
    Visibility,
)
from extern_gen.ir import FunctionFlags, NativeClass, NativeFunction, NativeProperty
from extern_gen.registry import TypeDescriptor

DUMP = {
    "classes": [
        {
            "name": "UObject",
            "package": "/Script/CoreUObject",
            "path": "/Script/CoreUObject.Object",
            "header": "",
            "module": "CoreUObject",
        },
        {
            "name": "AActor",
            "package": "/Script/Engine",
            "path": "/Script/Engine.Actor",
            "super": "/Script/CoreUObject.Object",
            "header": "D:/UE4/Engine/Source/Runtime/Engine/Classes/GameFramework/Actor.h",
            "module": "Engine",
            "tooltip": "Base actor",
            "members": [
                {
                    "kind": "function",
                    "name": "SetHidden",
                    "owner": "/Script/Engine.Actor",
                    "flags": ["public", "final"],
                    "params": [{"name": "bNewHidden", "category": "bool"}],
                },
                {
                    "name": "Tags",
                    "category": "array",
                    "inner": {"name": "Tags", "category": "name"},
                },
                {"name": "bEditable", "category": "bool", "flags": ["EDITOR_ONLY"]},
                {"name": "BlendMode", "category": "byte", "enum": "/Script/Engine.EBlendMode",
                 "visibility": "protected"},
                {"name": "Root", "category": "struct", "type": "/Script/CoreUObject.Vector"},
            ],
        },
    ],
    "structs": [
        {
            "name": "FVector",
            "package": "/Script/CoreUObject",
            "path": "/Script/CoreUObject.Vector",
            "headers": [
                "D:/UE4/Engine/Source/Runtime/CoreUObject/Public/UObject/NoExportTypes.h",
                "D:/UE4/Engine/Source/Runtime/Core/Public/Math/Vector.h",
            ],
            "module": "CoreUObject",
            "members": [{"name": "X", "category": "float"}],
        }
    ],
    "enums": [
        {
            "name": "EBlendMode",
            "package": "/Script/Engine",
            "header": "D:/UE4/Engine/Source/Runtime/Engine/Classes/Engine/EngineTypes.h",
            "module": "Engine",
            "values": ["BLEND_Opaque", {"name": "BLEND_Masked", "display_name": "Masked"}, "BLEND_MAX"],
        }
    ],
}


def test_dump_parsing() -> None:
    dump = ReflectionDump.from_dict(DUMP)
    natives = dump.natives()

    assert [n.name for n in natives] == ["UObject", "AActor", "FVector", "EBlendMode"]
    actor = natives[1]
    assert isinstance(actor, NativeClass)
    assert actor.super_path == "/Script/CoreUObject.Object"
    func, tags, editable, blend, root = actor.members
    assert isinstance(func, NativeFunction)
    assert func.flags == FunctionFlags.PUBLIC | FunctionFlags.FINAL
    assert func.params[0].category == PropertyCategory.BOOL
    assert isinstance(tags, NativeProperty)
    assert tags.inner is not None and tags.inner.category == PropertyCategory.NAME
    assert editable.flags == PropertyFlags.EDITOR_ONLY
    assert blend.visibility == Visibility.PROTECTED
    assert blend.enum_path == "/Script/Engine.EBlendMode"
    assert root.type_path == "/Script/CoreUObject.Vector"
    assert natives[2].path == "/Script/CoreUObject.Vector"
    assert natives[3].path == "/Script/Engine.EBlendMode"
    assert dump.entries[2].headers == DUMP["structs"][0]["headers"]
    assert natives[3].cpp_type == "EBlendMode"
    assert [v.display_name for v in natives[3].values] == ["", "Masked", ""]


def test_unknown_category_is_captured_as_unknown() -> None:
    dump = ReflectionDump.from_dict({
        "classes": [{"name": "AThing", "package": "/Script/Engine", "header": "x.h",
                     "members": [{"name": "Weird", "category": "soft_class"}]}],
    })
    assert dump.natives()[0].members[0].category == PropertyCategory.UNKNOWN


def test_unknown_flags_are_ignored() -> None:
    dump = ReflectionDump.from_dict({
        "classes": [{"name": "AThing", "package": "/Script/Engine", "header": "x.h",
                     "members": [
                         {"name": "Mesh", "category": "int", "flags": ["instanced", "const_parm"]},
                         {"kind": "function", "name": "Run", "flags": ["public", "blueprint_callable"]},
                     ]}],
    })
    prop, func = dump.natives()[0].members
    assert prop.flags == PropertyFlags.CONST_PARM
    assert func.flags == FunctionFlags.PUBLIC


def test_function_owner_defaults_to_enclosing_type() -> None:
    dump = ReflectionDump.from_dict({
        "classes": [{
            "name": "AActor",
            "package": "/Script/Engine",
            "path": "/Script/Engine.Actor",
            "header": "D:/UE4/Engine/Source/Runtime/Engine/Classes/GameFramework/Actor.h",
            "module": "Engine",
            "members": [
                {"kind": "function", "name": "Destroy", "flags": ["public"]},
                {"kind": "function", "name": "BeginDestroy", "flags": ["public"],
                 "owner": "/Script/CoreUObject.Object"},
            ],
        }],
        "structs": [{
            "name": "FHitResult",
            "package": "/Script/Engine",
            "header": "D:/UE4/Engine/Source/Runtime/Engine/Classes/Engine/EngineTypes.h",
            "module": "Engine",
            "members": [{"kind": "function", "name": "Reset", "flags": ["public"]}],
        }],
    })
    actor, hit = dump.natives()
    assert [f.owner for f in actor.members] == ["/Script/Engine.Actor", "/Script/CoreUObject.Object"]
    assert hit.members[0].owner == "/Script/Engine.FHitResult"

    generator = Generator()
    generator.collect(dump)
    (_, actor_source), _ = generator.finish_export()

    assert actor_source.splitlines()[-3:] == [
        "@:uextern extern class AActor {",
        "  public function Destroy() : Void;",
        "}",
    ]


def test_dump_load(tmp_path: Path) -> None:
    dump_path = tmp_path / "reflection.json"
    dump_path.write_text(json.dumps(DUMP), encoding="utf-8")

    dump = ReflectionDump.load(str(dump_path))

    assert len(dump.entries) == 4


def _collected() -> Generator:
    dump = ReflectionDump.from_dict(DUMP)
    generator = Generator()
    generator.collect(dump)
    return generator


def test_collect_registers_every_type() -> None:
    generator = _collected()
    registry = generator.registry

    assert len(registry) == 4
    assert registry.lookup("/Script/CoreUObject.Vector").headers == DUMP["structs"][0]["headers"]
    assert [d.native.name for d in registry.all_of_kind(TypeKind.CLASS)] == ["UObject", "AActor"]


def test_finish_export_emits_every_type_in_kind_order() -> None:
    generator = _collected()

    results = generator.finish_export()

    assert [ref for ref, _ in results] == [
        TypeRef(("unreal",), "UObject"),
        TypeRef(("unreal",), "AActor"),
        TypeRef(("unreal",), "FVector"),
        TypeRef(("unreal",), "EBlendMode"),
    ]
    assert [ref.file_path() for ref, _ in results][1] == "unreal/AActor.hx"
    assert all(source.endswith("}\n") for _, source in results)

    actor_source = results[1][1]
    assert actor_source.splitlines()[-9:] == [
        "@:uextern extern class AActor extends unreal.UObject {",
        "  public var Root : unreal.FVector;",
        "  private var BlendMode : unreal.EBlendMode;",
        "  #if WITH_EDITORONLY_DATA",
        "  public var bEditable : Bool;",
        "  #end // WITH_EDITORONLY_DATA",
        "  public var Tags : unreal.TArray<unreal.FName>;",
        "  @:final public function SetHidden(bNewHidden : Bool) : Void;",
        "}",
    ]
    assert '@:glueCppIncludes("UObject/NoExportTypes.h", "Math/Vector.h")' in results[2][1]
    assert '@:glueCppIncludes("CoreUObject.h")' in results[0][1]


def test_none_kind_types_are_not_emitted() -> None:
    generator = Generator()
    generator.register_type(
        NativeClass(path="/Script/CoreUObject.Interface", name="UInterface", package="/Script/CoreUObject"),
        "", "CoreUObject",
    )
    assert generator.finish_export() == []


def test_finish_export_propagates_header_errors() -> None:
    generator = Generator()
    generator.register_type(
        NativeClass(path="/Script/Engine.Lost", name="ALost", package="/Script/Engine"),
        "D:/Somewhere/Else/Lost.h", "Engine",
    )
    with pytest.raises(HeaderPathError):
        generator.finish_export()


def test_generate_rejects_unknown_descriptor() -> None:
    generator = Generator()
    native = NativeClass(path="/Script/Engine.Odd", name="AOdd", package="/Script/Engine")
    descr = TypeDescriptor(native=native, haxe_type=TypeRef(("unreal",), "AOdd", TypeKind.CLASS))
    with pytest.raises(UnknownTypeError):
        generator.generate(descr)


def test_config_from_dict() -> None:
    config = GeneratorConfig.from_dict({
        "root_package": "ue",
        "root_modules": ["Engine"],
        "array_inner_denylist": ["FBad"],
        "unknown_key": True,
    })
    assert config.root_package == "ue"
    assert config.root_modules == frozenset({"Engine"})
    assert config.array_inner_denylist == ("FBad",)
    assert config.indent == "  "


def test_custom_config_flows_through_generation() -> None:
    generator = Generator(GeneratorConfig(root_package="ue", indent="    ", editor_only_guard="WITH_EDITOR"))
    actor = NativeClass(
        path="/Script/Engine.Actor", name="AActor", package="/Script/Engine",
        members=[NativeProperty("Debug", PropertyCategory.INT, flags=PropertyFlags.EDITOR_ONLY)],
    )
    generator.register_type(actor, "D:/UE4/Engine/Classes/GameFramework/Actor.h", "Engine")

    (ref, source), = generator.finish_export()

    assert str(ref) == "ue.AActor"
    assert "package ue;" in source
    assert "    #if WITH_EDITOR\n    public var Debug : ue.Int32;\n    #end // WITH_EDITOR\n" in source
