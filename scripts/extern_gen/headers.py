"""
Header path resolution

Turns the raw header path reported by the header tool into the include
path used in `@:glueCppIncludes` annotations.

Examples:
    ''                                        -> CoreUObject.h
    Engine.h                                  -> Engine.h
    D:/UE4/Engine/Source/Runtime/Engine/Public/Foo/Bar.h  -> Foo/Bar.h
    D:\\UE4\\Engine\\Source\\Runtime\\Engine\\Classes\\Foo.h -> Foo.h
"""

from typing import Optional

from .config import GeneratorConfig
from .errors import HeaderPathError

SEPARATORS = '/\\'

_DEFAULT_CONFIG = GeneratorConfig()


def resolve_header_path(path: str, package: str, config: Optional[GeneratorConfig] = None) -> str:
    """Get the canonical include path of a header

    `package` is the owning package name (e.g. /Script/Engine). Raises
    HeaderPathError when no heuristic matches.
    """
    config = config or _DEFAULT_CONFIG
    if not path:
        # the header tool reports no header for some of the core UObjects
        return config.fallback_header
    if path in config.root_headers:
        return path

    lower = path.lower()
    index = _after_marker(lower, 'public')
    if index < 0:
        index = _after_marker(lower, 'classes')
    if index < 0:
        index = _after_package(lower, short_package_name(package, config))
    if index < 0:
        index = _after_marker(lower, 'private')
    if index < 0:
        raise HeaderPathError(path, package)

    return path[index:].lstrip(SEPARATORS)


def short_package_name(package: str, config: Optional[GeneratorConfig] = None) -> str:
    """Strip the script namespace: /Script/Engine -> Engine"""
    prefix = (config or _DEFAULT_CONFIG).script_prefix
    if package.startswith(prefix):
        return package[len(prefix):]
    return package


def _after_marker(lower: str, marker: str) -> int:
    """Index right after the last occurrence of a directory marker"""
    index = lower.rfind(marker)
    if index < 0:
        return -1
    return index + len(marker)


def _after_package(lower: str, short_name: str) -> int:
    """Index after '<package>/' found before the file name"""
    if not short_name:
        return -1
    last_sep = max(lower.rfind('/'), lower.rfind('\\'))
    if last_sep < 0:
        return -1
    index = lower.rfind(short_name.lower(), 0, last_sep)
    if index < 0:
        return -1
    return index + len(short_name) + 1
