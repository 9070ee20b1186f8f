from __future__ import annotations

import platform
import sys

_NO_NATIVE_LETTER_SPACING = frozenset({"android"})


def current_platform() -> str:
    """Lower-case host platform name (`android`, `darwin`, `linux`, `windows`, ...)."""

    if sys.platform == "android" or hasattr(sys, "getandroidapilevel"):
        return "android"
    return platform.system().lower() or sys.platform


def supports_native_letter_spacing(platform_name: str | None = None) -> bool:
    name = (platform_name or current_platform()).strip().lower()
    return name not in _NO_NATIVE_LETTER_SPACING
