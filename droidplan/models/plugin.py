"""Supported Gradle plugins for the Android target."""

from enum import Enum


class PluginKind(str, Enum):
    """Closed set of plugins a manifest may apply."""

    ANDROID_APPLICATION = "com.android.application"
    ANDROID_LIBRARY = "com.android.library"
    KOTLIN_ANDROID = "kotlin-android"
    GOOGLE_SERVICES = "com.google.gms.google-services"
    FLUTTER = "dev.flutter.flutter-gradle-plugin"

    @classmethod
    def from_identifier(cls, identifier: str) -> "PluginKind | None":
        """Map a declared plugin identifier (or one of its aliases) to a kind."""
        identifier = identifier.strip()
        identifier = PLUGIN_ALIASES.get(identifier, identifier)
        try:
            return cls(identifier)
        except ValueError:
            return None


PLUGIN_ALIASES: dict[str, str] = {
    "org.jetbrains.kotlin.android": PluginKind.KOTLIN_ANDROID.value,
}

_ANDROID_PLUGINS = (PluginKind.ANDROID_APPLICATION, PluginKind.ANDROID_LIBRARY)

# Each entry lists alternatives; at least one must also be applied.
PLUGIN_REQUIREMENTS: dict[PluginKind, tuple[PluginKind, ...]] = {
    PluginKind.KOTLIN_ANDROID: _ANDROID_PLUGINS,
    PluginKind.FLUTTER: _ANDROID_PLUGINS,
    PluginKind.GOOGLE_SERVICES: (PluginKind.ANDROID_APPLICATION,),
}
