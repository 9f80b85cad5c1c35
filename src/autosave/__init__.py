"""autosave - settings objects that persist themselves to JSON on every change"""

__version__ = "1.0.0"
__description__ = "Settings objects that persist themselves to JSON on every change"

__all__ = [
    "AutosavingSettings",
    "BoolField",
    "Field",
    "FieldChanged",
    "ObservableSettings",
    "PersistenceTrigger",
    "__version__",
]


def __getattr__(name: str):
    """Lazy import so the core types can be used without the storage adapters."""
    if name == "AutosavingSettings":
        from .settings import AutosavingSettings

        return AutosavingSettings
    if name in ("Field", "BoolField", "FieldChanged"):
        from .core import fields

        return getattr(fields, name)
    if name == "ObservableSettings":
        from .core.observable import ObservableSettings

        return ObservableSettings
    if name == "PersistenceTrigger":
        from .core.persistence import PersistenceTrigger

        return PersistenceTrigger
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
