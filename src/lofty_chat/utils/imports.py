from collections.abc import Callable
from importlib import import_module


def optional_import(
    module_name: str,
    name: str | None = None,
    *,
    extra: str | None = None,
) -> Callable[[], object]:
    """Defer importing an optional dependency until first use.

    The returned loader raises ImportError naming the package extra to
    install when the module is missing.
    """

    def _load() -> object:
        try:
            mod = import_module(module_name)
        except ImportError as e:
            hint = f" Install it with: pip install 'lofty-chat[{extra}]'" if extra else ""
            raise ImportError(f"Optional dependency '{module_name}' is missing.{hint}") from e
        return getattr(mod, name) if name else mod

    return _load
