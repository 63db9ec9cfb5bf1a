"""Settings for an ``App``, fixed once the app is built."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Keyword-only in practice: ``AppConfig(debug=True, db_echo=True)``.

    ``validate_bindings`` runs ``roost check`` logic when the app freezes,
    so a bound handler that cannot match its route refuses to serve.
    ``db_echo`` and ``db_pool_size`` apply to the ``Database`` the app
    builds from a URL; a ``Database`` passed in keeps its own settings.
    """

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    reload_dirs: tuple[str, ...] = ()
    log_level: str = "info"

    validate_bindings: bool = True

    db_echo: bool = False
    db_pool_size: int = 5
