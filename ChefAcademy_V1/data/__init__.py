"""
Data entry point with deferred imports to avoid import cycles.
Exposes getters rather than global objects computed at import time.
"""

from functools import lru_cache


@lru_cache(maxsize=1)
def get_CATALOG():
    from ChefAcademy_V1.domain.catalog import load_catalog

    return load_catalog()


def get_SETTINGS():
    from ChefAcademy_V1.domain.progress import GameSettings

    return GameSettings()
