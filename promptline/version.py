from __future__ import annotations

import importlib.metadata

DIST_NAME = "promptline"


def get_version() -> str:
    try:
        return importlib.metadata.version(DIST_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "0+unknown"


def get_version_string() -> str:
    return f"{DIST_NAME} {get_version()}"
