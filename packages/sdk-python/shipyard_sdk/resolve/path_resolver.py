"""
Module Store Path Resolution
============================

Maps closure members to their directories inside the module store.
"""

import os
from typing import Iterable, List, Set

from .models import ResolvedPackage


def resolve_paths(names: Iterable[str], modules_folder: str) -> List[ResolvedPackage]:
    """
    Join each module name onto the module store directory.

    Entries are de-duplicated by path, first occurrence wins, so the
    result stays unique even if the names are not.

    Examples:
        >>> resolve_paths(["a", "@scope/b", "a"], "/nm")
        [ResolvedPackage(name='a', path='/nm/a'), ResolvedPackage(name='@scope/b', path='/nm/@scope/b')]
    """
    packages: List[ResolvedPackage] = []
    seen: Set[str] = set()

    for name in names:
        path = os.path.join(modules_folder, name)
        if path in seen:
            continue
        seen.add(path)
        packages.append(ResolvedPackage(name=name, path=path))

    return packages
