"""
Resolution Data Model
=====================

Types flowing between the resolution phases. All of them are created and
discarded within a single resolution call.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from pydantic import BaseModel, ConfigDict

DependencyGraph = Dict[str, List[str]]
"""Bare module name -> ordered, unique bare names of its direct dependencies"""


class RawTreeNode(BaseModel):
    """
    One entry of the package manager's dependency tree.

    ``name`` is ``"<module>@<version>"``; scoped modules start with ``@``.
    Extra keys reported by the tool (hint, color, depth, shadow) are kept.
    """

    name: str
    children: List["RawTreeNode"] = []

    model_config = ConfigDict(extra="allow")


@dataclass(frozen=True)
class ResolvedPackage:
    """Filesystem location of one closure member."""

    name: str
    """Bare module name (e.g. '@theia/core')"""

    path: str
    """Directory inside the module store"""


@dataclass
class DependencyResolution:
    """Result of resolving the production dependencies of a root module."""

    root_module: str
    """Module the closure was computed from (not part of packages)"""

    modules_folder: str
    """Module store the paths were resolved against"""

    packages: List[ResolvedPackage] = field(default_factory=list)
    """Resolved packages in first-visited order"""

    @property
    def paths(self) -> List[str]:
        return [package.path for package in self.packages]

    @property
    def names(self) -> List[str]:
        return [package.name for package in self.packages]
