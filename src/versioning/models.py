"""Data models for dependency declarations."""

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional, Tuple

# (operator, version), e.g. ("~=", "3.2")
VersionConstraint = Tuple[str, str]


@dataclass(frozen=True, eq=False)
class Specifier:
    """A parsed dependency declaration such as ``pandas[excel]>=1.3; os_name == 'nt'``.

    Identity is the lowercased name only: two specifiers naming the same
    package are equal whatever their extras, constraint or marker. This is
    what lets a freshly detected ``django`` match a declared ``Django>=4``.
    """
    name: str
    extras: FrozenSet[str] = field(default_factory=frozenset)
    version_spec: Optional[VersionConstraint] = None
    markers: Optional[str] = None

    @property
    def key(self) -> str:
        """Case-insensitive identity used for equality and hashing."""
        return self.name.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Specifier):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        out = self.name
        if self.extras:
            out += "[" + ",".join(sorted(self.extras)) + "]"
        if self.version_spec is not None:
            out += f"{self.version_spec[0]}{self.version_spec[1]}"
        if self.markers is not None:
            out += f"; {self.markers}"
        return out

    def with_version(self, operator: str, version: str) -> "Specifier":
        """Return a new specifier carrying ``operator``+``version``."""
        return replace(self, version_spec=(operator, version))

