"""
Builder configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from php_reflection.internal_types import InternalTypes


@dataclass
class BuilderConfig:
    """Tuning knobs for a :class:`~php_reflection.builder.DefaultBuilder`."""
    internal_types_file: Optional[Path] = None
    extra_internal_types: Mapping[str, str] = field(default_factory=dict)
    default_line: int = 0

    def validate(self) -> List[str]:
        """Return a list of validation warnings (empty if valid)."""
        warnings: List[str] = []
        if self.default_line < 0:
            warnings.append("default_line must be non-negative")
        for name, package in self.extra_internal_types.items():
            if not package.startswith("+"):
                warnings.append(
                    f"pseudo-package {package!r} for {name!r} should start with '+'"
                )
        if self.internal_types_file is not None and not Path(self.internal_types_file).exists():
            warnings.append(
                f"internal_types_file {str(self.internal_types_file)!r} not found; "
                "using the bundled table"
            )
        return warnings

    def load_internal_types(self) -> InternalTypes:
        """Build the oracle this configuration describes."""
        oracle = InternalTypes.default()
        if self.internal_types_file is not None and Path(self.internal_types_file).exists():
            oracle = InternalTypes.from_file(Path(self.internal_types_file))
        if self.extra_internal_types:
            oracle = oracle.extended(self.extra_internal_types)
        return oracle
