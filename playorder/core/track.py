import os
from dataclasses import dataclass, field
from typing import Dict, Any, Optional


@dataclass
class Track:
    """
    One file in the working directory, as shown in the ordered list.
    Rebuilt on every reload; never persisted.
    """
    ordinal: int
    name: str  # on-disk base name, without extension
    suffix: str = '.mp3'  # extension as found on disk
    label: Optional[str] = None  # edited label, None = unchanged
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.label if self.label is not None else self.name

    @property
    def filename(self) -> str:
        return self.name + self.suffix

    def path_in(self, directory: str) -> str:
        return os.path.join(directory, self.filename)
