"""Configuration handling for arborist"""

from dataclasses import dataclass, field
from typing import Optional, List

from arborist.constants import BRANCH_PREFIX, LABEL_PALETTE


@dataclass
class Config:
    """Configuration for arborist with validation."""

    # Output
    verbose: bool = False
    debug: bool = False

    # Label selection: parent-pid derived unless random_label is set
    random_label: bool = False
    palette: List[str] = field(default_factory=lambda: list(LABEL_PALETTE))
    branch_prefix: str = BRANCH_PREFIX

    # Base directory for non-bare worktrees (None = system temp dir)
    temp_dir: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_palette()
        self._validate_branch_prefix()
        self._validate_temp_dir()

    def _validate_palette(self):
        """Validate palette is a non-empty list of unique labels."""
        if not isinstance(self.palette, (list, tuple)):
            raise ValueError("palette must be a list")
        self.palette = [label.strip() for label in self.palette]
        if not self.palette:
            raise ValueError("palette cannot be empty")
        if any(not label for label in self.palette):
            raise ValueError("palette cannot contain empty labels")
        if len(set(self.palette)) != len(self.palette):
            raise ValueError(f"palette contains duplicate labels: {self.palette}")

    def _validate_branch_prefix(self):
        """Validate branch_prefix is a single non-empty ref component."""
        if not self.branch_prefix or not self.branch_prefix.strip():
            raise ValueError("branch_prefix cannot be empty")
        self.branch_prefix = self.branch_prefix.strip().strip("/")
        if any(ch.isspace() for ch in self.branch_prefix):
            raise ValueError(f"branch_prefix cannot contain whitespace, got '{self.branch_prefix}'")

    def _validate_temp_dir(self):
        """Validate temp_dir is either unset or a non-empty path."""
        if self.temp_dir is not None and not str(self.temp_dir).strip():
            raise ValueError("temp_dir cannot be empty")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "verbose": self.verbose,
            "debug": self.debug,
            "random_label": self.random_label,
            "palette": list(self.palette),
            "branch_prefix": self.branch_prefix,
            "temp_dir": self.temp_dir,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "verbose",
            "debug",
            "random_label",
            "palette",
            "branch_prefix",
            "temp_dir",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
