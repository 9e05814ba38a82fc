"""Shared constants for arborist."""

from typing import Tuple


# Labels used to name isolated branches and worktrees
LABEL_PALETTE: Tuple[str, ...] = (
    "red",
    "blue",
    "green",
    "yellow",
    "purple",
    "orange",
    "pink",
    "cyan",
    "teal",
    "magenta",
    "violet",
    "amber",
    "crimson",
    "navy",
    "indigo",
    "lime",
    "coral",
    "maroon",
    "turquoise",
    "slate",
    "lavender",
    "mint",
    "peach",
    "ruby",
    "sapphire",
    "emerald",
    "topaz",
)

# Every branch created by arborist lives under this namespace
BRANCH_PREFIX = "arborist"

# Bare repositories: {repo_root}/arborist-{label}
BARE_WORKTREE_PREFIX = "arborist-"

# Non-bare repositories: {temp_dir}/arborist/{sha256(repo_root)}/{label}
TEMP_WORKTREE_DIR = "arborist"

# Exit codes
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130
