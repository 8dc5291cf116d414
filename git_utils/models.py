from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class TargetRefs:
    branch: str
    local_ref: Optional[str]
    remote_ref: Optional[str]

    @property
    def found(self):
        return bool(self.local_ref or self.remote_ref)

    @property
    def primary(self):
        # The remote-tracking ref wins when both exist.
        return self.remote_ref or self.local_ref


@dataclass(frozen=True)
class ChangeSet:
    current_branch: str
    target_branch: str
    primary_ref: str
    merge_base: str
    changed_files: Tuple[str, ...]
    diff_text: str
    diff_stat: str

    @property
    def merge_base_found(self):
        return self.merge_base != self.primary_ref

    @property
    def is_empty(self):
        return not self.changed_files


@dataclass(frozen=True)
class HeadCommit:
    short_hash: str
    message: str
    author: str


__all__ = ["TargetRefs", "ChangeSet", "HeadCommit"]
