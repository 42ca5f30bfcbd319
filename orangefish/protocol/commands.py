# -*- coding: utf-8 -*-
"""
Outbound Commands
Closed set of fire-and-forget requests the view sends to the backend.

Every command has a wire ``name``, a ``tracked`` flag (tracked commands
keep the busy indicator on until a completion event arrives) and a JSON
``payload()``. Booleans are sent as native JSON booleans.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, Union

from orangefish.protocol.events import FileChange, Preferences

STAGED = "staged"
UNSTAGED = "unstaged"


@dataclass(frozen=True)
class _Command:
    name: ClassVar[str] = ""
    tracked: ClassVar[bool] = True

    def payload(self) -> Any:
        return None

    def to_message(self) -> dict:
        """Wire representation: {"command": name, "payload": ...}."""
        return {"command": self.name, "payload": self.payload()}


@dataclass(frozen=True)
class Stage(_Command):
    name: ClassVar[str] = "stage"

    change: FileChange

    def payload(self):
        return {"path": self.change.path, "status": int(self.change.status)}


@dataclass(frozen=True)
class Unstage(_Command):
    name: ClassVar[str] = "unstage"

    change: FileChange

    def payload(self):
        return {"path": self.change.path, "status": int(self.change.status)}


@dataclass(frozen=True)
class Commit(_Command):
    name: ClassVar[str] = "commit"

    summary: str
    message: str = ""

    def payload(self):
        return {"summaryText": self.summary, "messageText": self.message}


@dataclass(frozen=True)
class CommitPush(Commit):
    name: ClassVar[str] = "commit-push"


@dataclass(frozen=True)
class Fetch(_Command):
    name: ClassVar[str] = "fetch"


@dataclass(frozen=True)
class Pull(_Command):
    name: ClassVar[str] = "pull"


@dataclass(frozen=True)
class Push(_Command):
    """Push HEAD; the backend prefers the branch's upstream over ``remote``."""

    name: ClassVar[str] = "push"

    remote: Optional[str] = None
    force: bool = False

    def payload(self):
        return {"selectedRemote": self.remote, "isForcePush": self.force}


@dataclass(frozen=True)
class Checkout(_Command):
    name: ClassVar[str] = "checkout"

    ref_name: str

    def payload(self):
        return self.ref_name


@dataclass(frozen=True)
class CheckoutRemote(_Command):
    name: ClassVar[str] = "checkout-remote"

    ref_name: str
    branch_name: str

    def payload(self):
        return {"full_branch_name": self.ref_name, "branch_name": self.branch_name}


@dataclass(frozen=True)
class CreateBranch(_Command):
    name: ClassVar[str] = "branch"

    branch_name: str
    checkout: bool = False

    def payload(self):
        return {"branch_name": self.branch_name, "checkout_on_create": self.checkout}


@dataclass(frozen=True)
class DeleteLocalBranch(_Command):
    name: ClassVar[str] = "delete-local-branch"

    ref_name: str

    def payload(self):
        return self.ref_name


@dataclass(frozen=True)
class DeleteRemoteBranch(_Command):
    name: ClassVar[str] = "delete-remote-branch"

    ref_name: str

    def payload(self):
        return self.ref_name


@dataclass(frozen=True)
class DeleteTag(_Command):
    name: ClassVar[str] = "delete-tag"

    ref_name: str

    def payload(self):
        return self.ref_name


@dataclass(frozen=True)
class SaveCredentials(_Command):
    name: ClassVar[str] = "save-credentials"

    username: str
    password: str = field(repr=False)

    def payload(self):
        return {"username": self.username, "password": self.password}


@dataclass(frozen=True)
class SavePreferences(_Command):
    name: ClassVar[str] = "save-preferences"

    preferences: Preferences

    def payload(self):
        return {
            "limit_commits": self.preferences.limit_commits,
            "commit_count": self.preferences.commit_count,
        }


@dataclass(frozen=True)
class FileDiff(_Command):
    """Ask for one file's diff; answered by a show-file-lines event."""

    name: ClassVar[str] = "file-diff"
    tracked: ClassVar[bool] = False

    path: str
    change_type: str = UNSTAGED

    def __post_init__(self):
        if self.change_type not in (STAGED, UNSTAGED):
            raise ValueError(f"change_type must be '{STAGED}' or '{UNSTAGED}'")

    def payload(self):
        return {"file_path": self.path, "change_type": self.change_type}


OutboundCommand = Union[
    Stage,
    Unstage,
    Commit,
    CommitPush,
    Fetch,
    Pull,
    Push,
    Checkout,
    CheckoutRemote,
    CreateBranch,
    DeleteLocalBranch,
    DeleteRemoteBranch,
    DeleteTag,
    SaveCredentials,
    SavePreferences,
    FileDiff,
]

COMMAND_NAMES = frozenset(
    cls.name
    for cls in (
        Stage,
        Unstage,
        Commit,
        CommitPush,
        Fetch,
        Pull,
        Push,
        Checkout,
        CheckoutRemote,
        CreateBranch,
        DeleteLocalBranch,
        DeleteRemoteBranch,
        DeleteTag,
        SaveCredentials,
        SavePreferences,
        FileDiff,
    )
)
