# -*- coding: utf-8 -*-
"""
Inbound Events
Closed set of messages the backend pushes to the view, validated at the boundary.

Wire format: an event name plus a JSON payload using the backend's field
names. Booleans and counts must be native JSON booleans and integers.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Union

from orangefish.core.namespace_tree import NamespaceEntry, NamespaceKind
from orangefish.core.result import INVALID_PAYLOAD, UNKNOWN_EVENT, Result


class FileStatus(enum.IntEnum):
    UNMODIFIED = 0
    ADDED = 1
    DELETED = 2
    MODIFIED = 3
    RENAMED = 4
    COPIED = 5
    IGNORED = 6
    UNTRACKED = 7
    TYPECHANGE = 8
    UNREADABLE = 9
    CONFLICTED = 10


@dataclass(frozen=True)
class FileChange:
    path: str
    status: FileStatus


@dataclass(frozen=True)
class ChangeList:
    files_changed: int = 0
    unstaged: tuple[FileChange, ...] = ()
    staged: tuple[FileChange, ...] = ()


@dataclass(frozen=True)
class DiffLine:
    old_lineno: Optional[int]
    new_lineno: Optional[int]
    origin: str
    content: str
    file_type: str = ""


@dataclass(frozen=True)
class CommitSummary:
    oid: str
    summary: str
    parent_oids: tuple[str, ...] = ()
    child_oids: tuple[str, ...] = ()
    column: int = 0
    row: int = 0


@dataclass(frozen=True)
class CommitDetail:
    oid: str
    summary: str
    message: str = ""
    author: str = ""
    files: tuple[FileChange, ...] = ()


@dataclass(frozen=True)
class GeneralInfo:
    head_has_upstream: bool = False
    is_merging: bool = False
    is_rebasing: bool = False
    is_cherrypicking: bool = False
    is_reverting: bool = False

    @property
    def operation(self) -> str:
        """Repository operation in progress; selects the commit controls."""
        if self.is_merging:
            return "merge"
        if self.is_rebasing:
            return "rebase"
        if self.is_cherrypicking:
            return "cherrypick"
        if self.is_reverting:
            return "revert"
        return "commit"


@dataclass(frozen=True)
class Preferences:
    limit_commits: bool = True
    commit_count: int = 2000


# ---------------------------------------------------------------------------
# Event variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StartProcess:
    name: ClassVar[str] = "start-process"


@dataclass(frozen=True)
class EndProcess:
    name: ClassVar[str] = "end-process"


@dataclass(frozen=True)
class UpdateAll:
    name: ClassVar[str] = "update_all"

    general_info: GeneralInfo
    changes: ChangeList
    namespaces: tuple[NamespaceEntry, ...] = ()
    remotes: tuple[str, ...] = ()
    commits: Optional[tuple[CommitSummary, ...]] = None


@dataclass(frozen=True)
class UpdateChanges:
    name: ClassVar[str] = "update_changes"

    changes: ChangeList


@dataclass(frozen=True)
class ShowFileLines:
    name: ClassVar[str] = "show-file-lines"

    lines: tuple[DiffLine, ...]


@dataclass(frozen=True)
class CommitInfo:
    name: ClassVar[str] = "commit-info"

    commit: CommitDetail


@dataclass(frozen=True)
class GetCredentials:
    name: ClassVar[str] = "get-credentials"


@dataclass(frozen=True)
class ShowPreferences:
    name: ClassVar[str] = "show-preferences"

    preferences: Preferences


@dataclass(frozen=True)
class ErrorNotice:
    name: ClassVar[str] = "error"

    message: str


InboundEvent = Union[
    StartProcess,
    EndProcess,
    UpdateAll,
    UpdateChanges,
    ShowFileLines,
    CommitInfo,
    GetCredentials,
    ShowPreferences,
    ErrorNotice,
]


# ---------------------------------------------------------------------------
# Payload validation
# ---------------------------------------------------------------------------


class PayloadError(ValueError):
    """A payload field is missing or has the wrong type."""

    def __init__(self, field_name: str, message: str):
        super().__init__(f"{field_name}: {message}")
        self.field_name = field_name


def _field(data, key, path=""):
    where = f"{path}.{key}" if path else key
    if not isinstance(data, dict):
        raise PayloadError(path or "payload", "expected an object")
    if key not in data:
        raise PayloadError(where, "missing")
    return data[key], where


def _str(data, key, path="", default=None):
    if default is not None and isinstance(data, dict) and key not in data:
        return default
    value, where = _field(data, key, path)
    if not isinstance(value, str):
        raise PayloadError(where, "expected a string")
    return value


def _bool(data, key, path="", default=None):
    if default is not None and isinstance(data, dict) and key not in data:
        return default
    value, where = _field(data, key, path)
    if not isinstance(value, bool):
        raise PayloadError(where, "expected a boolean")
    return value


def _count(data, key, path="", default=None):
    if default is not None and isinstance(data, dict) and key not in data:
        return default
    value, where = _field(data, key, path)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise PayloadError(where, "expected a non-negative integer")
    return value


def _optional_lineno(data, key, path):
    value, where = _field(data, key, path)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise PayloadError(where, "expected an integer or null")
    return value


def _list(data, key, path="", default=None):
    if default is not None and isinstance(data, dict) and key not in data:
        return default
    value, where = _field(data, key, path)
    if not isinstance(value, list):
        raise PayloadError(where, "expected a list")
    return value


def _str_tuple(data, key, path):
    values = _list(data, key, path, default=[])
    if not all(isinstance(v, str) for v in values):
        raise PayloadError(f"{path}.{key}", "expected a list of strings")
    return tuple(values)


def parse_file_change(data, path="file") -> FileChange:
    raw_status = _count(data, "status", path)
    try:
        status = FileStatus(raw_status)
    except ValueError:
        raise PayloadError(f"{path}.status", f"unknown status {raw_status}") from None
    return FileChange(path=_str(data, "path", path), status=status)


def parse_change_list(data, path="files_changed_info_list") -> ChangeList:
    unstaged = _list(data, "unstaged_files", path)
    staged = _list(data, "staged_files", path)
    return ChangeList(
        files_changed=_count(data, "files_changed", path),
        unstaged=tuple(
            parse_file_change(f, f"{path}.unstaged_files[{i}]") for i, f in enumerate(unstaged)
        ),
        staged=tuple(
            parse_file_change(f, f"{path}.staged_files[{i}]") for i, f in enumerate(staged)
        ),
    )


def parse_namespace_entry(data, path="branch") -> NamespaceEntry:
    raw_kind = _str(data, "branch_type", path)
    try:
        kind = NamespaceKind(raw_kind)
    except ValueError:
        raise PayloadError(f"{path}.branch_type", f"unknown kind {raw_kind!r}") from None
    full_name = _str(data, "branch_shorthand", path)
    return NamespaceEntry(
        full_name=full_name,
        shorthand=_str(data, "label", path, default=""),
        kind=kind,
        is_head=_bool(data, "is_head", path, default=False),
        ahead=_count(data, "ahead", path, default=0),
        behind=_count(data, "behind", path, default=0),
        ref_name=_str(data, "full_branch_name", path, default=full_name),
    )


def parse_general_info(data, path="general_info") -> GeneralInfo:
    return GeneralInfo(
        head_has_upstream=_bool(data, "head_has_upstream", path, default=False),
        is_merging=_bool(data, "is_merging", path, default=False),
        is_rebasing=_bool(data, "is_rebasing", path, default=False),
        is_cherrypicking=_bool(data, "is_cherrypicking", path, default=False),
        is_reverting=_bool(data, "is_reverting", path, default=False),
    )


def parse_commit_summary(data, path="commit") -> CommitSummary:
    return CommitSummary(
        oid=_str(data, "oid", path),
        summary=_str(data, "summary", path, default=""),
        parent_oids=_str_tuple(data, "parent_oids", path),
        child_oids=_str_tuple(data, "child_oids", path),
        column=_count(data, "x", path, default=0),
        row=_count(data, "y", path, default=0),
    )


def parse_diff_line(data, path="line") -> DiffLine:
    return DiffLine(
        old_lineno=_optional_lineno(data, "old_lineno", path),
        new_lineno=_optional_lineno(data, "new_lineno", path),
        origin=_str(data, "origin", path),
        content=_str(data, "content", path),
        file_type=_str(data, "file_type", path, default=""),
    )


def parse_preferences(data, path="preferences") -> Preferences:
    return Preferences(
        limit_commits=_bool(data, "limit_commits", path),
        commit_count=_count(data, "commit_count", path),
    )


def _parse_update_all(payload):
    commits = None
    if isinstance(payload, dict) and payload.get("commit_info_list") is not None:
        commits = tuple(
            parse_commit_summary(c, f"commit_info_list[{i}]")
            for i, c in enumerate(_list(payload, "commit_info_list"))
        )
    remotes = _list(payload, "remote_info_list", default=[])
    if not all(isinstance(r, str) for r in remotes):
        raise PayloadError("remote_info_list", "expected a list of strings")
    branches = _list(payload, "branch_info_list", default=[])
    return UpdateAll(
        general_info=parse_general_info(_field(payload, "general_info")[0]),
        changes=parse_change_list(_field(payload, "files_changed_info_list")[0]),
        namespaces=tuple(
            parse_namespace_entry(b, f"branch_info_list[{i}]") for i, b in enumerate(branches)
        ),
        remotes=tuple(remotes),
        commits=commits,
    )


def _parse_commit_info(payload):
    files = _list(payload, "files", default=[])
    return CommitInfo(
        commit=CommitDetail(
            oid=_str(payload, "oid"),
            summary=_str(payload, "summary", default=""),
            message=_str(payload, "message", default=""),
            author=_str(payload, "author", default=""),
            files=tuple(parse_file_change(f, f"files[{i}]") for i, f in enumerate(files)),
        )
    )


UNKNOWN_ERROR_MESSAGE = "The backend reported an error without a message."


def _parse_error(payload):
    # Errors are never rejected; whatever arrived is shown to the user
    if isinstance(payload, str) and payload:
        return ErrorNotice(message=payload)
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message:
            return ErrorNotice(message=message)
    if payload is None or payload == "" or payload == {}:
        return ErrorNotice(message=UNKNOWN_ERROR_MESSAGE)
    return ErrorNotice(message=str(payload))


def _parse_file_lines(payload):
    if not isinstance(payload, list):
        raise PayloadError("payload", "expected a list of lines")
    return ShowFileLines(
        lines=tuple(parse_diff_line(line, f"lines[{i}]") for i, line in enumerate(payload))
    )


_PARSERS = {
    StartProcess.name: lambda payload: StartProcess(),
    EndProcess.name: lambda payload: EndProcess(),
    UpdateAll.name: _parse_update_all,
    UpdateChanges.name: lambda payload: UpdateChanges(changes=parse_change_list(payload)),
    ShowFileLines.name: _parse_file_lines,
    CommitInfo.name: _parse_commit_info,
    GetCredentials.name: lambda payload: GetCredentials(),
    ShowPreferences.name: lambda payload: ShowPreferences(preferences=parse_preferences(payload)),
    ErrorNotice.name: _parse_error,
}

# Events that close an operation; each one releases one unit of activity
COMPLETION_EVENTS = frozenset(
    {EndProcess.name, UpdateAll.name, UpdateChanges.name, ErrorNotice.name}
)


def parse_event(name: str, payload: Any = None) -> Result[InboundEvent]:
    """
    Turn a wire message into a typed event.

    Args:
        name: Event name as sent by the backend
        payload: Decoded JSON payload (may be None for payload-less events)

    Returns:
        Result holding the event, or an UNKNOWN_EVENT / INVALID_PAYLOAD error
    """
    parser = _PARSERS.get(name)
    if parser is None:
        return Result.failure(
            UNKNOWN_EVENT, f"Unknown backend event '{name}'", meta={"event": name}
        )
    try:
        return Result.success(parser(payload))
    except PayloadError as e:
        return Result.failure(
            INVALID_PAYLOAD,
            f"Malformed '{name}' payload",
            details=str(e),
            meta={"event": name, "field": e.field_name},
        )
    except ValueError as e:
        return Result.failure(
            INVALID_PAYLOAD,
            f"Malformed '{name}' payload",
            details=str(e),
            meta={"event": name},
        )
