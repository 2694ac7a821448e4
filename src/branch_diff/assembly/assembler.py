"""Per-path routing of changed files into the output directory."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from branch_diff.assembly.closure import ClosureResolver
from branch_diff.assembly.models import ActionKind, AssemblyAction, AssemblyReport, CopyUnit
from branch_diff.config import DeployPolicy
from branch_diff.logging import JsonlRunLogger, RunReporter
from branch_diff.metadata import ProfileDifferential
from branch_diff.workspace import DirectoryCopyOutcome, Workspace


class RevisionReader(Protocol):
    """Source of file content at a past revision."""

    def read_file_at_revision(self, path: str, revision: str) -> str:
        """Return file text at revision."""


_DIRECTORY_ACTIONS = {
    DirectoryCopyOutcome.COPIED: ActionKind.DIRECTORY_COPY,
    DirectoryCopyOutcome.ALREADY_PRESENT: ActionKind.DIRECTORY_ALREADY_PRESENT,
    DirectoryCopyOutcome.UNAVAILABLE: ActionKind.DIRECTORY_SKIPPED,
}


class ChangeSetAssembler:
    """Rebuilds the output directory from an ordered list of changed paths."""

    def __init__(
        self,
        workspace: Workspace,
        revisions: RevisionReader,
        policy: DeployPolicy | None = None,
        reporter: RunReporter | None = None,
        run_log: JsonlRunLogger | None = None,
    ) -> None:
        self._workspace = workspace
        self._revisions = revisions
        self._policy = policy or DeployPolicy()
        self._reporter = reporter or RunReporter()
        self._run_log = run_log
        self._resolver = ClosureResolver(self._policy.component_types)
        self._differential = ProfileDifferential(self._policy.required_elements)

    def assemble(self, changed_paths: Sequence[str], fork_point: str) -> AssemblyReport:
        """Clear the output directory, then handle each path in order."""
        self._workspace.remove_output_directory()
        if self._run_log is not None:
            self._run_log.record(
                "output_cleared",
                path=str(self._workspace.output_root),
                detail={"fork_point": fork_point, "changed_count": len(changed_paths)},
            )

        actions: list[AssemblyAction] = []
        for changed_path in changed_paths:
            actions.extend(self._assemble_path(changed_path, fork_point))

        return AssemblyReport(
            fork_point=fork_point,
            output_directory=str(self._workspace.output_root),
            changed_paths=tuple(changed_paths),
            actions=tuple(actions),
        )

    def _assemble_path(self, changed_path: str, fork_point: str) -> list[AssemblyAction]:
        unit = self._resolver.resolve(changed_path)
        path = unit.changed_path
        if unit.is_bundle:
            self._reporter.info(f"Bundle {unit.component_type} for {path}: {unit.path}")

        actions: list[AssemblyAction] = []
        if path.endswith(self._policy.profile_suffix):
            actions.append(self._write_profile_differential(path, fork_point))
        elif self._workspace.path_exists_as_directory(unit.path):
            actions.append(self._copy_directory(unit))
        else:
            self._workspace.copy_file_verbatim(path)
            actions.append(self._record(ActionKind.FILE_COPY, path, path, path))

        if not path.endswith(self._policy.sidecar_suffix):
            sidecar = path + self._policy.sidecar_suffix
            if self._workspace.path_exists_as_file(sidecar):
                self._workspace.copy_file_verbatim(sidecar)
                actions.append(self._record(ActionKind.SIDECAR_COPY, path, sidecar, sidecar))
        return actions

    def _write_profile_differential(self, path: str, fork_point: str) -> AssemblyAction:
        old_content = self._revisions.read_file_at_revision(path, fork_point)
        new_content = self._workspace.read_working_file(path)
        result = self._differential.compute(old_content, new_content)
        self._workspace.write_output_file(path, result.document)
        return self._record(
            ActionKind.PROFILE_DIFFERENTIAL,
            path,
            path,
            path,
            detail={"changed": result.changed_count, "required": result.required_count},
        )

    def _copy_directory(self, unit: CopyUnit) -> AssemblyAction:
        outcome = self._workspace.copy_directory_recursive(unit.path)
        detail: dict[str, object] = {}
        if unit.is_bundle:
            detail["component_type"] = unit.component_type
        return self._record(
            _DIRECTORY_ACTIONS[outcome],
            unit.changed_path,
            unit.path,
            unit.path,
            ok=outcome is not DirectoryCopyOutcome.UNAVAILABLE,
            detail=detail,
        )

    def _record(
        self,
        kind: ActionKind,
        changed_path: str,
        source: str,
        destination: str,
        ok: bool = True,
        detail: dict[str, object] | None = None,
    ) -> AssemblyAction:
        action = AssemblyAction(
            kind=kind,
            changed_path=changed_path,
            source=source,
            destination=destination,
        )
        if self._run_log is not None:
            payload: dict[str, object] = {"kind": kind.value, "source": source}
            payload.update(detail or {})
            self._run_log.record(kind.value, path=destination, ok=ok, detail=payload)
        return action
