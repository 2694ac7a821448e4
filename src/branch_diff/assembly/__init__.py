"""Bundle closure and change set assembly."""

from .assembler import ChangeSetAssembler, RevisionReader
from .closure import ClosureResolver
from .models import ActionKind, AssemblyAction, AssemblyReport, CopyUnit

__all__ = [
    "ActionKind",
    "AssemblyAction",
    "AssemblyReport",
    "ChangeSetAssembler",
    "ClosureResolver",
    "CopyUnit",
    "RevisionReader",
]
