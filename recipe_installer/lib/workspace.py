from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..errors import WorkspaceViolation

__all__ = ["Workspace", "WorkspaceViolation"]


@dataclass(frozen=True)
class Workspace:
    """The application root an installer is allowed to modify."""

    root: Path

    @classmethod
    def from_path(cls, root: str | Path) -> "Workspace":
        p = Path(root).expanduser()
        try:
            p = p.resolve()
        except OSError:
            p = p.absolute()
        return cls(root=p)

    @classmethod
    def current(cls) -> "Workspace":
        return cls.from_path(Path.cwd())

    def resolve_rel(self, rel: str | Path) -> Path:
        """Resolve a step-provided relative path within the workspace."""
        rp = Path(rel)
        if rp.is_absolute():
            raise WorkspaceViolation(f"Absolute paths are not allowed: {rel}")

        candidate = (self.root / rp).resolve()
        try:
            candidate.relative_to(self.root)
        except ValueError as e:
            raise WorkspaceViolation(f"Path escapes workspace: {rel}") from e
        return candidate

    def relative(self, p: Path) -> str:
        try:
            return p.resolve().relative_to(self.root).as_posix()
        except ValueError as e:
            raise WorkspaceViolation(f"Path resolves outside workspace: {p}") from e

    def glob(self, pattern: str) -> list[Path]:
        if not pattern or not pattern.strip():
            raise WorkspaceViolation("Search pattern must not be empty")
        if Path(pattern).is_absolute() or ".." in Path(pattern).parts:
            raise WorkspaceViolation(f"Search pattern escapes workspace: {pattern}")
        skip = {"node_modules", ".git", ".venv"}
        out: list[Path] = []
        for p in sorted(self.root.glob(pattern)):
            if not p.is_file():
                continue
            if skip.intersection(p.relative_to(self.root).parts):
                continue
            out.append(p)
        return out

    def exists(self, rel: str | Path) -> bool:
        return self.resolve_rel(rel).exists()

    # newline="" keeps the file's own line endings on a read/transform/write round trip.
    def read_text(self, rel: str | Path) -> str:
        with self.resolve_rel(rel).open("r", encoding="utf-8", newline="") as f:
            return f.read()

    def write_text(self, rel: str | Path, content: str) -> None:
        p = self.resolve_rel(rel)
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", encoding="utf-8", newline="") as f:
            f.write(content)
