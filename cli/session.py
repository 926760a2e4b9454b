"""
Session Context - who is logged in and what they are working on

Holds the current user (with token), current project, current analysis and
the methods the user picked from the recommendations. It is filled by
login/register, project selection, method selection and processing, saved
to a JSON file between invocations, and wiped completely on logout.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field, asdict


SESSION_VERSION = "1.0"


@dataclass
class SessionContext:
    """Explicit client-side state for one user"""
    current_user: Optional[Dict[str, Any]] = None
    token: Optional[str] = None
    current_project: Optional[Dict[str, Any]] = None
    current_analysis: Optional[Dict[str, Any]] = None
    selected_methods: List[str] = field(default_factory=list)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.current_user)

    def login(self, user: Dict[str, Any], token: str) -> None:
        """Start a fresh session for ``user``; nothing from a previous user survives"""
        self.clear()
        self.current_user = dict(user)
        self.token = token

    def select_project(self, project: Dict[str, Any]) -> None:
        # Method picks and results belong to the previous project
        if not self.current_project or self.current_project.get("id") != project.get("id"):
            self.selected_methods = []
            self.current_analysis = None
        self.current_project = dict(project)

    def select_methods(self, methods: List[str]) -> None:
        """Replace the selection, keeping order and dropping duplicates"""
        seen = []
        for method in methods:
            if method and method not in seen:
                seen.append(method)
        self.selected_methods = seen

    def set_analysis(self, analysis: Dict[str, Any]) -> None:
        self.current_analysis = dict(analysis)

    def clear(self) -> None:
        self.current_user = None
        self.token = None
        self.current_project = None
        self.current_analysis = None
        self.selected_methods = []

    def to_dict(self) -> Dict[str, Any]:
        return {"version": SESSION_VERSION, **asdict(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionContext":
        return cls(
            current_user=data.get("current_user"),
            token=data.get("token"),
            current_project=data.get("current_project"),
            current_analysis=data.get("current_analysis"),
            selected_methods=list(data.get("selected_methods") or []),
        )


class SessionStore:
    """Loads and saves a SessionContext as JSON"""

    def __init__(self, session_file: str):
        self.session_file = Path(session_file)

    def load(self) -> SessionContext:
        if not self.session_file.exists():
            return SessionContext()
        try:
            data = json.loads(self.session_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            # Unreadable session file: start logged out
            return SessionContext()
        return SessionContext.from_dict(data)

    def save(self, session: SessionContext) -> None:
        self.session_file.parent.mkdir(parents=True, exist_ok=True)
        self.session_file.write_text(json.dumps(session.to_dict(), indent=2), encoding="utf-8")
        os.chmod(self.session_file, 0o600)  # owner only, holds the access token

    def clear(self, session: SessionContext) -> None:
        """Logout: wipe the in-memory context and remove the file"""
        session.clear()
        if self.session_file.exists():
            self.session_file.unlink()
