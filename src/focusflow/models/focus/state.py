"""Timer snapshot persistence so a session survives a restart."""

import json
from datetime import date, datetime
from pathlib import Path

from focusflow.models.exceptions import InvalidModeDurationError

from .cycling import PomodoroConfig
from .timer import TimerSession


class TimerStateManager:
    """Manages timer snapshot persistence."""

    def __init__(self, state_dir: Path | None = None, profile: str = "default"):
        """Initialize state manager; each profile keeps its own snapshot file."""
        if state_dir is None:
            from platformdirs import user_data_dir

            state_dir = Path(user_data_dir("focusflow")) / "state"

        self.state_dir = state_dir
        self.state_dir.mkdir(parents=True, exist_ok=True)
        suffix = "" if profile == "default" else f"_{profile}"
        self.state_file = self.state_dir / f"timer_session{suffix}.json"

    def save(self, session: TimerSession, now: datetime | None = None) -> None:
        """Save a paused snapshot of *session*."""
        now = now or datetime.now()
        data = session.to_dict()
        # Nothing ticks once the process is gone
        data["is_running"] = False
        data["saved_at"] = now.isoformat()

        with open(self.state_file, "w") as f:
            json.dump(data, f, indent=2)

        # Set secure permissions
        self.state_file.chmod(0o600)

    def load(self, config: PomodoroConfig | None = None) -> TimerSession | None:
        """Load the saved session. Returns None if file missing or invalid."""
        data = self._read()
        if data is None:
            return None
        try:
            return TimerSession.from_dict(data, config=config)
        except (TypeError, ValueError, KeyError, InvalidModeDurationError):
            return None

    def saved_on(self) -> date | None:
        """Day the snapshot was written, if any."""
        data = self._read()
        if not data or not data.get("saved_at"):
            return None
        try:
            return datetime.fromisoformat(data["saved_at"]).date()
        except (TypeError, ValueError):
            return None

    def delete(self) -> None:
        """Delete the snapshot file."""
        if self.state_file.exists():
            self.state_file.unlink()

    def _read(self) -> dict | None:
        if not self.state_file.exists():
            return None
        try:
            with open(self.state_file) as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError):
            return None
        return data if isinstance(data, dict) else None
