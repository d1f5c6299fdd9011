"""
Monitoring Utilities
Dispatch counters and process health
"""

import platform
import threading
import time
from typing import Any, Dict, List

import psutil


class Monitoring:
    """Counts processed messages and command outcomes."""

    def __init__(self):
        self.start_time = time.time()
        self._lock = threading.Lock()
        self.metrics = {
            "messagesProcessed": 0,
            "commandsExecuted": 0,
            "commandsFailed": 0,
            "permissionDenied": 0,
        }

    def _bump(self, key: str) -> None:
        with self._lock:
            self.metrics[key] += 1

    def record_message(self) -> None:
        """Record an inbound message seen by the dispatcher."""
        self._bump("messagesProcessed")

    def record_command(self) -> None:
        """Record command execution."""
        self._bump("commandsExecuted")

    def record_failure(self) -> None:
        """Record a handler failure."""
        self._bump("commandsFailed")

    def record_permission_denied(self) -> None:
        self._bump("permissionDenied")

    def snapshot(self) -> Dict[str, int]:
        """Copy of the counters."""
        with self._lock:
            return dict(self.metrics)

    def get_system_metrics(self) -> Dict[str, Any]:
        """
        Get process metrics.

        Returns:
            Dict with memory, uptime, and platform info
        """
        process = psutil.Process()
        memory_info = process.memory_info()

        return {
            "memory": {
                "used": round(memory_info.rss / 1024 / 1024),
                "systemTotal": round(psutil.virtual_memory().total / 1024 / 1024),
            },
            "uptime": self.format_duration(int(time.time() - self.start_time)),
            "platform": {
                "python": platform.python_version(),
                "os": f"{platform.system()} {platform.release()}",
            },
        }

    def format_status(self, registered_commands: int = 0) -> str:
        """
        Format dispatch status for display.

        Args:
            registered_commands: Number of commands currently registered

        Returns:
            Formatted status string
        """
        system = self.get_system_metrics()
        metrics = self.snapshot()

        lines = [
            "📊 **Console Status**",
            "",
            f"Commands registered: {registered_commands}",
            f"Messages: {metrics['messagesProcessed']}",
            f"Commands executed: {metrics['commandsExecuted']}",
            f"Failures: {metrics['commandsFailed']} | Denied: {metrics['permissionDenied']}",
            "",
            f"Memory: {system['memory']['used']}MB / {system['memory']['systemTotal']}MB",
            f"Uptime: {system['uptime']}",
            f"Python: {system['platform']['python']} on {system['platform']['os']}",
        ]

        return "\n".join(lines)

    @staticmethod
    def format_duration(seconds: int) -> str:
        """
        Format duration in human readable format.

        Args:
            seconds: Duration in seconds

        Returns:
            Formatted duration string
        """
        days = seconds // 86400
        hours = (seconds % 86400) // 3600
        mins = (seconds % 3600) // 60
        secs = seconds % 60

        parts: List[str] = []
        if days > 0:
            parts.append(f"{days}d")
        if hours > 0:
            parts.append(f"{hours}h")
        if mins > 0:
            parts.append(f"{mins}m")
        if secs > 0 or not parts:
            parts.append(f"{secs}s")

        return " ".join(parts)
