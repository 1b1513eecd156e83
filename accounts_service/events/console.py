"""Console publisher for local development."""

import json
from typing import Any

from accounts_service.events.serialization import to_dict


class ConsolePublisher:
    """Print events to stdout instead of sending them to a broker."""

    def __init__(self, pretty: bool = True) -> None:
        """Initialize console publisher.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        """
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def publish(self, topic: str, record: Any, key: str | None = None) -> None:
        """Print a single event."""
        data = to_dict(record)
        prefix = f"[{topic}]" if key is None else f"[{topic}:{key}]"
        if self.pretty:
            print(prefix, json.dumps(data, indent=2, ensure_ascii=False, default=str))
        else:
            print(prefix, json.dumps(data, ensure_ascii=False, default=str))
        self._counts[topic] = self._counts.get(topic, 0) + 1

    def close(self) -> None:
        """Print summary and close."""
        print(f"\n{'='*60}")
        print("Console Publisher Summary")
        print("=" * 60)
        for topic, count in self._counts.items():
            print(f"  {topic}: {count} events")
