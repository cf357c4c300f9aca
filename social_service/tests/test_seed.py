from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

from social_service.app.scripts.seed import (
    SeedPointEvent,
    build_point_events,
    load_seed_data,
)


def test_load_seed_data_reads_point_events(tmp_path: Path) -> None:
    seed_file = tmp_path / "seed.yaml"
    seed_file.write_text(
        "users:\n"
        "  - name: John Doe\n"
        "    email: john@example.com\n"
        "    password: Password123\n"
        "point_events:\n"
        "  - email: john@example.com\n"
        "    fame_points: 5\n"
        "    days_ago: 2\n",
        encoding="utf-8",
    )

    data = load_seed_data(seed_file)

    assert [u.email for u in data.users] == ["john@example.com"]
    assert data.sections == [] and data.levels == []
    assert data.point_events == [
        SeedPointEvent(email="john@example.com", fame_points=5, days_ago=2)
    ]


def test_build_point_events_maps_users_and_skips_unknown() -> None:
    now = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
    events = [
        SeedPointEvent(email="john@example.com", fame_points=7, rich_points=3, days_ago=2),
        SeedPointEvent(email="ghost@example.com", fame_points=1),
    ]

    built = build_point_events({"john@example.com": "65f0000000000000000000aa"}, events, now)

    assert len(built) == 1
    assert built[0].user == "65f0000000000000000000aa"
    assert (built[0].fame_points, built[0].rich_points) == (7, 3)
    assert built[0].timestamp == now - timedelta(days=2)
