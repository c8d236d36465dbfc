from __future__ import annotations

import threading
from datetime import datetime

from geo_attendance.core.exceptions import AlreadyCheckedInError

HQ_LAT = -6.2
HQ_LNG = 106.8


def test_simultaneous_checkins_create_one_record(service, current, attendance_repo):
    workers = 8
    barrier = threading.Barrier(workers)
    local = threading.local()

    def line_up():
        # Hold every thread after its first lookup so all of them see "no record yet".
        if not getattr(local, "waited", False):
            local.waited = True
            barrier.wait(timeout=5)

    attendance_repo.after_lookup = line_up

    now = datetime(2025, 3, 10, 7, 55)
    results: list[object] = []
    results_lock = threading.Lock()

    def attempt():
        try:
            outcome = service.check_in(current, latitude=HQ_LAT, longitude=HQ_LNG, now=now)
        except Exception as e:
            outcome = e
        with results_lock:
            results.append(outcome)

    threads = [threading.Thread(target=attempt) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    successes = [r for r in results if isinstance(r, dict)]
    duplicates = [r for r in results if isinstance(r, AlreadyCheckedInError)]

    assert len(results) == workers
    assert len(successes) == 1
    assert len(duplicates) == workers - 1
    assert all(d.data["check_in_time"] == "2025-03-10T07:55:00" for d in duplicates)
    assert attendance_repo.count(current.id) == 1
