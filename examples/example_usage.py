"""Example: drive the service layer directly (no Flask).

Controllers stay thin; the use cases live in the services wired by the container.
"""

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "classroom_attendance"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from classroom_attendance.container import build_container
from classroom_attendance.database.bootstrap import DEMO_CLASS_CODE


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    record = container.class_service.get_by_code(DEMO_CLASS_CODE)
    if record is None:
        print("Demo class missing, run scripts/seed_db.py first")
        return

    print(record.as_json())
    print(container.stats_service.compute_stats(record.class_id).as_json())
    for line in container.enrollment_service.list_for_class(record.class_id):
        print(line.student.full_name, line.enrollment.enrolled_at)


if __name__ == "__main__":
    main()
