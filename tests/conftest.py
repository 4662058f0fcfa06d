import os
import tempfile

# must be set before db.py is imported by any test module
_TMP = tempfile.mkdtemp(prefix="mathhill-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TMP}/mathhill-test.db")

from db import create_tables  # noqa: E402

create_tables()
