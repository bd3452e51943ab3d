#!/usr/bin/env python3
"""Direct launcher for the Expense Dashboard.

Starts Streamlit on ``expense_dashboard/dashboard.py`` with the project
root on the import path.
"""

import sys
import subprocess
from pathlib import Path

project_root = Path(__file__).parent.resolve()
dashboard_path = project_root / "expense_dashboard" / "dashboard.py"

if __name__ == "__main__":
    sys.path.insert(0, str(project_root))
    raise SystemExit(subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        str(dashboard_path),
        *sys.argv[1:],
    ]).returncode)
